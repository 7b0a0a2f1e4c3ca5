"""
Error taxonomy for timezone-diff requests.

Each error carries the HTTP status the web layer reports it with.
"""
from typing import List, Optional


class TimezoneDiffError(Exception):
    """Base class for per-request failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SelfComparisonError(TimezoneDiffError):
    """A signed-in user asked for the difference against their own profile."""

    status_code = 400

    def __init__(self, username: str):
        super().__init__('Cannot view timezone difference for own profile')
        self.username = username


class UserNotFoundError(TimezoneDiffError):
    status_code = 404

    def __init__(self, username: Optional[str], role: str = 'target'):
        message = 'Current user not found' if role == 'viewer' else 'User not found'
        super().__init__(message)
        self.username = username
        self.role = role


class TimezoneResolutionError(TimezoneDiffError):
    """An identifier is not a known IANA timezone."""

    status_code = 400

    def __init__(self, timezone: Optional[str]):
        super().__init__(f'Unknown timezone: {timezone!r}')
        self.timezone = timezone


class StoreUnavailableError(TimezoneDiffError):
    """The user store failed (connectivity, constraint, driver error)."""

    status_code = 503

    def __init__(self, message: str = 'Database error'):
        super().__init__(message)


class DuplicateUserError(TimezoneDiffError):
    status_code = 400

    def __init__(self):
        super().__init__('Username or email already exists')


class InvalidCredentialsError(TimezoneDiffError):
    status_code = 401

    def __init__(self):
        super().__init__('Invalid username or password')


class ValidationError(TimezoneDiffError):
    """Request body failed validation; ``errors`` lists every problem."""

    status_code = 400

    def __init__(self, errors: List[str]):
        super().__init__(errors[0] if errors else 'Invalid request')
        self.errors = list(errors)
