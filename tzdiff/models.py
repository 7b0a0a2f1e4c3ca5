"""
Data models for timezone resolution and offset differences.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union


@dataclass(frozen=True)
class GeoLookupResult:
    """Timezone found for a network address."""

    timezone: str


@dataclass(frozen=True)
class ResolvedVisitorContext:
    """Effective timezone of an unauthenticated visitor for one request."""

    user_timezone: str


@dataclass(frozen=True)
class DifferenceResult:
    """Signed hour difference between two timezones at one instant.

    Positive means timezone2 is ahead of timezone1. ``error`` is set when an
    identifier could not be resolved and the difference fell back to zero.
    """

    timezone1: str
    timezone2: str
    difference_hours: float
    error: Optional[str] = None

    @property
    def is_masked(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class UserRecord:
    """Public view of a stored user."""

    username: str
    timezone: str
    email: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'timezone': self.timezone,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class AnonymousViewer:
    """Visitor who is not signed in; compared by their resolved timezone."""

    visitor_timezone: str


@dataclass(frozen=True)
class AuthenticatedViewer:
    """Signed-in user; compared by the timezone stored on their account."""

    username: str


Viewer = Union[AnonymousViewer, AuthenticatedViewer]


@dataclass(frozen=True)
class DifferenceResponse:
    """Outcome of a timezone-diff request, labelled by role."""

    user_timezone: str  # profile owner
    visitor_timezone: str  # viewer
    difference_hours: float

    @classmethod
    def from_result(cls, result: DifferenceResult) -> 'DifferenceResponse':
        return cls(
            user_timezone=result.timezone2,
            visitor_timezone=result.timezone1,
            difference_hours=result.difference_hours,
        )

    def to_dict(self) -> dict:
        return {
            'userTimezone': self.user_timezone,
            'visitorTimezone': self.visitor_timezone,
            'differenceHours': self.difference_hours,
        }
