"""
Form validation utilities.
"""
from typing import List, Dict, Any

from tzdiff.timezone_utils import is_valid_timezone


def _missing(data: Dict[str, Any], key: str) -> bool:
    value = data.get(key)
    return not isinstance(value, str) or not value.strip()


def validate_signup(data: Dict[str, Any]) -> List[str]:
    """
    Validate signup data.

    Args:
        data: Dictionary with 'username', 'email', 'timezone', 'password'

    Returns:
        List of error messages (empty if valid)
    """
    if any(_missing(data, key) for key in ('username', 'email', 'timezone', 'password')):
        return ['All fields are required']

    errors = []

    if '@' not in data['email']:
        errors.append('Email address is invalid.')

    # Stored timezones must be usable in difference calculations later
    if not is_valid_timezone(data['timezone'].strip()):
        errors.append(f'Unknown timezone: {data["timezone"]}')

    return errors


def validate_login(data: Dict[str, Any]) -> List[str]:
    """Validate login data; returns a list of error messages."""
    if _missing(data, 'username') or _missing(data, 'password'):
        return ['Username and password are required']
    return []


def parse_signed_in(value: Any) -> bool:
    """Only the exact string 'true' counts as signed in."""
    return value == 'true'
