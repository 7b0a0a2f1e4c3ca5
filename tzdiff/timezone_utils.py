"""
Timezone utilities shared across the app.
"""

from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from tzdiff.errors import TimezoneResolutionError

DEFAULT_TIMEZONE = 'UTC'


def load_timezone(tz_name: Optional[str]) -> ZoneInfo:
    """Return the ZoneInfo for an IANA name or raise TimezoneResolutionError."""
    if not tz_name or not isinstance(tz_name, str):
        raise TimezoneResolutionError(tz_name)
    try:
        return ZoneInfo(tz_name)
    # ValueError covers malformed keys, OSError a directory such as "Europe"
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise TimezoneResolutionError(tz_name) from exc


def is_valid_timezone(tz_name: Optional[str]) -> bool:
    try:
        load_timezone(tz_name)
    except TimezoneResolutionError:
        return False
    return True


def now_utc() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(at: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones."""
    if at.tzinfo is None:
        return at.replace(tzinfo=timezone.utc)
    return at.astimezone(timezone.utc)


def utc_offset_minutes(tz_name: str, at: datetime) -> int:
    """
    UTC offset in minutes observed in a timezone at a given instant.

    Args:
        tz_name: IANA timezone identifier (e.g., 'Europe/Istanbul')
        at: The instant; naive values are taken as UTC

    Returns:
        Offset in minutes, positive east of UTC

    Raises:
        TimezoneResolutionError: If tz_name is not a known timezone
    """
    tz = load_timezone(tz_name)
    offset = as_utc(at).astimezone(tz).utcoffset()
    return int(offset.total_seconds() / 60) if offset else 0
