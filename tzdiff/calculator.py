"""
Signed hour difference between two timezones at one instant.
"""
import logging
from datetime import datetime
from typing import Callable, Optional, Tuple

from tzdiff.errors import TimezoneResolutionError
from tzdiff.models import DifferenceResult
from tzdiff.timezone_utils import now_utc, utc_offset_minutes

logger = logging.getLogger(__name__)


class OffsetDifferenceCalculator:
    """Compare UTC offsets of two timezones, accounting for DST."""

    def __init__(self, clock: Callable[[], datetime] = now_utc):
        self.clock = clock

    def offsets(self, tz1: str, tz2: str, at: datetime) -> Tuple[int, int]:
        """Both offsets in minutes, evaluated at the same instant."""
        return utc_offset_minutes(tz1, at), utc_offset_minutes(tz2, at)

    def strict_difference(self, tz1: str, tz2: str,
                          at: Optional[datetime] = None) -> DifferenceResult:
        """
        Compute how many hours tz2 is ahead of tz1.

        Raises:
            TimezoneResolutionError: If either identifier is unknown
        """
        if at is None:
            at = self.clock()
        offset1, offset2 = self.offsets(tz1, tz2, at)
        hours = (offset2 - offset1) / 60.0
        logger.debug("Offsets at %s: %s=%s min, %s=%s min, difference %s h",
                     at.isoformat(), tz1, offset1, tz2, offset2, hours)
        return DifferenceResult(timezone1=tz1, timezone2=tz2, difference_hours=hours)

    def difference(self, tz1: str, tz2: str, at: Optional[datetime] = None) -> DifferenceResult:
        """
        Like strict_difference, but an unknown timezone yields a zero
        difference with ``error`` set instead of raising.
        """
        try:
            return self.strict_difference(tz1, tz2, at)
        except TimezoneResolutionError as e:
            logger.warning("Error calculating timezone difference between %r and %r: %s",
                           tz1, tz2, e.message)
            return DifferenceResult(timezone1=tz1, timezone2=tz2,
                                    difference_hours=0.0, error=e.message)
