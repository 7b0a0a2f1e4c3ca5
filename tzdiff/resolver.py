"""
Visitor timezone resolution: IP geolocation, then override, then default.
"""
import logging
from typing import Optional

from tzdiff.models import ResolvedVisitorContext
from tzdiff.ports import GeoLookup
from tzdiff.timezone_utils import DEFAULT_TIMEZONE

logger = logging.getLogger(__name__)


class VisitorTimezoneResolver:
    """Turn a client address plus optional override into one timezone name."""

    def __init__(self, geo_lookup: GeoLookup, default_timezone: str = DEFAULT_TIMEZONE):
        self.geo_lookup = geo_lookup
        self.default_timezone = default_timezone or DEFAULT_TIMEZONE

    def resolve(self, remote_address: Optional[str], override: Optional[str] = None) -> str:
        """
        Resolve the effective timezone for a visitor.

        IP-based detection wins whenever it yields a timezone. The override is
        used verbatim and is not validated here; a bad value surfaces later in
        the difference calculation.

        Args:
            remote_address: Client network address (may be empty or private)
            override: Optional timezone supplied by the client

        Returns:
            A timezone identifier, never None
        """
        geo = self.geo_lookup.lookup_timezone(remote_address)
        if geo is not None and geo.timezone:
            logger.debug("Using IP-based timezone %s for %s", geo.timezone, remote_address)
            return geo.timezone

        if override:
            logger.debug("IP lookup gave nothing for %s, using override %s", remote_address, override)
            return override

        logger.debug("No timezone for %s, defaulting to %s", remote_address, self.default_timezone)
        return self.default_timezone

    def resolve_context(self, remote_address: Optional[str],
                        override: Optional[str] = None) -> ResolvedVisitorContext:
        return ResolvedVisitorContext(user_timezone=self.resolve(remote_address, override))
