"""
IP to timezone lookup service with database caching.
Uses ip-api.com (45 requests/minute free tier, no API key required).
"""
import ipaddress
import logging
from typing import Optional

import requests
from sqlalchemy.exc import SQLAlchemyError

from flask_app.models import db, IPGeolocation
from tzdiff.config_loader import AppSettings
from tzdiff.models import GeoLookupResult

logger = logging.getLogger(__name__)


class GeolocationService:
    """Service to lookup and cache the timezone of IP addresses."""

    def __init__(self, settings: Optional[AppSettings] = None):
        settings = settings or AppSettings()
        self.api_url = settings.geo_api_url
        self.timeout = settings.geo_timeout

    def lookup_timezone(self, ip_address: Optional[str]) -> Optional[GeoLookupResult]:
        """
        Lookup the timezone for an IP address.
        Returns cached result if available, otherwise performs API lookup.

        Args:
            ip_address: IP address to lookup, optionally with a port

        Returns:
            GeoLookupResult, or None for private, malformed or unknown addresses
        """
        normalized_ip = self._normalize_ip(ip_address)
        if not normalized_ip:
            return None

        # Private/local addresses have no public location (don't lookup)
        if self._is_private_ip(normalized_ip):
            logger.debug("Skipping timezone lookup for local address %s", normalized_ip)
            return None

        # Check cache first; an unreadable cache counts as a miss
        try:
            cached = IPGeolocation.query.filter_by(ip_address=normalized_ip).first()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.warning("Could not read cached timezone for %s: %s", normalized_ip, e)
            cached = None
        if cached:
            return GeoLookupResult(timezone=cached.timezone) if cached.timezone else None

        # Perform API lookup
        try:
            response = requests.get(
                self.api_url.format(ip=normalized_ip),
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.warning("Error looking up IP %s: %s", normalized_ip, e)
            # Don't cache failures - allow retry later
            return None

        tz_name = None
        if response.status_code == 200:
            try:
                data = response.json()
            except ValueError:
                data = {}
            if not isinstance(data, dict):
                data = {}

            # Check for API error response
            if data.get('status') == 'fail':
                logger.info("IP lookup failed for %s: %s", normalized_ip, data.get('message'))
            else:
                tz_name = data.get('timezone')
                if not isinstance(tz_name, str) or not tz_name:
                    tz_name = None
        else:
            logger.warning("IP lookup for %s returned HTTP %s", normalized_ip, response.status_code)

        # Cache unknowns too, to prevent repeated failed requests
        self._cache(normalized_ip, tz_name)
        return GeoLookupResult(timezone=tz_name) if tz_name else None

    def _cache(self, ip_address: str, tz_name: Optional[str]) -> None:
        try:
            db.session.add(IPGeolocation(ip_address=ip_address, timezone=tz_name))
            db.session.commit()
        except SQLAlchemyError as e:
            # A concurrent request may have cached the same address first
            db.session.rollback()
            logger.warning("Could not cache timezone for %s: %s", ip_address, e)

    def _normalize_ip(self, ip_address: Optional[str]) -> Optional[str]:
        """Normalize IP string for caching and lookup."""
        if not ip_address:
            return None

        ip = str(ip_address).strip().lower()
        if ip in ('', 'unknown'):
            return None

        # Strip port for IPv4/host:port format.
        if ip.count(':') == 1:
            host, port = ip.rsplit(':', 1)
            if port.isdigit():
                ip = host

        # IPv4-mapped IPv6, e.g. ::ffff:203.0.113.7
        if ip.startswith('::ffff:') and '.' in ip:
            ip = ip[len('::ffff:'):]

        return ip

    def _is_private_ip(self, ip_address: str) -> bool:
        """Check if IP is private/local, or not an IP address at all."""
        if ip_address == 'localhost':
            return True
        try:
            ip = ipaddress.ip_address(ip_address)
        except ValueError:
            return True

        return (ip.is_private or ip.is_loopback or ip.is_link_local
                or ip.is_unspecified or ip.is_reserved or ip.is_multicast)
