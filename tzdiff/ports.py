"""
Collaborator interfaces consumed by the resolver and orchestrator.
"""
from typing import Optional, Protocol

from tzdiff.models import GeoLookupResult, UserRecord


class GeoLookup(Protocol):
    def lookup_timezone(self, ip_address: Optional[str]) -> Optional[GeoLookupResult]:
        """Return the timezone for an address, or None. Must not raise."""
        ...


class UserStore(Protocol):
    def find_by_username(self, username: str) -> Optional[UserRecord]:
        """Return the user, or None if no such username is stored."""
        ...
