"""
Wires visitor resolution and the difference orchestrator for one request.
"""
from datetime import datetime
from typing import Optional

from flask_app.services.geolocation_service import GeolocationService
from flask_app.services.user_service import UserService
from tzdiff.calculator import OffsetDifferenceCalculator
from tzdiff.config_loader import AppSettings
from tzdiff.models import DifferenceResponse
from tzdiff.orchestrator import DifferenceRequestOrchestrator
from tzdiff.ports import GeoLookup, UserStore
from tzdiff.resolver import VisitorTimezoneResolver


class TimezoneDiffService:
    """Service computing the viewer/owner timezone difference."""

    def __init__(self, settings: Optional[AppSettings] = None,
                 geo_lookup: Optional[GeoLookup] = None,
                 user_store: Optional[UserStore] = None,
                 calculator: Optional[OffsetDifferenceCalculator] = None):
        settings = settings or AppSettings()
        self.resolver = VisitorTimezoneResolver(
            geo_lookup or GeolocationService(settings),
            default_timezone=settings.default_timezone,
        )
        self.orchestrator = DifferenceRequestOrchestrator(
            user_store or UserService(),
            calculator or OffsetDifferenceCalculator(),
        )

    def get_difference(self, target_username: str, signed_in: bool,
                       current_username: Optional[str], remote_address: Optional[str],
                       override: Optional[str] = None,
                       at: Optional[datetime] = None) -> DifferenceResponse:
        """
        Resolve the visitor's timezone, then compare viewer and profile owner.

        The visitor is resolved for every request, signed in or not, so the
        lookup behaves the same regardless of branch.
        """
        visitor_context = self.resolver.resolve_context(remote_address, override)
        return self.orchestrator.compute_for_request(
            target_username,
            signed_in=signed_in,
            current_username=current_username,
            visitor_context=visitor_context,
            at=at,
        )
