"""
Decides which two timezones a timezone-diff request compares.

The viewer is always the first argument to the calculator and the profile
owner the second, so a positive difference means the owner is ahead.
"""
import logging
from datetime import datetime
from typing import Optional

from tzdiff.calculator import OffsetDifferenceCalculator
from tzdiff.errors import SelfComparisonError, UserNotFoundError
from tzdiff.models import (
    AnonymousViewer,
    AuthenticatedViewer,
    DifferenceResponse,
    ResolvedVisitorContext,
    UserRecord,
    Viewer,
)
from tzdiff.ports import UserStore

logger = logging.getLogger(__name__)


class DifferenceRequestOrchestrator:
    """Per-request policy for signed-in and anonymous viewers."""

    def __init__(self, user_store: UserStore,
                 calculator: Optional[OffsetDifferenceCalculator] = None):
        self.user_store = user_store
        self.calculator = calculator or OffsetDifferenceCalculator()

    @staticmethod
    def select_viewer(signed_in: bool, current_username: Optional[str],
                      visitor_context: ResolvedVisitorContext) -> Viewer:
        if signed_in:
            if not current_username:
                # no account can match an empty username
                raise UserNotFoundError(current_username, role='viewer')
            return AuthenticatedViewer(username=current_username)
        return AnonymousViewer(visitor_timezone=visitor_context.user_timezone)

    def compute_for_request(self, target_username: str, signed_in: bool,
                            current_username: Optional[str],
                            visitor_context: ResolvedVisitorContext,
                            at: Optional[datetime] = None) -> DifferenceResponse:
        """
        Compute the difference between the viewer and the profile owner.

        Raises:
            SelfComparisonError: Signed-in viewer asked about their own profile
            UserNotFoundError: Viewer or target is not stored, or signed in
                without a current username
            StoreUnavailableError: The user store failed
        """
        viewer = self.select_viewer(signed_in, current_username, visitor_context)
        return self.compute_for_viewer(target_username, viewer, at)

    def compute_for_viewer(self, target_username: str, viewer: Viewer,
                           at: Optional[datetime] = None) -> DifferenceResponse:
        if isinstance(viewer, AuthenticatedViewer):
            if viewer.username == target_username:
                raise SelfComparisonError(viewer.username)
            viewer_tz = self._require_user(viewer.username, role='viewer').timezone
            logger.debug("Signed-in viewer %s (%s) looking at %s",
                         viewer.username, viewer_tz, target_username)
        else:
            viewer_tz = viewer.visitor_timezone
            logger.debug("Anonymous viewer (%s) looking at %s", viewer_tz, target_username)

        owner_tz = self._require_user(target_username, role='target').timezone
        result = self.calculator.difference(viewer_tz, owner_tz, at)
        return DifferenceResponse.from_result(result)

    def _require_user(self, username: str, role: str) -> UserRecord:
        user = self.user_store.find_by_username(username)
        if user is None:
            logger.warning("%s user not found: %s", role.capitalize(), username)
            raise UserNotFoundError(username, role=role)
        return user
