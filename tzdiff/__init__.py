"""
Timezone Diff

Resolve a visitor's timezone and compute the signed hour difference between
two IANA timezones at the current instant.
"""

from tzdiff.calculator import OffsetDifferenceCalculator
from tzdiff.models import (
    AnonymousViewer,
    AuthenticatedViewer,
    DifferenceResponse,
    DifferenceResult,
    GeoLookupResult,
    ResolvedVisitorContext,
    UserRecord,
)
from tzdiff.orchestrator import DifferenceRequestOrchestrator
from tzdiff.resolver import VisitorTimezoneResolver

__version__ = "0.1.0"
__all__ = [
    "VisitorTimezoneResolver",
    "OffsetDifferenceCalculator",
    "DifferenceRequestOrchestrator",
    "AnonymousViewer",
    "AuthenticatedViewer",
    "DifferenceResponse",
    "DifferenceResult",
    "GeoLookupResult",
    "ResolvedVisitorContext",
    "UserRecord",
]
