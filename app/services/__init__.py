"""Services wiring storage to the runway engine."""

from .financials_service import FinancialsService
from .profile_service import ProfileNotFoundError, ProfileService
from .runway_service import RunwayReport, RunwayService

__all__ = [
    "FinancialsService",
    "ProfileNotFoundError",
    "ProfileService",
    "RunwayReport",
    "RunwayService",
]
