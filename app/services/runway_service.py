"""
Runway service combining the stored profile and financials into a projection.

This is the glue between persistence and the pure projection engine: it reads
the current snapshots, derives the daily variable spend from the profile and
hands everything to RunwayProjector.
"""

import logging
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from app.models.profile import estimate_daily_variable_spend
from app.models.runway import ProjectionInput, ProjectionResult, RunwayProjector
from app.models.runway_metrics import RunwaySummary, summarize_projection

from .financials_service import FinancialsService
from .profile_service import ProfileService

logger = logging.getLogger(__name__)


class RunwayReport(BaseModel):
    """Projection for the stored profile, with the inputs derived for it."""

    projection: ProjectionResult = Field(..., description="Projection result")
    estimated_daily_spend: int = Field(
        ..., ge=0, description="Daily variable spend derived from the profile"
    )
    summary: RunwaySummary = Field(..., description="Balance series summary")


class RunwayService:
    """Run the runway projection for the stored student profile."""

    def __init__(
        self,
        profile_service: ProfileService,
        financials_service: FinancialsService,
        projector: Optional[RunwayProjector] = None,
    ):
        self.profile_service = profile_service
        self.financials_service = financials_service
        self.projector = projector or RunwayProjector()

    def build_input(self, start_date: date) -> ProjectionInput:
        """
        Build a projection input from the stored profile and financials.

        Raises:
            ProfileNotFoundError: If no profile exists
        """
        profile = self.profile_service.require_profile()
        financials = self.financials_service.get_financials()
        return ProjectionInput(
            current_balance=profile.current_balance,
            start_date=start_date,
            obligations=financials.obligations,
            income_events=financials.income_events,
            daily_variable_spend=estimate_daily_variable_spend(profile),
        )

    def calculate(self, start_date: Optional[date] = None) -> RunwayReport:
        """
        Project the stored profile's runway.

        Args:
            start_date: First simulated day (defaults to today)

        Returns:
            RunwayReport for the stored data

        Raises:
            ProfileNotFoundError: If no profile exists
            InvalidInput: If the stored data cannot be projected
        """
        start_date = start_date or date.today()
        projection_input = self.build_input(start_date)
        projection = self.projector.project(projection_input)

        logger.info(
            f"Runway from {start_date}: {projection.days_remaining} days "
            f"({projection.status})"
        )

        return RunwayReport(
            projection=projection,
            estimated_daily_spend=int(projection_input.daily_variable_spend),
            summary=summarize_projection(projection, projection_input.current_balance),
        )
