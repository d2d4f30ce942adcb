"""
Tests for the profile, financials and runway services.
"""

from datetime import date
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from app.models.financials import IncomeEvent, RecurringObligation
from app.models.profile import ProfileCreate
from app.models.runway import InvalidInput, RunwayProjector
from app.services import (
    FinancialsService,
    ProfileNotFoundError,
    ProfileService,
    RunwayService,
)


def onboarding_form(**overrides):
    data = {
        "name": "Otieno",
        "campus_type": "town",
        "living_arrangement": "on-campus",
        "food_habits": "mostly-buy",
        "transport_pattern": "walking",
        "current_balance": 3000,
        "cheapest_meal_cost": 50,
    }
    data.update(overrides)
    return ProfileCreate(**data)


@pytest.fixture
def profile_service(storage):
    return ProfileService(storage)


@pytest.fixture
def financials_service(storage):
    return FinancialsService(storage)


@pytest.fixture
def runway_service(profile_service, financials_service):
    return RunwayService(profile_service, financials_service)


class TestProfileService:
    """Test profile lifecycle."""

    def test_no_profile_initially(self, profile_service):
        assert profile_service.get_profile() is None
        assert profile_service.has_profile() is False
        with pytest.raises(ProfileNotFoundError):
            profile_service.require_profile()

    def test_create_and_get(self, profile_service):
        created = profile_service.create_profile(onboarding_form())

        assert profile_service.has_profile() is True
        assert profile_service.get_profile() == created

    def test_update(self, profile_service):
        created = profile_service.create_profile(onboarding_form())
        updated = profile_service.update_profile(current_balance=1200)

        assert updated.current_balance == 1200
        assert updated.id == created.id
        assert updated.created_at == created.created_at
        assert updated.last_updated >= created.last_updated
        assert profile_service.get_profile().current_balance == 1200

    def test_update_without_profile(self, profile_service):
        with pytest.raises(ProfileNotFoundError):
            profile_service.update_profile(current_balance=10)

    def test_update_rejects_protected_fields(self, profile_service):
        profile_service.create_profile(onboarding_form())
        with pytest.raises(ValueError, match="protected fields"):
            profile_service.update_profile(id="someone-else")

    def test_update_is_validated(self, profile_service):
        profile_service.create_profile(onboarding_form())
        with pytest.raises(ValidationError):
            profile_service.update_profile(food_habits="fasting")
        assert profile_service.get_profile().food_habits == "mostly-buy"

    @pytest.mark.parametrize("cost", [0, 5001, 1e308])
    def test_update_keeps_meal_cost_limits(self, profile_service, cost):
        profile_service.create_profile(onboarding_form())
        with pytest.raises(ValidationError):
            profile_service.update_profile(cheapest_meal_cost=cost)
        assert profile_service.get_profile().cheapest_meal_cost == 50

    def test_reset(self, profile_service):
        profile_service.create_profile(onboarding_form())

        assert profile_service.reset_profile() is True
        assert profile_service.get_profile() is None
        assert profile_service.reset_profile() is False

    def test_services_share_storage(self, storage):
        """Test two service instances over one store see the same profile."""
        writer = ProfileService(storage)
        reader = ProfileService(storage)

        writer.create_profile(onboarding_form())
        writer.update_profile(name="Akinyi")

        assert reader.get_profile().name == "Akinyi"


class TestFinancialsService:
    """Test adding and removing financial records."""

    def test_empty_initially(self, financials_service):
        data = financials_service.get_financials()
        assert data.obligations == []
        assert data.income_events == []

    def test_add_and_remove_obligation(self, financials_service):
        rent = RecurringObligation(name="Rent", amount=2500, due_day=1)
        financials_service.add_obligation(rent)

        assert financials_service.get_financials().obligations == [rent]
        assert financials_service.remove_obligation(rent.id) is True
        assert financials_service.get_financials().obligations == []
        assert financials_service.remove_obligation(rent.id) is False

    def test_add_and_remove_income_event(self, financials_service):
        event = IncomeEvent(amount=4000, date=date(2025, 2, 10), source="HELB")
        financials_service.add_income_event(event)

        assert financials_service.get_financials().income_events == [event]
        assert financials_service.remove_income_event(event.id) is True
        assert financials_service.remove_income_event(event.id) is False

    def test_previous_snapshot_unchanged(self, financials_service):
        before = financials_service.get_financials()
        financials_service.add_obligation(
            RecurringObligation(name="Wifi", amount=500, due_day=10)
        )
        assert before.obligations == []


class TestRunwayService:
    """Test runway calculation from stored data."""

    def test_requires_profile(self, runway_service):
        with pytest.raises(ProfileNotFoundError):
            runway_service.calculate(date(2025, 2, 1))

    def test_calculate(self, runway_service, profile_service, financials_service):
        profile_service.create_profile(onboarding_form())
        financials_service.add_obligation(
            RecurringObligation(name="Rent", amount=1000, due_day=3, category="housing")
        )
        financials_service.add_income_event(
            IncomeEvent(amount=600, date=date(2025, 2, 5), source="Mom")
        )

        report = runway_service.calculate(date(2025, 2, 1))

        # mostly-buy: 50 * 3.0 = 150 per day
        assert report.estimated_daily_spend == 150
        # Rent on Feb 3 and income on Feb 5 leave 50 at the end of Feb 17
        assert report.projection.days_remaining == 17
        assert report.projection.broke_date == date(2025, 2, 18)
        assert report.projection.status == "warning"
        assert report.projection.safe_daily_spend == 86
        assert report.summary.days_projected == 17
        assert report.summary.ending_balance == 50

    def test_defaults_to_today(self, runway_service, profile_service):
        profile_service.create_profile(onboarding_form())

        report = runway_service.calculate()

        assert report.projection.daily_balances[0].date == date.today()

    def test_invalid_stored_balance_is_reported(
        self, runway_service, profile_service
    ):
        profile_service.create_profile(onboarding_form())
        profile_service.update_profile(current_balance=500_000_000)

        with pytest.raises(InvalidInput, match="Balance too high"):
            runway_service.calculate(date(2025, 2, 1))

    def test_uses_injected_projector(self, profile_service, financials_service):
        profile_service.create_profile(onboarding_form())
        service = RunwayService(
            profile_service, financials_service, RunwayProjector(max_days=5)
        )

        report = service.calculate(date(2025, 2, 1))
        assert report.projection.days_remaining == 5

    def test_logs_projection(self, runway_service, profile_service):
        profile_service.create_profile(onboarding_form())
        with patch("app.services.runway_service.logger") as mock_logger:
            runway_service.calculate(date(2025, 2, 1))
        mock_logger.info.assert_called_once()
