"""Tests for obligation, income and financial data models."""

import math
from datetime import date

import pytest
from pydantic import ValidationError

from app.models.financials import FinancialData, IncomeEvent, RecurringObligation


class TestRecurringObligation:
    """Test the RecurringObligation model."""

    def test_creation(self):
        obligation = RecurringObligation(
            name="Rent", amount=8000, due_day=5, category="housing"
        )

        assert obligation.name == "Rent"
        assert obligation.amount == 8000
        assert obligation.due_day == 5
        assert obligation.category == "housing"
        assert len(obligation.id) == 36

    def test_default_category(self):
        assert RecurringObligation(name="Misc", amount=1, due_day=1).category == "other"

    def test_ids_are_unique(self):
        first = RecurringObligation(name="A", amount=1, due_day=1)
        second = RecurringObligation(name="A", amount=1, due_day=1)
        assert first.id != second.id

    @pytest.mark.parametrize("due_day", [0, 32, 55])
    def test_due_day_range(self, due_day):
        with pytest.raises(ValidationError):
            RecurringObligation(name="Rent", amount=100, due_day=due_day)

    @pytest.mark.parametrize("amount", [0, -10, math.inf, math.nan])
    def test_amount_must_be_positive_and_finite(self, amount):
        with pytest.raises(ValidationError):
            RecurringObligation(name="Rent", amount=amount, due_day=1)

    def test_unknown_category(self):
        with pytest.raises(ValidationError):
            RecurringObligation(name="Rent", amount=1, due_day=1, category="food")

    def test_frozen(self):
        obligation = RecurringObligation(name="Rent", amount=100, due_day=1)
        with pytest.raises(ValidationError):
            obligation.amount = 200


class TestIncomeEvent:
    """Test the IncomeEvent model."""

    def test_creation(self):
        event = IncomeEvent(amount=5000, date=date(2025, 3, 1), source="HELB loan")

        assert event.amount == 5000
        assert event.date == date(2025, 3, 1)
        assert event.reliability == "certain"
        assert event.is_received is False

    def test_parses_iso_date(self):
        event = IncomeEvent(amount=5000, date="2025-03-01", source="Mom")
        assert event.date == date(2025, 3, 1)

    def test_rejects_bad_reliability(self):
        with pytest.raises(ValidationError):
            IncomeEvent(amount=1, date=date(2025, 3, 1), source="Mom", reliability="sure")

    def test_rejects_empty_source(self):
        with pytest.raises(ValidationError):
            IncomeEvent(amount=1, date=date(2025, 3, 1), source="")

    def test_rejects_non_positive_amount(self):
        with pytest.raises(ValidationError):
            IncomeEvent(amount=0, date=date(2025, 3, 1), source="Mom")


class TestFinancialData:
    """Test FinancialData copy-on-write helpers."""

    def test_empty_by_default(self):
        data = FinancialData()
        assert data.obligations == []
        assert data.income_events == []

    def test_with_and_without_obligation(self):
        rent = RecurringObligation(name="Rent", amount=100, due_day=1)
        original = FinancialData()

        added = original.with_obligation(rent)
        assert added.obligations == [rent]
        assert original.obligations == []

        removed = added.without_obligation(rent.id)
        assert removed.obligations == []
        assert added.obligations == [rent]

    def test_with_and_without_income_event(self):
        event = IncomeEvent(amount=10, date=date(2025, 1, 1), source="Job")
        added = FinancialData().with_income_event(event)

        assert added.income_events == [event]
        assert added.without_income_event("missing").income_events == [event]
        assert added.without_income_event(event.id).income_events == []

    def test_json_roundtrip(self):
        data = FinancialData(
            obligations=[RecurringObligation(name="Rent", amount=100, due_day=31)],
            income_events=[IncomeEvent(amount=10, date=date(2025, 1, 1), source="Job")],
        )
        assert FinancialData.model_validate_json(data.model_dump_json()) == data
