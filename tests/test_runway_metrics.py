"""Tests for projection summary statistics."""

from datetime import date

import pytest

from app.models.financials import RecurringObligation
from app.models.runway import calculate_runway
from app.models.runway_metrics import (
    RunwaySummary,
    balance_series,
    summarize_projection,
)


class TestSummarizeProjection:
    """Test summarize_projection."""

    def test_linear_burn(self):
        result = calculate_runway(
            current_balance=1000, start_date=date(2025, 1, 1), daily_variable_spend=100
        )
        summary = summarize_projection(result, starting_balance=1000)

        assert summary.days_projected == 10
        assert summary.lowest_balance == 0
        assert summary.lowest_balance_date == date(2025, 1, 10)
        assert summary.ending_balance == 0
        assert summary.average_daily_change == pytest.approx(-100.0)
        assert summary.days_below_buffer == 0

    def test_lowest_point_before_recovery(self):
        result = calculate_runway(
            current_balance=1000,
            start_date=date(2025, 1, 1),
            obligations=[RecurringObligation(name="Rent", amount=900, due_day=2)],
            daily_variable_spend=0,
        )
        summary = summarize_projection(result, starting_balance=1000)

        assert summary.lowest_balance == 100
        assert summary.lowest_balance_date == date(2025, 1, 2)

    def test_buffer_counts_tight_days(self):
        result = calculate_runway(
            current_balance=500, start_date=date(2025, 1, 1), daily_variable_spend=100
        )
        summary = summarize_projection(result, starting_balance=500, buffer=250)

        # Balances 400, 300, 200, 100, 0
        assert summary.days_below_buffer == 3

    def test_empty_projection(self):
        result = calculate_runway(current_balance=-5, start_date=date(2025, 1, 1))
        summary = summarize_projection(result, starting_balance=-5)

        assert summary == RunwaySummary(days_projected=0)
        assert summary.lowest_balance is None
        assert summary.lowest_balance_date is None


class TestBalanceSeries:
    """Test conversion of daily balances to an array."""

    def test_balance_series(self):
        result = calculate_runway(
            current_balance=300, start_date=date(2025, 1, 1), daily_variable_spend=100
        )
        series = balance_series(result)

        assert series.tolist() == [200.0, 100.0, 0.0]
        assert series.dtype.name == "float64"
