"""Data models and calculation engine for student runway planning."""

from .financials import FinancialData, IncomeEvent, RecurringObligation
from .profile import ProfileCreate, StudentProfile, estimate_daily_variable_spend
from .runway import (
    DailyBalance,
    InvalidInput,
    ProjectionInput,
    ProjectionOutcome,
    ProjectionResult,
    RunwayProjector,
    calculate_runway,
    calculate_safe_daily_spend,
    classify_status,
)
from .runway_metrics import RunwaySummary, summarize_projection

__all__ = [
    "RecurringObligation",
    "IncomeEvent",
    "FinancialData",
    "ProfileCreate",
    "StudentProfile",
    "estimate_daily_variable_spend",
    "DailyBalance",
    "InvalidInput",
    "ProjectionInput",
    "ProjectionOutcome",
    "ProjectionResult",
    "RunwayProjector",
    "calculate_runway",
    "calculate_safe_daily_spend",
    "classify_status",
    "RunwaySummary",
    "summarize_projection",
]
