"""
Runway projection engine.

This module simulates a student's balance forward one calendar day at a time
to find how long the money lasts, the date it first goes negative, a coarse
health status, and the constant daily spend that would last a fixed horizon.

The engine is a pure function of its inputs: it reads no clock, performs no
I/O, keeps no state between calls and never mutates the records it is given.
"""

import datetime
import logging
import math
from typing import List, Literal, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .calendar_utils import (
    MAX_DUE_DAY,
    MIN_DUE_DAY,
    add_days,
    is_due_on,
    is_within,
    iter_days,
)
from .financials import IncomeEvent, RecurringObligation

logger = logging.getLogger(__name__)

# Projection horizon; bounds both compute and the size of daily_balances.
MAX_PROJECTION_DAYS = 365
SAFE_SPEND_TARGET_DAYS = 30

CRITICAL_THRESHOLD_DAYS = 7
WARNING_THRESHOLD_DAYS = 30

MIN_BALANCE = -1_000_000
MAX_BALANCE = 100_000_000
MAX_DAILY_SPEND = 100_000

RunwayStatus = Literal["good", "warning", "critical"]


class InvalidInput(ValueError):
    """Raised when projection input is non-finite, out of range or malformed."""


class ProjectionInput(BaseModel):
    """Everything the projector needs for one run."""

    model_config = ConfigDict(frozen=True)

    # Strict: booleans and numeric strings are rejected, never coerced
    current_balance: float = Field(
        ..., strict=True, description="Balance at the start date"
    )
    start_date: datetime.date = Field(..., description="First simulated day")
    obligations: List[RecurringObligation] = Field(
        default_factory=list, description="Recurring monthly obligations"
    )
    income_events: List[IncomeEvent] = Field(
        default_factory=list, description="Expected one-time income"
    )
    daily_variable_spend: float = Field(
        default=0.0, strict=True, description="Estimated uncommitted spend per day"
    )


class DailyBalance(BaseModel):
    """End-of-day balance for one simulated day."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date = Field(..., description="Simulated day")
    balance: int = Field(..., description="Balance after the day, floored")


class ProjectionResult(BaseModel):
    """Outcome of a runway projection."""

    model_config = ConfigDict(frozen=True)

    days_remaining: int = Field(..., ge=0, description="Consecutive solvent days")
    broke_date: datetime.date = Field(
        ..., description="First negative day, or the day after the horizon"
    )
    safe_daily_spend: int = Field(..., ge=0, description="Advisory daily spend cap")
    status: RunwayStatus = Field(..., description="Health classification")
    daily_balances: List[DailyBalance] = Field(
        default_factory=list, description="One entry per survived day, oldest first"
    )
    broke_balance: Optional[int] = Field(
        default=None, description="Floored balance on the broke date, if reached"
    )


class ProjectionOutcome(BaseModel):
    """Non-raising wrapper around a projection."""

    model_config = ConfigDict(frozen=True)

    success: bool
    result: Optional[ProjectionResult] = None
    error: Optional[str] = None


def classify_status(days_remaining: int) -> RunwayStatus:
    """Map a runway length to its status band."""
    if days_remaining < CRITICAL_THRESHOLD_DAYS:
        return "critical"
    if days_remaining < WARNING_THRESHOLD_DAYS:
        return "warning"
    return "good"


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_calendar_date(value: object) -> bool:
    return isinstance(value, datetime.date) and not isinstance(
        value, datetime.datetime
    )


def validate_projection_input(projection_input: ProjectionInput) -> None:
    """
    Check every precondition of a projection, failing on the first violation.

    Checks run in a fixed order (balance, spend, start date, obligations,
    income events) so the reported error is deterministic.

    Raises:
        InvalidInput: If any field is non-finite, out of range or malformed
    """
    balance = projection_input.current_balance
    if not _is_number(balance) or not math.isfinite(balance):
        raise InvalidInput(f"Invalid balance: must be a finite number, got {balance}")
    if balance < MIN_BALANCE:
        raise InvalidInput(f"Balance too low: {balance} (minimum: {MIN_BALANCE:,})")
    if balance > MAX_BALANCE:
        raise InvalidInput(f"Balance too high: {balance} (maximum: {MAX_BALANCE:,})")

    spend = projection_input.daily_variable_spend
    if not _is_number(spend) or not math.isfinite(spend):
        raise InvalidInput(
            f"Invalid daily spend: must be a finite number, got {spend}"
        )
    if spend < 0:
        raise InvalidInput(f"Daily spend cannot be negative: {spend}")
    if spend > MAX_DAILY_SPEND:
        raise InvalidInput(
            f"Daily spend unrealistically high: {spend} (maximum: {MAX_DAILY_SPEND:,})"
        )

    if not _is_calendar_date(projection_input.start_date):
        raise InvalidInput(f"Invalid start date: {projection_input.start_date!r}")

    for obligation in projection_input.obligations:
        validate_obligation(obligation)

    for income_event in projection_input.income_events:
        validate_income_event(income_event)


def validate_obligation(obligation: RecurringObligation) -> None:
    """Reject an obligation with a bad amount or due day."""
    amount = obligation.amount
    if not _is_number(amount) or not math.isfinite(amount) or amount <= 0:
        raise InvalidInput(f'Invalid expense amount for "{obligation.name}": {amount}')
    due_day = obligation.due_day
    if (
        not isinstance(due_day, int)
        or isinstance(due_day, bool)
        or not MIN_DUE_DAY <= due_day <= MAX_DUE_DAY
    ):
        raise InvalidInput(
            f'Invalid due day for "{obligation.name}": {due_day} '
            f"(must be {MIN_DUE_DAY}-{MAX_DUE_DAY})"
        )


def validate_income_event(income_event: IncomeEvent) -> None:
    """Reject an income event with a bad amount or date."""
    amount = income_event.amount
    if not _is_number(amount) or not math.isfinite(amount) or amount <= 0:
        raise InvalidInput(
            f'Invalid income amount for "{income_event.source}": {amount}'
        )
    if not _is_calendar_date(income_event.date):
        raise InvalidInput(
            f'Invalid income date for "{income_event.source}": {income_event.date!r}'
        )


def income_on(income_events: Sequence[IncomeEvent], day: datetime.date) -> float:
    """Total income dated exactly on `day`."""
    return sum(event.amount for event in income_events if event.date == day)


def obligations_due_on(
    obligations: Sequence[RecurringObligation], day: datetime.date
) -> float:
    """Total obligations charged on `day`, with due days clamped to month end."""
    return sum(
        obligation.amount
        for obligation in obligations
        if is_due_on(obligation.due_day, day)
    )


def calculate_safe_daily_spend(
    balance: float,
    start_date: datetime.date,
    obligations: Sequence[RecurringObligation],
    income_events: Sequence[IncomeEvent],
    target_days: int = SAFE_SPEND_TARGET_DAYS,
) -> int:
    """
    Estimate the largest constant daily spend that lasts `target_days` days.

    This is an averaging heuristic, not a guarantee: money available over the
    window (balance, plus income dated in [start, start + target_days], minus
    obligations falling due in the first `target_days` days) is divided evenly,
    without re-simulating the order in which the balance is drawn down.

    Args:
        balance: Starting balance
        start_date: First day of the window
        obligations: Recurring obligations
        income_events: Expected income
        target_days: Length of the window in days

    Returns:
        Whole currency units per day, never negative

    Raises:
        InvalidInput: If target_days is not a positive integer
    """
    if (
        not isinstance(target_days, int)
        or isinstance(target_days, bool)
        or target_days < 1
    ):
        raise InvalidInput(
            f"Target days must be a positive integer, got {target_days}"
        )

    window_end = add_days(start_date, target_days)
    available = balance + sum(
        event.amount
        for event in income_events
        if is_within(event.date, start_date, window_end)
    )

    for day in iter_days(start_date, target_days):
        available -= obligations_due_on(obligations, day)

    if available <= 0:
        return 0
    return math.floor(available / target_days)


class RunwayProjector:
    """Day-by-day runway simulator with a fixed projection horizon."""

    def __init__(
        self,
        max_days: int = MAX_PROJECTION_DAYS,
        safe_spend_target_days: int = SAFE_SPEND_TARGET_DAYS,
    ):
        """Initialize the projector.

        Args:
            max_days: Simulation horizon in days
            safe_spend_target_days: Window used for the safe daily spend
        """
        if max_days < 1:
            raise ValueError("max_days must be at least 1")
        if safe_spend_target_days < 1:
            raise ValueError("safe_spend_target_days must be at least 1")
        self.max_days = max_days
        self.safe_spend_target_days = safe_spend_target_days

    def project(self, projection_input: ProjectionInput) -> ProjectionResult:
        """
        Run a runway projection.

        A day whose closing balance is exactly zero is survived; the first day
        that closes below zero is the broke date and is not counted.

        Args:
            projection_input: Balance, start date, obligations, income and spend

        Returns:
            ProjectionResult for the input

        Raises:
            InvalidInput: If any precondition is violated
        """
        try:
            validate_projection_input(projection_input)
        except InvalidInput as e:
            logger.debug(f"Rejected projection input: {e}")
            raise

        start_date = projection_input.start_date

        if projection_input.current_balance < 0:
            return ProjectionResult(
                days_remaining=0,
                broke_date=start_date,
                safe_daily_spend=0,
                status="critical",
                daily_balances=[],
            )

        balance = float(projection_input.current_balance)
        obligations = projection_input.obligations
        income_events = projection_input.income_events
        spend = projection_input.daily_variable_spend

        current_date = start_date
        days_survived = 0
        broke_balance: Optional[int] = None
        daily_balances: List[DailyBalance] = []

        while days_survived < self.max_days:
            balance += income_on(income_events, current_date)
            balance -= obligations_due_on(obligations, current_date)
            balance -= spend

            if balance < 0:
                broke_balance = math.floor(balance)
                break

            daily_balances.append(
                DailyBalance(date=current_date, balance=math.floor(balance))
            )
            days_survived += 1
            current_date = add_days(current_date, 1)

        safe_spend = calculate_safe_daily_spend(
            projection_input.current_balance,
            start_date,
            obligations,
            income_events,
            self.safe_spend_target_days,
        )

        return ProjectionResult(
            days_remaining=days_survived,
            broke_date=current_date,
            safe_daily_spend=safe_spend,
            status=classify_status(days_survived),
            daily_balances=daily_balances,
            broke_balance=broke_balance,
        )

    def project_safe(self, projection_input: ProjectionInput) -> ProjectionOutcome:
        """Run a projection, reporting invalid input instead of raising."""
        try:
            result = self.project(projection_input)
        except InvalidInput as e:
            return ProjectionOutcome(success=False, error=str(e))
        return ProjectionOutcome(success=True, result=result)


def calculate_runway(
    current_balance: float,
    start_date: datetime.date,
    obligations: Sequence[RecurringObligation] = (),
    income_events: Sequence[IncomeEvent] = (),
    daily_variable_spend: float = 0.0,
) -> ProjectionResult:
    """
    Build a ProjectionInput from plain arguments and project it.

    Obligations and income events may also be given as dicts, which are
    validated by their models before the projector sees them.

    Raises:
        InvalidInput: If the arguments cannot form a valid projection input
    """
    try:
        projection_input = ProjectionInput(
            current_balance=current_balance,
            start_date=start_date,
            obligations=list(obligations),
            income_events=list(income_events),
            daily_variable_spend=daily_variable_spend,
        )
    except ValidationError as e:
        raise InvalidInput(f"Invalid projection input: {e}") from e
    return RunwayProjector().project(projection_input)
