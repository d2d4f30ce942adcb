"""
Pydantic models for a student's recurring obligations and expected income.

These are the persisted financial records that feed the runway projection.
They are frozen once created: collections are replaced, never mutated.
"""

import datetime
import uuid
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

ObligationCategory = Literal[
    "housing", "transport", "utilities", "subscriptions", "other"
]
IncomeReliability = Literal["certain", "likely", "uncertain"]


def _new_id() -> str:
    return str(uuid.uuid4())


class RecurringObligation(BaseModel):
    """
    A fixed cost charged on a nominal day of every month (rent, Netflix).

    The model itself rejects out-of-range due days and non-positive amounts at
    construction; the projector re-checks records built without validation.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: str = Field(default_factory=_new_id, description="Obligation identifier")
    name: str = Field(..., min_length=1, description="Obligation name")
    amount: float = Field(
        ..., strict=True, gt=0, description="Amount charged each month"
    )
    due_day: int = Field(
        ..., strict=True, ge=1, le=31, description="Nominal day of month due"
    )
    category: ObligationCategory = Field(
        default="other", description="Obligation category"
    )


class IncomeEvent(BaseModel):
    """A one-time expected inflow on a specific date."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: str = Field(default_factory=_new_id, description="Income event identifier")
    amount: float = Field(..., strict=True, gt=0, description="Amount expected")
    date: datetime.date = Field(..., description="Date the income arrives")
    source: str = Field(..., min_length=1, description="Where the money comes from")
    reliability: IncomeReliability = Field(
        default="certain", description="How sure the student is (advisory)"
    )
    is_received: bool = Field(
        default=False, description="Whether the money already arrived (advisory)"
    )


class FinancialData(BaseModel):
    """All financial records for a student, stored as one document."""

    model_config = ConfigDict(frozen=True)

    obligations: List[RecurringObligation] = Field(
        default_factory=list, description="Recurring monthly obligations"
    )
    income_events: List[IncomeEvent] = Field(
        default_factory=list, description="Expected one-time income"
    )

    def with_obligation(self, obligation: RecurringObligation) -> "FinancialData":
        """Return a copy with the obligation appended."""
        return self.model_copy(
            update={"obligations": [*self.obligations, obligation]}
        )

    def without_obligation(self, obligation_id: str) -> "FinancialData":
        """Return a copy without the obligation with the given id."""
        return self.model_copy(
            update={
                "obligations": [o for o in self.obligations if o.id != obligation_id]
            }
        )

    def with_income_event(self, income_event: IncomeEvent) -> "FinancialData":
        """Return a copy with the income event appended."""
        return self.model_copy(
            update={"income_events": [*self.income_events, income_event]}
        )

    def without_income_event(self, income_event_id: str) -> "FinancialData":
        """Return a copy without the income event with the given id."""
        return self.model_copy(
            update={
                "income_events": [
                    e for e in self.income_events if e.id != income_event_id
                ]
            }
        )
