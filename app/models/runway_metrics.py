"""
Summary statistics over a runway projection.

This module condenses the daily balance series of a ProjectionResult into a
few numbers the dashboard shows next to the headline runway: the low point,
the closing balance and the average day-over-day change.
"""

import datetime
from typing import Optional

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, Field

from .runway import ProjectionResult


class RunwaySummary(BaseModel):
    """Condensed view of a projection's balance series."""

    days_projected: int = Field(..., ge=0, description="Number of survived days")
    lowest_balance: Optional[int] = Field(
        default=None, description="Lowest end-of-day balance"
    )
    lowest_balance_date: Optional[datetime.date] = Field(
        default=None, description="First day the lowest balance is reached"
    )
    ending_balance: Optional[int] = Field(
        default=None, description="Balance at the end of the last survived day"
    )
    average_daily_change: float = Field(
        default=0.0, description="Mean day-over-day balance change"
    )
    days_below_buffer: int = Field(
        default=0, ge=0, description="Survived days closing below the buffer"
    )


def balance_series(result: ProjectionResult) -> NDArray[np.float64]:
    """Get the end-of-day balances of a projection as an array."""
    return np.array([day.balance for day in result.daily_balances], dtype=np.float64)


def summarize_projection(
    result: ProjectionResult, starting_balance: float, buffer: float = 0.0
) -> RunwaySummary:
    """
    Summarize the balance series of a projection.

    Args:
        result: Projection to summarize
        starting_balance: Balance before the first simulated day
        buffer: Balance below which a day counts as tight

    Returns:
        RunwaySummary for the projection
    """
    balances = balance_series(result)

    if balances.size == 0:
        return RunwaySummary(days_projected=0)

    lowest_index = int(np.argmin(balances))
    changes = np.diff(np.concatenate(([starting_balance], balances)))

    return RunwaySummary(
        days_projected=int(balances.size),
        lowest_balance=int(balances[lowest_index]),
        lowest_balance_date=result.daily_balances[lowest_index].date,
        ending_balance=int(balances[-1]),
        average_daily_change=float(np.mean(changes)),
        days_below_buffer=int(np.sum(balances < buffer)),
    )
