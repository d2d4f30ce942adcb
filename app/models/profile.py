"""
Student profile captured during onboarding.

The profile holds the context the runway screen needs (campus, living and
eating habits) plus the current balance, and provides the heuristic that turns
food habits into an estimated daily variable spend.
"""

import math
import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

CampusType = Literal["rural", "town", "city"]
LivingArrangement = Literal["on-campus", "off-campus-shared", "off-campus-alone"]
FoodHabit = Literal["mostly-cook", "mostly-buy", "mixed"]
TransportPattern = Literal["walking", "public-transport", "mixed"]

# Meals per day implied by each food habit (breakfast/snacks included)
DAILY_MEAL_MULTIPLIERS = {
    "mostly-cook": 1.8,
    "mostly-buy": 3.0,
    "mixed": 2.5,
}

MAX_ONBOARDING_BALANCE = 10_000_000
MAX_MEAL_COST = 5_000


class ProfileCreate(BaseModel):
    """Onboarding form submission."""

    model_config = ConfigDict(allow_inf_nan=False)

    name: str = Field(..., description="Student's name")
    campus_type: CampusType = Field(default="town", description="Campus setting")
    living_arrangement: LivingArrangement = Field(
        default="off-campus-shared", description="Where the student lives"
    )
    food_habits: FoodHabit = Field(default="mixed", description="Cooking habits")
    transport_pattern: TransportPattern = Field(
        default="walking", description="How the student gets around"
    )
    current_balance: float = Field(
        ...,
        strict=True,
        ge=0,
        le=MAX_ONBOARDING_BALANCE,
        description="Money available right now",
    )
    cheapest_meal_cost: float = Field(
        ...,
        strict=True,
        gt=0,
        le=MAX_MEAL_COST,
        description="Cost of the cheapest meal nearby",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Strip the name and require it to be non-empty."""
        v = v.strip()
        if not v:
            raise ValueError("Please enter your name")
        return v


class StudentProfile(BaseModel):
    """Persisted student profile."""

    model_config = ConfigDict(allow_inf_nan=False, validate_assignment=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = Field(..., min_length=1, description="Student's name")
    created_at: datetime = Field(default_factory=datetime.now)
    last_updated: datetime = Field(default_factory=datetime.now)

    campus_type: CampusType
    living_arrangement: LivingArrangement
    food_habits: FoodHabit
    transport_pattern: TransportPattern

    # Same meal cost bounds as onboarding so updates can't bypass them
    cheapest_meal_cost: float = Field(
        ..., strict=True, gt=0, le=MAX_MEAL_COST, description="Cheapest meal cost"
    )
    current_balance: float = Field(
        ..., strict=True, description="Current balance snapshot"
    )

    @classmethod
    def from_onboarding(cls, form: ProfileCreate) -> "StudentProfile":
        """Create a new profile from a validated onboarding form."""
        now = datetime.now()
        return cls(created_at=now, last_updated=now, **form.model_dump())


def estimate_daily_variable_spend(profile: StudentProfile) -> int:
    """
    Estimate uncommitted daily spend from the profile's food habits.

    Uses the cheapest meal cost times the number of meals implied by the
    student's cooking habits, rounded up to a whole currency unit.
    """
    multiplier = DAILY_MEAL_MULTIPLIERS[profile.food_habits]
    # Round first so float noise (100 * 1.8 == 180.00000000000003) can't bump it up
    return math.ceil(round(profile.cheapest_meal_cost * multiplier, 6))
