"""Domain models for food logging."""

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from calorie_tracker.domain.foods import FoodItem

CALORIE_PRECISION = Decimal("0.01")


@dataclass(frozen=True)
class FoodLogEntry:
    """A quantity of one catalog item eaten on one calendar date."""

    id: int
    user_id: int
    food_item_id: int
    quantity_grams: float
    total_calories: float
    logged_date: str
    created_at: datetime


@dataclass(frozen=True)
class FoodLogEntryWithFood:
    """Log entry joined with the catalog item it references."""

    id: int
    user_id: int
    food_item_id: int
    quantity_grams: float
    total_calories: float
    logged_date: str
    created_at: datetime
    food_item: FoodItem


@dataclass(frozen=True)
class DailySummary:
    """Entries and calorie total for one user on one date."""

    date: str
    total_calories: float
    entries: list[FoodLogEntryWithFood]


def compute_total_calories(calories_per_100g: float, quantity_grams: float) -> float:
    """Return calories for a portion, rounded to the stored precision."""
    rate = Decimal(str(calories_per_100g))
    grams = Decimal(str(quantity_grams))
    total = (rate * grams / Decimal(100)).quantize(
        CALORIE_PRECISION, rounding=ROUND_HALF_UP
    )
    return float(total)
