"""Partial update payloads.

Fields default to ``UNSET`` so that "leave unchanged" is distinct from any
value a caller could supply.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final, Literal


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset.UNSET
Unset = Literal[_Unset.UNSET]


def is_set(value: object) -> bool:
    """Return true when a field was supplied."""
    return value is not UNSET


@dataclass(frozen=True)
class FoodItemUpdate:
    """Fields to change on a food item."""

    name: str | Unset = UNSET
    calories_per_100g: float | Unset = UNSET


@dataclass(frozen=True)
class FoodLogEntryUpdate:
    """Fields to change on a food log entry."""

    food_item_id: int | Unset = UNSET
    quantity_grams: float | Unset = UNSET
    logged_date: str | Unset = UNSET

    def changes_calories(self) -> bool:
        """Return true when the update affects the derived calorie total."""
        return is_set(self.food_item_id) or is_set(self.quantity_grams)
