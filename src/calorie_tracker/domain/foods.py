"""Domain models for the food catalog."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class FoodItem:
    """Represents a food in a user's catalog."""

    id: int
    user_id: int
    name: str
    calories_per_100g: float
    created_at: datetime
    updated_at: datetime
