"""Food log service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from calorie_tracker.domain.food_log import (
    FoodLogEntry,
    FoodLogEntryWithFood,
    compute_total_calories,
)
from calorie_tracker.domain.foods import FoodItem
from calorie_tracker.domain.models import DeleteResult
from calorie_tracker.domain.updates import FoodLogEntryUpdate, is_set
from calorie_tracker.errors import NotFoundError
from calorie_tracker.services.auth import UserRepository
from calorie_tracker.services.foods import FOOD_ITEM_NOT_FOUND, FoodItemRepository
from calorie_tracker.services.validation import (
    require_amount,
    require_calendar_date,
    require_id,
)

logger = logging.getLogger(__name__)

ENTRY_NOT_FOUND = "Food log entry not found or access denied"


class FoodLogRepository(Protocol):
    """Persistence interface for food log entries."""

    def create_entry(  # noqa: PLR0913
        self,
        user_id: int,
        food_item_id: int,
        quantity_grams: float,
        total_calories: float,
        logged_date: str,
    ) -> FoodLogEntry:
        """Create a log entry and return it."""

    def get_entry(self, entry_id: int, user_id: int) -> FoodLogEntry | None:
        """Return the entry if it exists and belongs to the user."""

    def update_entry(
        self, entry_id: int, user_id: int, payload: dict[str, object]
    ) -> FoodLogEntry | None:
        """Apply changes to an owned entry and return the updated row."""

    def delete_entry(self, entry_id: int, user_id: int) -> bool:
        """Delete an owned entry, returning whether a row was removed."""

    def list_entries_for_date(
        self, user_id: int, logged_date: str
    ) -> list[FoodLogEntryWithFood]:
        """Return the user's entries for a date joined with their food items."""


@dataclass
class FoodLogService:
    """Service that computes calories and persists log entries."""

    users: UserRepository
    foods: FoodItemRepository
    repository: FoodLogRepository

    def create_entry(
        self,
        user_id: int,
        food_item_id: int,
        quantity_grams: float,
        logged_date: str,
    ) -> FoodLogEntry:
        """Log a portion of one of the user's own food items."""
        quantity = require_amount(quantity_grams, "quantity_grams")
        require_calendar_date(logged_date, "logged_date")
        if self.users.get_by_id(user_id) is None:
            raise NotFoundError("User not found")
        food_item = self.foods.get_food_item(food_item_id, user_id)
        if food_item is None:
            raise NotFoundError("Food item not found or does not belong to user")
        entry = self.repository.create_entry(
            user_id=user_id,
            food_item_id=food_item.id,
            quantity_grams=quantity,
            total_calories=_portion_calories(food_item, quantity),
            logged_date=logged_date,
        )
        logger.info("Logged food", extra={"user_id": user_id, "entry_id": entry.id})
        return entry

    def update_entry(
        self, entry_id: int, user_id: int, update: FoodLogEntryUpdate
    ) -> FoodLogEntry:
        """Apply a partial update, recomputing calories when needed."""
        if is_set(update.food_item_id):
            require_id(update.food_item_id, "food_item_id")
        quantity: float | None = None
        if is_set(update.quantity_grams):
            quantity = require_amount(update.quantity_grams, "quantity_grams")
        if is_set(update.logged_date):
            require_calendar_date(update.logged_date, "logged_date")

        existing = self.repository.get_entry(entry_id, user_id)
        if existing is None:
            raise NotFoundError(ENTRY_NOT_FOUND)

        payload: dict[str, object] = {}
        food_item: FoodItem | None = None
        if is_set(update.food_item_id):
            food_item = self.foods.get_food_item(update.food_item_id, user_id)
            if food_item is None:
                raise NotFoundError(FOOD_ITEM_NOT_FOUND)
            payload["food_item_id"] = food_item.id
        if is_set(update.quantity_grams):
            payload["quantity_grams"] = quantity
        if is_set(update.logged_date):
            payload["logged_date"] = update.logged_date

        if update.changes_calories():
            if food_item is None:
                food_item = self.foods.get_food_item(existing.food_item_id, user_id)
                if food_item is None:
                    raise NotFoundError(FOOD_ITEM_NOT_FOUND)
            payload["total_calories"] = _portion_calories(
                food_item, existing.quantity_grams if quantity is None else quantity
            )

        if not payload:
            return existing
        updated = self.repository.update_entry(entry_id, user_id, payload)
        if updated is None:
            raise NotFoundError(ENTRY_NOT_FOUND)
        logger.info(
            "Updated food log entry", extra={"user_id": user_id, "entry_id": entry_id}
        )
        return updated

    def delete_entry(self, entry_id: int, user_id: int) -> DeleteResult:
        """Delete one of the user's entries."""
        if not self.repository.delete_entry(entry_id, user_id):
            raise NotFoundError(ENTRY_NOT_FOUND)
        logger.info(
            "Deleted food log entry", extra={"user_id": user_id, "entry_id": entry_id}
        )
        return DeleteResult(success=True)


def _portion_calories(food_item: FoodItem, quantity_grams: float) -> float:
    total = compute_total_calories(food_item.calories_per_100g, quantity_grams)
    return require_amount(total, "total_calories")
