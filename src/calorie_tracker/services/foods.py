"""Services for managing the user food catalog."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from calorie_tracker.domain.foods import FoodItem
from calorie_tracker.domain.models import DeleteResult
from calorie_tracker.domain.updates import FoodItemUpdate, is_set
from calorie_tracker.errors import ConflictError, NotFoundError
from calorie_tracker.services.auth import UserRepository
from calorie_tracker.services.validation import require_amount, require_name

logger = logging.getLogger(__name__)

FOOD_ITEM_NOT_FOUND = "Food item not found or access denied"


class FoodItemRepository(Protocol):
    """Persistence interface for catalog items.

    Lookups, updates and deletes filter on both the item id and the owning
    user id, so an item owned by someone else behaves as if it were absent.
    """

    def create_food_item(
        self, user_id: int, name: str, calories_per_100g: float, created_at: datetime
    ) -> FoodItem:
        """Create a food item and return it."""

    def list_food_items(self, user_id: int) -> list[FoodItem]:
        """Return the user's items ordered by name."""

    def get_food_item(self, food_item_id: int, user_id: int) -> FoodItem | None:
        """Return the item if it exists and belongs to the user."""

    def update_food_item(
        self, food_item_id: int, user_id: int, payload: dict[str, object]
    ) -> FoodItem | None:
        """Apply changes to an owned item and return the updated row."""

    def delete_food_item(self, food_item_id: int, user_id: int) -> bool:
        """Delete an owned item, returning whether a row was removed."""

    def has_log_entries(self, food_item_id: int) -> bool:
        """Return true when any log entry references the item."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class FoodCatalogService:
    """Application service for catalog operations."""

    users: UserRepository
    repository: FoodItemRepository
    clock: Callable[[], datetime] = _utc_now

    def create_food_item(
        self, user_id: int, name: str, calories_per_100g: float
    ) -> FoodItem:
        """Create a catalog item for an existing user."""
        require_name(name)
        rate = require_amount(calories_per_100g, "calories_per_100g")
        if self.users.get_by_id(user_id) is None:
            raise NotFoundError("User not found")
        item = self.repository.create_food_item(
            user_id=user_id,
            name=name,
            calories_per_100g=rate,
            created_at=self.clock(),
        )
        logger.info(
            "Created food item", extra={"user_id": user_id, "food_item_id": item.id}
        )
        return item

    def list_food_items(self, user_id: int) -> list[FoodItem]:
        """Return the user's catalog sorted by name."""
        return sorted(self.repository.list_food_items(user_id), key=_by_name)

    def update_food_item(
        self, food_item_id: int, user_id: int, update: FoodItemUpdate
    ) -> FoodItem:
        """Apply a partial update and refresh the update timestamp."""
        payload: dict[str, object] = {}
        if is_set(update.name):
            payload["name"] = require_name(update.name)
        if is_set(update.calories_per_100g):
            payload["calories_per_100g"] = require_amount(
                update.calories_per_100g, "calories_per_100g"
            )
        current = self.repository.get_food_item(food_item_id, user_id)
        if current is None:
            raise NotFoundError(FOOD_ITEM_NOT_FOUND)
        payload["updated_at"] = self._next_timestamp(current.updated_at)
        updated = self.repository.update_food_item(food_item_id, user_id, payload)
        if updated is None:
            raise NotFoundError(FOOD_ITEM_NOT_FOUND)
        logger.info(
            "Updated food item",
            extra={"user_id": user_id, "food_item_id": food_item_id},
        )
        return updated

    def delete_food_item(self, food_item_id: int, user_id: int) -> DeleteResult:
        """Delete an item that no log entry references."""
        if self.repository.get_food_item(food_item_id, user_id) is None:
            raise NotFoundError(FOOD_ITEM_NOT_FOUND)
        if self.repository.has_log_entries(food_item_id):
            logger.warning(
                "Refused to delete referenced food item",
                extra={"user_id": user_id, "food_item_id": food_item_id},
            )
            raise ConflictError("Cannot delete food item that has logged entries")
        if not self.repository.delete_food_item(food_item_id, user_id):
            raise NotFoundError(FOOD_ITEM_NOT_FOUND)
        logger.info(
            "Deleted food item",
            extra={"user_id": user_id, "food_item_id": food_item_id},
        )
        return DeleteResult(success=True)

    def _next_timestamp(self, previous: datetime) -> datetime:
        now = self.clock()
        if previous.tzinfo is None:
            previous = previous.replace(tzinfo=UTC)
        if now <= previous:
            return previous + timedelta(microseconds=1)
        return now


def _by_name(item: FoodItem) -> str:
    return item.name
