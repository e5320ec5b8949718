"""Supabase implementation for the food catalog."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client, PostgrestAPIError

from calorie_tracker.adapters.supabase_rows import (
    from_numeric,
    parse_timestamp,
    to_numeric,
    to_timestamp,
)
from calorie_tracker.domain.foods import FoodItem
from calorie_tracker.errors import ConflictError
from calorie_tracker.services.foods import FoodItemRepository

FOREIGN_KEY_VIOLATION = "23503"
FOOD_ITEM_COLUMNS = "id, user_id, name, calories_per_100g, created_at, updated_at"


@dataclass
class SupabaseFoodItemRepository(FoodItemRepository):
    """Supabase-backed repository for catalog items."""

    client: Client

    def create_food_item(
        self, user_id: int, name: str, calories_per_100g: float, created_at: datetime
    ) -> FoodItem:
        """Create a food item and return it."""
        response = (
            self.client.table("food_items")
            .insert(
                {
                    "user_id": user_id,
                    "name": name,
                    "calories_per_100g": to_numeric(calories_per_100g),
                    "created_at": to_timestamp(created_at),
                    "updated_at": to_timestamp(created_at),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food item")
        return parse_food_item(response.data[0])

    def list_food_items(self, user_id: int) -> list[FoodItem]:
        """Return the user's items ordered by name."""
        response = (
            self.client.table("food_items")
            .select(FOOD_ITEM_COLUMNS)
            .eq("user_id", user_id)
            .order("name", desc=False)
            .execute()
        )
        return [parse_food_item(row) for row in response.data or []]

    def get_food_item(self, food_item_id: int, user_id: int) -> FoodItem | None:
        """Return the item if it exists and belongs to the user."""
        response = (
            self.client.table("food_items")
            .select(FOOD_ITEM_COLUMNS)
            .eq("id", food_item_id)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_food_item(response.data[0])

    def update_food_item(
        self, food_item_id: int, user_id: int, payload: dict[str, object]
    ) -> FoodItem | None:
        """Apply changes to an owned item and return the updated row."""
        response = (
            self.client.table("food_items")
            .update(_encode_payload(payload))
            .eq("id", food_item_id)
            .eq("user_id", user_id)
            .execute()
        )
        if not response.data:
            return None
        return parse_food_item(response.data[0])

    def delete_food_item(self, food_item_id: int, user_id: int) -> bool:
        """Delete an owned item, returning whether a row was removed."""
        try:
            response = (
                self.client.table("food_items")
                .delete()
                .eq("id", food_item_id)
                .eq("user_id", user_id)
                .execute()
            )
        except PostgrestAPIError as exc:
            if exc.code == FOREIGN_KEY_VIOLATION:
                raise ConflictError(
                    "Cannot delete food item that has logged entries"
                ) from exc
            raise
        return bool(response.data)

    def has_log_entries(self, food_item_id: int) -> bool:
        """Return true when any log entry references the item."""
        response = (
            self.client.table("food_log_entries")
            .select("id")
            .eq("food_item_id", food_item_id)
            .limit(1)
            .execute()
        )
        return bool(response.data)


def _encode_payload(payload: dict[str, object]) -> dict[str, object]:
    encoded = dict(payload)
    if "calories_per_100g" in encoded:
        encoded["calories_per_100g"] = to_numeric(encoded["calories_per_100g"])
    if isinstance(encoded.get("updated_at"), datetime):
        encoded["updated_at"] = to_timestamp(encoded["updated_at"])
    return encoded


def parse_food_item(row: dict[str, object]) -> FoodItem:
    """Parse a food_items row into a domain model."""
    return FoodItem(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        name=str(row.get("name", "")),
        calories_per_100g=from_numeric(row.get("calories_per_100g")),
        created_at=parse_timestamp(row["created_at"]),
        updated_at=parse_timestamp(row["updated_at"]),
    )
