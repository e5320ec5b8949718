"""Supabase repository for food log entries."""

from dataclasses import dataclass

from supabase import Client

from calorie_tracker.adapters.supabase_food_item_repository import (
    FOOD_ITEM_COLUMNS,
    parse_food_item,
)
from calorie_tracker.adapters.supabase_rows import (
    from_numeric,
    parse_timestamp,
    to_numeric,
)
from calorie_tracker.domain.food_log import FoodLogEntry, FoodLogEntryWithFood
from calorie_tracker.services.food_log import FoodLogRepository

ENTRY_COLUMNS = (
    "id, user_id, food_item_id, quantity_grams, total_calories, logged_date, "
    "created_at"
)
_NUMERIC_FIELDS = ("quantity_grams", "total_calories")


@dataclass
class SupabaseFoodLogRepository(FoodLogRepository):
    """Supabase implementation for food log entries."""

    client: Client

    def create_entry(  # noqa: PLR0913
        self,
        user_id: int,
        food_item_id: int,
        quantity_grams: float,
        total_calories: float,
        logged_date: str,
    ) -> FoodLogEntry:
        """Create a log entry row and return it."""
        response = (
            self.client.table("food_log_entries")
            .insert(
                {
                    "user_id": user_id,
                    "food_item_id": food_item_id,
                    "quantity_grams": to_numeric(quantity_grams),
                    "total_calories": to_numeric(total_calories),
                    "logged_date": logged_date,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food log entry")
        return _parse_entry(response.data[0])

    def get_entry(self, entry_id: int, user_id: int) -> FoodLogEntry | None:
        """Return the entry if it exists and belongs to the user."""
        response = (
            self.client.table("food_log_entries")
            .select(ENTRY_COLUMNS)
            .eq("id", entry_id)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def update_entry(
        self, entry_id: int, user_id: int, payload: dict[str, object]
    ) -> FoodLogEntry | None:
        """Apply changes to an owned entry and return the updated row."""
        encoded = dict(payload)
        for field_name in _NUMERIC_FIELDS:
            if field_name in encoded:
                encoded[field_name] = to_numeric(encoded[field_name])
        response = (
            self.client.table("food_log_entries")
            .update(encoded)
            .eq("id", entry_id)
            .eq("user_id", user_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def delete_entry(self, entry_id: int, user_id: int) -> bool:
        """Delete an owned entry, returning whether a row was removed."""
        response = (
            self.client.table("food_log_entries")
            .delete()
            .eq("id", entry_id)
            .eq("user_id", user_id)
            .execute()
        )
        return bool(response.data)

    def list_entries_for_date(
        self, user_id: int, logged_date: str
    ) -> list[FoodLogEntryWithFood]:
        """Return the user's entries for a date joined with their food items."""
        response = (
            self.client.table("food_log_entries")
            .select(f"{ENTRY_COLUMNS}, food_items!inner({FOOD_ITEM_COLUMNS})")
            .eq("user_id", user_id)
            .eq("logged_date", logged_date)
            .order("created_at", desc=False)
            .order("id", desc=False)
            .execute()
        )
        return [_parse_entry_with_food(row) for row in response.data or []]


def _parse_entry(row: dict[str, object]) -> FoodLogEntry:
    return FoodLogEntry(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        food_item_id=int(row["food_item_id"]),
        quantity_grams=from_numeric(row.get("quantity_grams")),
        total_calories=from_numeric(row.get("total_calories")),
        logged_date=str(row["logged_date"]),
        created_at=parse_timestamp(row["created_at"]),
    )


def _parse_entry_with_food(row: dict[str, object]) -> FoodLogEntryWithFood:
    entry = _parse_entry(row)
    return FoodLogEntryWithFood(
        id=entry.id,
        user_id=entry.user_id,
        food_item_id=entry.food_item_id,
        quantity_grams=entry.quantity_grams,
        total_calories=entry.total_calories,
        logged_date=entry.logged_date,
        created_at=entry.created_at,
        food_item=parse_food_item(row["food_items"]),
    )
