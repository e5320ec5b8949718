"""Daily calorie summaries."""

from dataclasses import dataclass
from decimal import Decimal

from calorie_tracker.domain.food_log import DailySummary, FoodLogEntryWithFood
from calorie_tracker.errors import NotFoundError
from calorie_tracker.services.auth import UserRepository
from calorie_tracker.services.food_log import FoodLogRepository
from calorie_tracker.services.validation import require_calendar_date


@dataclass
class DailyLogService:
    """Service for reading a user's log for one calendar date."""

    users: UserRepository
    repository: FoodLogRepository

    def get_daily_log(self, user_id: int, date: str) -> DailySummary:
        """Return the entries logged on ``date`` and their calorie total.

        ``date`` is compared as a calendar string with no timezone handling.
        The total sums the stored per-entry values rather than recomputing them
        from current food rates.
        """
        require_calendar_date(date)
        if self.users.get_by_id(user_id) is None:
            raise NotFoundError("User not found")
        entries = sorted(
            (
                entry
                for entry in self.repository.list_entries_for_date(user_id, date)
                if entry.logged_date == date
            ),
            key=lambda entry: (entry.created_at, entry.id),
        )
        return DailySummary(
            date=date,
            total_calories=_sum_calories(entries),
            entries=entries,
        )


def _sum_calories(entries: list[FoodLogEntryWithFood]) -> float:
    total = Decimal(0)
    for entry in entries:
        total += Decimal(str(entry.total_calories))
    return float(total)
