"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from itertools import count

import pytest

from calorie_tracker.adapters.supabase_rows import from_numeric, to_numeric
from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.food_log import FoodLogEntry, FoodLogEntryWithFood
from calorie_tracker.domain.foods import FoodItem
from calorie_tracker.domain.models import UserRecord
from calorie_tracker.services.auth import AuthService, UserRepository
from calorie_tracker.services.daily_log import DailyLogService
from calorie_tracker.services.food_log import FoodLogRepository, FoodLogService
from calorie_tracker.services.foods import FoodCatalogService, FoodItemRepository
from calorie_tracker.services.passwords import WerkzeugPasswordHasher

FAST_HASH_METHOD = "pbkdf2:sha256:1000"
SERVICE_KEY = "eyJhbGciOiJIUzI1NiJ9.eyJyb2xlIjoic2VydmljZSJ9.signature"
NUMERIC_FIELDS = ("calories_per_100g", "quantity_grams", "total_calories")


def stored_numeric(value: float) -> float:
    """Return a number as it reads back from a numeric(8, 2) column."""
    return from_numeric(to_numeric(value))


def _stored_payload(payload: dict[str, object]) -> dict[str, object]:
    return {
        key: stored_numeric(value) if key in NUMERIC_FIELDS else value
        for key, value in payload.items()
    }


class TickingClock:
    """Clock that advances one second per call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2024, 1, 15, 8, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[int, UserRecord] = field(default_factory=dict)
    ids: count = field(default_factory=lambda: count(1))

    def get_by_id(self, user_id: int) -> UserRecord | None:
        return self.users.get(user_id)

    def get_by_email(self, email: str) -> UserRecord | None:
        for user in self.users.values():
            if user.email == email:
                return user
        return None

    def create_user(self, email: str, password_hash: str, name: str) -> UserRecord:
        user = UserRecord(
            id=next(self.ids),
            email=email,
            password_hash=password_hash,
            name=name,
            created_at=datetime.now(tz=UTC),
        )
        self.users[user.id] = user
        return user


@dataclass
class InMemoryFoodLogRepository(FoodLogRepository):
    """In-memory food log repository for tests."""

    entries: dict[int, FoodLogEntry] = field(default_factory=dict)
    foods: dict[int, FoodItem] = field(default_factory=dict)
    ids: count = field(default_factory=lambda: count(1))
    clock: TickingClock = field(default_factory=TickingClock)

    def create_entry(  # noqa: PLR0913
        self,
        user_id: int,
        food_item_id: int,
        quantity_grams: float,
        total_calories: float,
        logged_date: str,
    ) -> FoodLogEntry:
        entry = FoodLogEntry(
            id=next(self.ids),
            user_id=user_id,
            food_item_id=food_item_id,
            quantity_grams=stored_numeric(quantity_grams),
            total_calories=stored_numeric(total_calories),
            logged_date=logged_date,
            created_at=self.clock(),
        )
        self.entries[entry.id] = entry
        return entry

    def get_entry(self, entry_id: int, user_id: int) -> FoodLogEntry | None:
        entry = self.entries.get(entry_id)
        if entry is None or entry.user_id != user_id:
            return None
        return entry

    def update_entry(
        self, entry_id: int, user_id: int, payload: dict[str, object]
    ) -> FoodLogEntry | None:
        entry = self.get_entry(entry_id, user_id)
        if entry is None:
            return None
        updated = replace(entry, **_stored_payload(payload))
        self.entries[entry_id] = updated
        return updated

    def delete_entry(self, entry_id: int, user_id: int) -> bool:
        if self.get_entry(entry_id, user_id) is None:
            return False
        del self.entries[entry_id]
        return True

    def list_entries_for_date(
        self, user_id: int, logged_date: str
    ) -> list[FoodLogEntryWithFood]:
        return [
            FoodLogEntryWithFood(
                id=entry.id,
                user_id=entry.user_id,
                food_item_id=entry.food_item_id,
                quantity_grams=entry.quantity_grams,
                total_calories=entry.total_calories,
                logged_date=entry.logged_date,
                created_at=entry.created_at,
                food_item=self.foods[entry.food_item_id],
            )
            for entry in self.entries.values()
            if entry.user_id == user_id and entry.logged_date == logged_date
        ]


@dataclass
class InMemoryFoodItemRepository(FoodItemRepository):
    """In-memory catalog repository sharing its rows with the log repository."""

    log_repository: InMemoryFoodLogRepository
    ids: count = field(default_factory=lambda: count(1))

    @property
    def foods(self) -> dict[int, FoodItem]:
        return self.log_repository.foods

    def create_food_item(
        self, user_id: int, name: str, calories_per_100g: float, created_at: datetime
    ) -> FoodItem:
        item = FoodItem(
            id=next(self.ids),
            user_id=user_id,
            name=name,
            calories_per_100g=stored_numeric(calories_per_100g),
            created_at=created_at,
            updated_at=created_at,
        )
        self.foods[item.id] = item
        return item

    def list_food_items(self, user_id: int) -> list[FoodItem]:
        return [item for item in self.foods.values() if item.user_id == user_id]

    def get_food_item(self, food_item_id: int, user_id: int) -> FoodItem | None:
        item = self.foods.get(food_item_id)
        if item is None or item.user_id != user_id:
            return None
        return item

    def update_food_item(
        self, food_item_id: int, user_id: int, payload: dict[str, object]
    ) -> FoodItem | None:
        item = self.get_food_item(food_item_id, user_id)
        if item is None:
            return None
        updated = replace(item, **_stored_payload(payload))
        self.foods[food_item_id] = updated
        return updated

    def delete_food_item(self, food_item_id: int, user_id: int) -> bool:
        if self.get_food_item(food_item_id, user_id) is None:
            return False
        del self.foods[food_item_id]
        return True

    def has_log_entries(self, food_item_id: int) -> bool:
        return any(
            entry.food_item_id == food_item_id
            for entry in self.log_repository.entries.values()
        )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=SERVICE_KEY,
        password_hash_method=FAST_HASH_METHOD,
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def food_log_repository() -> InMemoryFoodLogRepository:
    return InMemoryFoodLogRepository()


@pytest.fixture
def food_item_repository(
    food_log_repository: InMemoryFoodLogRepository,
) -> InMemoryFoodItemRepository:
    return InMemoryFoodItemRepository(log_repository=food_log_repository)


@pytest.fixture
def auth_service(user_repository: InMemoryUserRepository) -> AuthService:
    return AuthService(
        repository=user_repository,
        hasher=WerkzeugPasswordHasher(method=FAST_HASH_METHOD),
    )


@pytest.fixture
def food_catalog_service(
    user_repository: InMemoryUserRepository,
    food_item_repository: InMemoryFoodItemRepository,
) -> FoodCatalogService:
    return FoodCatalogService(
        users=user_repository,
        repository=food_item_repository,
        clock=TickingClock(),
    )


@pytest.fixture
def food_log_service(
    user_repository: InMemoryUserRepository,
    food_item_repository: InMemoryFoodItemRepository,
    food_log_repository: InMemoryFoodLogRepository,
) -> FoodLogService:
    return FoodLogService(
        users=user_repository,
        foods=food_item_repository,
        repository=food_log_repository,
    )


@pytest.fixture
def daily_log_service(
    user_repository: InMemoryUserRepository,
    food_log_repository: InMemoryFoodLogRepository,
) -> DailyLogService:
    return DailyLogService(users=user_repository, repository=food_log_repository)


@pytest.fixture
def user(auth_service: AuthService) -> UserRecord:
    return auth_service.register(
        email="test@example.com", password="password123", name="Test User"
    ).user


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    auth_service: AuthService,
    food_catalog_service: FoodCatalogService,
    food_log_service: FoodLogService,
    daily_log_service: DailyLogService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        auth_service=auth_service,
        food_catalog_service=food_catalog_service,
        food_log_service=food_log_service,
        daily_log_service=daily_log_service,
    )
