"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from calorie_tracker.adapters.supabase_food_item_repository import (
    SupabaseFoodItemRepository,
)
from calorie_tracker.adapters.supabase_food_log_repository import (
    SupabaseFoodLogRepository,
)
from calorie_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from calorie_tracker.config import Settings
from calorie_tracker.services.auth import AuthService
from calorie_tracker.services.daily_log import DailyLogService
from calorie_tracker.services.food_log import FoodLogService
from calorie_tracker.services.foods import FoodCatalogService
from calorie_tracker.services.passwords import WerkzeugPasswordHasher


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    food_catalog_service: FoodCatalogService
    food_log_service: FoodLogService
    daily_log_service: DailyLogService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    food_item_repository = SupabaseFoodItemRepository(supabase_client)
    food_log_repository = SupabaseFoodLogRepository(supabase_client)
    hasher = WerkzeugPasswordHasher(method=resolved_settings.password_hash_method)
    return AppContainer(
        settings=resolved_settings,
        auth_service=AuthService(repository=user_repository, hasher=hasher),
        food_catalog_service=FoodCatalogService(
            users=user_repository, repository=food_item_repository
        ),
        food_log_service=FoodLogService(
            users=user_repository,
            foods=food_item_repository,
            repository=food_log_repository,
        ),
        daily_log_service=DailyLogService(
            users=user_repository, repository=food_log_repository
        ),
    )
