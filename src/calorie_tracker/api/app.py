"""FastAPI application factory."""

import logging
from datetime import UTC, datetime

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from calorie_tracker.api.schemas import (
    AuthResponseOut,
    CreateFoodItemInput,
    CreateFoodLogEntryInput,
    DailySummaryOut,
    DeleteFoodItemInput,
    DeleteFoodLogEntryInput,
    DeleteResultOut,
    FoodItemOut,
    FoodLogEntryOut,
    GetDailyLogInput,
    GetUserFoodItemsInput,
    LoginUserInput,
    RegisterUserInput,
    UpdateFoodItemInput,
    UpdateFoodLogEntryInput,
)
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.config import parse_allowed_origins
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.food_log import DailySummary, FoodLogEntry
from calorie_tracker.domain.foods import FoodItem
from calorie_tracker.domain.models import AuthResponse, DeleteResult
from calorie_tracker.errors import (
    CalorieTrackerError,
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)

ERROR_STATUS: dict[type[CalorieTrackerError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
}


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Calorie Tracker")
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(container.settings.cors_allowed_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(CalorieTrackerError)
    async def handle_service_error(
        request: Request, exc: CalorieTrackerError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=_status_for(exc),
            content={"detail": exc.message, "code": exc.code},
        )

    @app.exception_handler(RuntimeError)
    async def handle_store_error(request: Request, exc: RuntimeError) -> JSONResponse:
        logger.exception("Store operation failed", extra={"path": request.url.path})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error", "code": "INTERNAL"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok", "timestamp": datetime.now(tz=UTC).isoformat()}

    @app.post("/registerUser", response_model=AuthResponseOut)
    async def register_user(
        body: RegisterUserInput, request: Request
    ) -> AuthResponse:
        """Create an account."""
        return _container(request).auth_service.register(
            email=body.email, password=body.password, name=body.name
        )

    @app.post("/loginUser", response_model=AuthResponseOut)
    async def login_user(body: LoginUserInput, request: Request) -> AuthResponse:
        """Verify credentials."""
        return _container(request).auth_service.login(
            email=body.email, password=body.password
        )

    @app.post("/createFoodItem", response_model=FoodItemOut)
    async def create_food_item(
        body: CreateFoodItemInput, request: Request
    ) -> FoodItem:
        return _container(request).food_catalog_service.create_food_item(
            user_id=body.user_id,
            name=body.name,
            calories_per_100g=body.calories_per_100g,
        )

    @app.post("/getUserFoodItems", response_model=list[FoodItemOut])
    async def get_user_food_items(
        body: GetUserFoodItemsInput, request: Request
    ) -> list[FoodItem]:
        return _container(request).food_catalog_service.list_food_items(body.user_id)

    @app.post("/updateFoodItem", response_model=FoodItemOut)
    async def update_food_item(
        body: UpdateFoodItemInput, request: Request
    ) -> FoodItem:
        return _container(request).food_catalog_service.update_food_item(
            food_item_id=body.id, user_id=body.user_id, update=body.to_update()
        )

    @app.post("/deleteFoodItem", response_model=DeleteResultOut)
    async def delete_food_item(
        body: DeleteFoodItemInput, request: Request
    ) -> DeleteResult:
        return _container(request).food_catalog_service.delete_food_item(
            food_item_id=body.id, user_id=body.user_id
        )

    @app.post("/createFoodLogEntry", response_model=FoodLogEntryOut)
    async def create_food_log_entry(
        body: CreateFoodLogEntryInput, request: Request
    ) -> FoodLogEntry:
        return _container(request).food_log_service.create_entry(
            user_id=body.user_id,
            food_item_id=body.food_item_id,
            quantity_grams=body.quantity_grams,
            logged_date=body.logged_date,
        )

    @app.post("/updateFoodLogEntry", response_model=FoodLogEntryOut)
    async def update_food_log_entry(
        body: UpdateFoodLogEntryInput, request: Request
    ) -> FoodLogEntry:
        return _container(request).food_log_service.update_entry(
            entry_id=body.id, user_id=body.user_id, update=body.to_update()
        )

    @app.post("/deleteFoodLogEntry", response_model=DeleteResultOut)
    async def delete_food_log_entry(
        body: DeleteFoodLogEntryInput, request: Request
    ) -> DeleteResult:
        return _container(request).food_log_service.delete_entry(
            entry_id=body.id, user_id=body.user_id
        )

    @app.post("/getDailyLog", response_model=DailySummaryOut)
    async def get_daily_log(body: GetDailyLogInput, request: Request) -> DailySummary:
        """Return one day's entries and calorie total."""
        return _container(request).daily_log_service.get_daily_log(
            user_id=body.user_id, date=body.date
        )

    return app


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _status_for(exc: CalorieTrackerError) -> int:
    for error_type, status_code in ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST
