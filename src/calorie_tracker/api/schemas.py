"""Pydantic models for the HTTP request and response bodies."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from calorie_tracker.domain.updates import FoodItemUpdate, FoodLogEntryUpdate
from calorie_tracker.services.validation import MAX_AMOUNT


class RegisterUserInput(BaseModel):
    """Register request payload."""

    email: str
    password: str
    name: str = Field(min_length=1)


class LoginUserInput(BaseModel):
    """Login request payload."""

    email: str
    password: str


class CreateFoodItemInput(BaseModel):
    """Create food item payload."""

    user_id: int
    name: str = Field(min_length=1)
    calories_per_100g: float = Field(gt=0, lt=MAX_AMOUNT)


class GetUserFoodItemsInput(BaseModel):
    """List food items payload."""

    user_id: int


class UpdateFoodItemInput(BaseModel):
    """Update food item payload. Omitted fields are left unchanged."""

    id: int
    user_id: int
    name: str | None = Field(default=None, min_length=1)
    calories_per_100g: float | None = Field(default=None, gt=0, lt=MAX_AMOUNT)

    def to_update(self) -> FoodItemUpdate:
        return FoodItemUpdate(**_supplied(self, ("name", "calories_per_100g")))


class DeleteFoodItemInput(BaseModel):
    """Delete food item payload."""

    id: int
    user_id: int


class CreateFoodLogEntryInput(BaseModel):
    """Create log entry payload; ``logged_date`` is YYYY-MM-DD."""

    user_id: int
    food_item_id: int
    quantity_grams: float = Field(gt=0, lt=MAX_AMOUNT)
    logged_date: str


class UpdateFoodLogEntryInput(BaseModel):
    """Update log entry payload. Omitted fields are left unchanged."""

    id: int
    user_id: int
    food_item_id: int | None = None
    quantity_grams: float | None = Field(default=None, gt=0, lt=MAX_AMOUNT)
    logged_date: str | None = None

    def to_update(self) -> FoodLogEntryUpdate:
        return FoodLogEntryUpdate(
            **_supplied(self, ("food_item_id", "quantity_grams", "logged_date"))
        )


class DeleteFoodLogEntryInput(BaseModel):
    """Delete log entry payload."""

    id: int
    user_id: int


class GetDailyLogInput(BaseModel):
    """Daily log payload; ``date`` is YYYY-MM-DD."""

    user_id: int
    date: str


class UserOut(BaseModel):
    """User as rendered to clients, without the credential hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    created_at: datetime


class AuthResponseOut(BaseModel):
    """Authentication response envelope."""

    model_config = ConfigDict(from_attributes=True)

    user: UserOut
    token: str | None = None


class FoodItemOut(BaseModel):
    """Food item response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    calories_per_100g: float
    created_at: datetime
    updated_at: datetime


class FoodLogEntryOut(BaseModel):
    """Food log entry response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    food_item_id: int
    quantity_grams: float
    total_calories: float
    logged_date: str
    created_at: datetime


class FoodLogEntryWithFoodOut(FoodLogEntryOut):
    """Food log entry with its food item."""

    food_item: FoodItemOut


class DailySummaryOut(BaseModel):
    """Daily log response."""

    model_config = ConfigDict(from_attributes=True)

    date: str
    total_calories: float
    entries: list[FoodLogEntryWithFoodOut]


class DeleteResultOut(BaseModel):
    """Delete acknowledgement."""

    model_config = ConfigDict(from_attributes=True)

    success: bool


def _supplied(model: BaseModel, names: tuple[str, ...]) -> dict[str, object]:
    """Return only the fields the client actually sent."""
    supplied = model.model_fields_set
    return {name: getattr(model, name) for name in names if name in supplied}
