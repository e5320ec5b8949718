"""Input validation shared by the services."""

import math
import re
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from calorie_tracker.errors import ValidationError

MIN_PASSWORD_LENGTH = 6
MAX_AMOUNT = 1_000_000
AMOUNT_SCALE = Decimal("0.01")
_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_amount(value: float, field_name: str) -> float:
    """Return the value rounded to the stored scale.

    Amounts are kept in ``numeric(8, 2)`` columns, so the rounded value must be
    positive and below ``MAX_AMOUNT``.
    """
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValidationError(f"{field_name} must be a number")
    if not math.isfinite(value):
        raise ValidationError(f"{field_name} must be a finite number")
    if value >= MAX_AMOUNT:
        raise ValidationError(f"{field_name} must be less than {MAX_AMOUNT}")
    amount = Decimal(str(value)).quantize(AMOUNT_SCALE, rounding=ROUND_HALF_UP)
    if amount <= 0:
        raise ValidationError(f"{field_name} must be positive")
    if amount >= MAX_AMOUNT:
        raise ValidationError(f"{field_name} must be less than {MAX_AMOUNT}")
    return float(amount)


def require_name(value: str, field_name: str = "name") -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value


def require_calendar_date(value: str, field_name: str = "date") -> str:
    """Validate a YYYY-MM-DD string and return it unchanged."""
    if not isinstance(value, str) or not _DATE_PATTERN.match(value):
        raise ValidationError(f"{field_name} must be in YYYY-MM-DD format")
    try:
        date.fromisoformat(value)
    except ValueError as exc:
        raise ValidationError(f"{field_name} is not a valid calendar date") from exc
    return value


def require_email(value: str) -> str:
    if not isinstance(value, str) or not _EMAIL_PATTERN.match(value):
        raise ValidationError("email must be a valid email address")
    return value


def require_password(value: str) -> str:
    if not isinstance(value, str) or len(value) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    return value


def require_id(value: int, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field_name} must be an integer id")
    return value
