"""Conversions between Supabase rows and domain values."""

from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal

NUMERIC_SCALE = Decimal("0.01")


def to_numeric(value: float) -> str:
    """Encode a number as fixed-precision decimal text for numeric columns."""
    amount = Decimal(str(value)).quantize(NUMERIC_SCALE, rounding=ROUND_HALF_UP)
    return format(amount, "f")


def from_numeric(value: object) -> float:
    """Decode a numeric column, which PostgREST may return as text or number."""
    if value is None:
        return 0.0
    return float(Decimal(str(value)))


def parse_timestamp(value: object) -> datetime:
    """Parse a timestamp column into an aware datetime."""
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


def to_timestamp(value: datetime) -> str:
    return value.isoformat()
