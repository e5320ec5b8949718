"""Domain models for the calorie tracker."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: int
    email: str
    password_hash: str
    name: str
    created_at: datetime


@dataclass(frozen=True)
class AuthResponse:
    """Result of a register or login call.

    ``token`` is reserved for session issuance and is currently always None.
    """

    user: UserRecord
    token: str | None = None


@dataclass(frozen=True)
class DeleteResult:
    """Acknowledgement returned by delete operations."""

    success: bool
