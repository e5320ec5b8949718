"""Registration and login."""

import logging
from dataclasses import dataclass
from typing import Protocol

from calorie_tracker.domain.models import AuthResponse, UserRecord
from calorie_tracker.errors import ConflictError, UnauthorizedError
from calorie_tracker.services.passwords import PasswordHasher
from calorie_tracker.services.validation import (
    require_email,
    require_name,
    require_password,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class UserRepository(Protocol):
    """Persistence interface for user identities."""

    def get_by_id(self, user_id: int) -> UserRecord | None:
        """Return the user with this id, if present."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with exactly this email, if present."""

    def create_user(self, email: str, password_hash: str, name: str) -> UserRecord:
        """Create and return a new user record."""


@dataclass
class AuthService:
    """Application service for registering and authenticating users."""

    repository: UserRepository
    hasher: PasswordHasher

    def register(self, email: str, password: str, name: str) -> AuthResponse:
        """Create a user with a hashed password."""
        require_email(email)
        require_password(password)
        require_name(name)
        if self.repository.get_by_email(email) is not None:
            logger.warning("Registration rejected for existing email")
            raise ConflictError("Email already registered")
        user = self.repository.create_user(
            email=email,
            password_hash=self.hasher.hash(password),
            name=name,
        )
        logger.info("Registered user", extra={"user_id": user.id})
        return AuthResponse(user=user)

    def login(self, email: str, password: str) -> AuthResponse:
        """Verify credentials and return the matching user."""
        user = self.repository.get_by_email(email)
        if user is None or not self.hasher.verify(user.password_hash, password):
            logger.warning("Login failed")
            raise UnauthorizedError(INVALID_CREDENTIALS)
        return AuthResponse(user=user)
