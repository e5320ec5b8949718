"""Password hashing backed by werkzeug."""

from dataclasses import dataclass
from typing import Protocol

from werkzeug.security import check_password_hash, generate_password_hash


class PasswordHasher(Protocol):
    """Derives and verifies one-way credential hashes."""

    def hash(self, password: str) -> str:
        """Return a salted hash for the password."""

    def verify(self, password_hash: str, password: str) -> bool:
        """Return true when the password matches the stored hash."""


@dataclass
class WerkzeugPasswordHasher(PasswordHasher):
    """Salted password hashes in werkzeug's ``method$salt$hash`` format."""

    method: str = "scrypt"
    salt_length: int = 16

    def hash(self, password: str) -> str:
        return generate_password_hash(
            password, method=self.method, salt_length=self.salt_length
        )

    def verify(self, password_hash: str, password: str) -> bool:
        return check_password_hash(password_hash, password)
