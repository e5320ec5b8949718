"""Supabase-backed user repository."""

from dataclasses import dataclass

from supabase import Client, PostgrestAPIError

from calorie_tracker.adapters.supabase_rows import parse_timestamp
from calorie_tracker.domain.models import UserRecord
from calorie_tracker.errors import ConflictError
from calorie_tracker.services.auth import UserRepository

UNIQUE_VIOLATION = "23505"
_USER_COLUMNS = "id, email, password_hash, name, created_at"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_id(self, user_id: int) -> UserRecord | None:
        """Return the user with this id, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with exactly this email, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def create_user(self, email: str, password_hash: str, name: str) -> UserRecord:
        """Create a new user row and return it."""
        try:
            response = (
                self.client.table("users")
                .insert({"email": email, "password_hash": password_hash, "name": name})
                .execute()
            )
        except PostgrestAPIError as exc:
            if exc.code == UNIQUE_VIOLATION:
                raise ConflictError("Email already registered") from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_user(response.data[0])


def _parse_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=int(row["id"]),
        email=str(row["email"]),
        password_hash=str(row["password_hash"]),
        name=str(row.get("name", "")),
        created_at=parse_timestamp(row["created_at"]),
    )
