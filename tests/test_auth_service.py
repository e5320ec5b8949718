"""Tests for registration and login."""

import pytest

from calorie_tracker.errors import ConflictError, UnauthorizedError, ValidationError
from calorie_tracker.services.auth import AuthService
from tests.conftest import InMemoryUserRepository


def test_register_hashes_password(
    auth_service: AuthService, user_repository: InMemoryUserRepository
) -> None:
    response = auth_service.register(
        email="test@example.com", password="password123", name="Test User"
    )

    assert response.token is None
    assert response.user.email == "test@example.com"
    assert response.user.name == "Test User"
    assert response.user.password_hash != "password123"
    assert "password123" not in response.user.password_hash
    assert user_repository.get_by_id(response.user.id) == response.user


def test_register_salts_each_hash(auth_service: AuthService) -> None:
    first = auth_service.register("a@example.com", "password123", "A").user
    second = auth_service.register("b@example.com", "password123", "B").user

    assert first.password_hash != second.password_hash


def test_register_duplicate_email_conflicts(
    auth_service: AuthService, user_repository: InMemoryUserRepository
) -> None:
    auth_service.register("test@example.com", "password123", "First")

    with pytest.raises(ConflictError, match="Email already registered"):
        auth_service.register("test@example.com", "different456", "Second")

    matching = [
        user
        for user in user_repository.users.values()
        if user.email == "test@example.com"
    ]
    assert len(matching) == 1
    assert matching[0].name == "First"


def test_register_email_match_is_case_sensitive(auth_service: AuthService) -> None:
    auth_service.register("test@example.com", "password123", "Lower")

    upper = auth_service.register("TEST@example.com", "password123", "Upper")

    assert upper.user.email == "TEST@example.com"


@pytest.mark.parametrize(
    ("email", "password", "name"),
    [
        ("not-an-email", "password123", "Test"),
        ("test@example.com", "12345", "Test"),
        ("test@example.com", "password123", ""),
    ],
)
def test_register_rejects_malformed_input(
    auth_service: AuthService,
    user_repository: InMemoryUserRepository,
    email: str,
    password: str,
    name: str,
) -> None:
    with pytest.raises(ValidationError):
        auth_service.register(email, password, name)

    assert user_repository.users == {}


def test_login_returns_user(auth_service: AuthService) -> None:
    registered = auth_service.register("test@example.com", "password123", "Test")

    response = auth_service.login("test@example.com", "password123")

    assert response.user == registered.user
    assert response.token is None


def test_login_failures_share_one_message(auth_service: AuthService) -> None:
    auth_service.register("test@example.com", "password123", "Test")

    with pytest.raises(UnauthorizedError) as wrong_password:
        auth_service.login("test@example.com", "wrongpassword")
    with pytest.raises(UnauthorizedError) as unknown_email:
        auth_service.login("nobody@example.com", "password123")

    assert str(wrong_password.value) == "Invalid email or password"
    assert str(unknown_email.value) == str(wrong_password.value)
