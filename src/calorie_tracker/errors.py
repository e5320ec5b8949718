"""Error types raised by calorie tracker services."""


class CalorieTrackerError(Exception):
    """Base class for errors surfaced to callers."""

    code = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(CalorieTrackerError):
    """Entity is absent or not owned by the caller."""

    code = "NOT_FOUND"


class ConflictError(CalorieTrackerError):
    """Operation violates a business rule."""

    code = "CONFLICT"


class ValidationError(CalorieTrackerError):
    """Input is malformed."""

    code = "VALIDATION_ERROR"


class UnauthorizedError(CalorieTrackerError):
    """Credentials did not verify."""

    code = "UNAUTHORIZED"
