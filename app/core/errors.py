"""Domain error taxonomy rendered by the API boundary as the response envelope."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """One field-level validation issue."""

    message: str
    path: str | None = None
    type: str | None = None


class AppError(Exception):
    """Base for errors that map to an HTTP status and an envelope error type."""

    status_code = 500
    error_type = "internal"
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(AppError):
    """Malformed or out-of-policy input; carries a list of field errors."""

    status_code = 422
    error_type = "validation"
    default_message = "Validation failed"

    def __init__(
        self, details: list[FieldError], message: str | None = None
    ) -> None:
        self.details = list(details)
        super().__init__(message)


class Unauthorized(AppError):
    status_code = 401
    error_type = "unauthorized"
    default_message = "Unauthorized"


class Forbidden(AppError):
    status_code = 403
    error_type = "forbidden"
    default_message = "Forbidden"


class NotFound(AppError):
    status_code = 404
    error_type = "not_found"
    default_message = "Not found"


class Conflict(AppError):
    status_code = 409
    error_type = "conflict"
    default_message = "Conflict"


class InternalError(AppError):
    """A write affected no rows when one was expected, or any unclassified failure."""
