"""Uniform response envelope: {success, data, error} for every endpoint."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.core.errors import FieldError

T = TypeVar("T")


class ApiModel(BaseModel):
    """Base for API payloads: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class FieldErrorOut(BaseModel):
    """One field-level validation issue as returned to the client."""

    message: str
    path: str | None = None
    type: str | None = None


class ErrorBody(BaseModel):
    """Error part of the envelope; details only for validation failures."""

    message: str
    type: str
    details: list[FieldErrorOut] | None = None


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapping a successful payload or an error."""

    success: bool = Field(default=True)
    data: T | None = None
    error: ErrorBody | None = None


class DeletedOut(BaseModel):
    deleted: bool = True


def error_body(
    message: str, error_type: str, details: list[FieldError] | None = None
) -> dict[str, Any]:
    """Build the JSON body for a failed request."""
    error: dict[str, Any] = {"message": message, "type": error_type}
    if details is not None:
        error["details"] = [
            FieldErrorOut(message=d.message, path=d.path, type=d.type).model_dump()
            for d in details
        ]
    return {"success": False, "data": None, "error": error}
