"""Common error types and helpers for API responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, MutableMapping

from werkzeug.exceptions import HTTPException


@dataclass(slots=True)
class AppError(Exception):
    """Base application error with a JSON friendly payload."""

    message: str
    code: str = "error"
    status_code: int = 400
    details: Mapping[str, Any] | None = None

    def to_dict(self) -> Mapping[str, Any]:
        payload: MutableMapping[str, Any] = {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details or {}),
        }
        return payload


@dataclass(slots=True)
class ValidationAppError(AppError):
    """Error raised for invalid user input."""

    code: str = "validation_error"
    status_code: int = 400


@dataclass(slots=True)
class ParseAppError(ValidationAppError):
    """A formula that could not be parsed; details carry the offending offset."""

    code: str = "graph_studio.parse_error"

    @classmethod
    def from_parse_error(cls, error: Exception, *, field: str) -> "ParseAppError":
        return cls(
            message=str(error),
            details={
                "field": field,
                "position": getattr(error, "position", None),
                "reason": getattr(error, "reason", str(error)),
            },
        )


@dataclass(slots=True)
class NotFoundAppError(AppError):
    """Error raised when a resource is missing."""

    code: str = "not_found"
    status_code: int = 404


@dataclass(slots=True)
class InternalAppError(AppError):
    """Generic internal error wrapper to avoid leaking implementation details."""

    code: str = "internal_error"
    status_code: int = 500


def ensure_app_error(error: AppError | Exception, *, fallback_code: str) -> AppError:
    """Coerce arbitrary exceptions into :class:`AppError` instances.

    HTTP exceptions keep their status code; anything else becomes a 500
    whose message does not echo the original exception.
    """

    if isinstance(error, AppError):
        return error
    if isinstance(error, HTTPException):
        status = error.code or 500
        if status == 404:
            return NotFoundAppError(message=error.description or "Not found")
        return AppError(
            message=error.description or error.name,
            code=fallback_code if status >= 500 else f"http_{status}",
            status_code=status,
        )
    return InternalAppError(code=fallback_code, message="Internal server error")


__all__ = [
    "AppError",
    "ValidationAppError",
    "ParseAppError",
    "NotFoundAppError",
    "InternalAppError",
    "ensure_app_error",
]
