"""Validation primitives for plugin APIs."""

from __future__ import annotations

from typing import Annotated, Any, Mapping, TypeVar

import pydantic
from pydantic import BaseModel


class ValidationError(ValueError):
    """Raised when validation fails."""

    def __init__(self, message: str, *, details: Any | None = None):
        super().__init__(message)
        self.details = details


class SchemaModel(BaseModel):
    """Strict base model for request/response validation."""

    model_config = pydantic.ConfigDict(extra="forbid", str_strip_whitespace=True)


# Domain bounds and view parameters; nan/inf would poison a whole sweep.
FiniteFloat = Annotated[float, pydantic.Field(allow_inf_nan=False)]

TModel = TypeVar("TModel", bound=SchemaModel)


def parse_model(model: type[TModel], payload: Mapping[str, Any] | None) -> TModel:
    payload = payload or {}
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object")
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise ValidationError(
            "Invalid request payload",
            details=exc.errors(include_url=False, include_context=False, include_input=False),
        ) from exc


__all__ = [
    "FiniteFloat",
    "ValidationError",
    "SchemaModel",
    "parse_model",
]
