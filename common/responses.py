"""Standardized JSON response helpers."""

from __future__ import annotations

import math
from typing import Any, Mapping

from flask import Response, jsonify

from .errors import AppError


def json_safe(value: Any) -> Any:
    """Replace non-finite floats with ``None`` so payloads stay valid JSON."""

    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, Mapping):
        return {key: json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [json_safe(item) for item in value]
    return value


def ok(data: Any, *, status: int = 200) -> Response:
    """Return a success envelope."""

    payload = {"success": True, "data": json_safe(data)}
    response = jsonify(payload)
    response.status_code = status
    return response


def fail(error: AppError | Mapping[str, Any], *, status: int | None = None) -> Response:
    """Return a standardized failure envelope."""

    if isinstance(error, AppError):
        payload = {"success": False, "error": json_safe(error.to_dict())}
        response = jsonify(payload)
        response.status_code = status or error.status_code
        return response

    payload = {"success": False, "error": json_safe(dict(error))}
    response = jsonify(payload)
    response.status_code = status or 400
    return response


__all__ = ["ok", "fail", "json_safe"]
