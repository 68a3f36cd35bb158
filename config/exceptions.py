"""DRF exception handler producing the ``{"error": message}`` envelope."""

from __future__ import annotations

import logging
from typing import Any

from rest_framework import status  # type: ignore
from rest_framework.exceptions import ValidationError  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

logger = logging.getLogger(__name__)


def _first_message(data: Any) -> str:
    if isinstance(data, dict):
        if "detail" in data:
            return _first_message(data["detail"])
        if "error" in data:
            return _first_message(data["error"])
        for value in data.values():
            return _first_message(value)
        return ""
    if isinstance(data, (list, tuple)):
        return _first_message(data[0]) if data else ""
    return str(data)


def api_exception_handler(exc: Exception, context: dict) -> Response:
    """Render every API failure as ``{"error": "..."}``.

    Validation failures keep the DRF field map under ``details``. Anything DRF
    does not know how to render is logged and reported as a generic 500.
    """
    response = exception_handler(exc, context)
    view = context.get("view")
    view_name = view.__class__.__name__ if view is not None else "unknown"

    if response is None:
        logger.error(f"Unhandled error in {view_name}: {exc}", exc_info=exc)
        return Response(
            {"error": "Internal server error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    payload: dict[str, Any] = {"error": _first_message(response.data)}
    if isinstance(exc, ValidationError) and isinstance(response.data, dict):
        payload["details"] = response.data
    response.data = payload
    return response
