"""DRF exception handler that answers every API error in the envelope."""

from typing import Any

from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed, NotAuthenticated
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from .response import envelope, error_response


def _normalize_errors(payload: Any) -> list[Any]:
    """Convert DRF's response.data into a list for the envelope."""

    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and "detail" in payload:
        # Common DRF pattern: {"detail": "..."}
        return [payload["detail"]]
    return [payload]


def custom_exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    """Wrap DRF errors in `{ "data": null, "errors": [...] }` shape.

    - Database errors become a 503 instead of Django's HTML 500 page.
    - Unknown slugs get a fixed "not found" message.
    - Authentication failures are reported as 401.
    """

    if isinstance(exc, DatabaseError):
        return error_response(["Service temporarily unavailable."], status.HTTP_503_SERVICE_UNAVAILABLE)

    response = drf_exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, (AuthenticationFailed, NotAuthenticated)):
        response.status_code = status.HTTP_401_UNAUTHORIZED

    if response.status_code == status.HTTP_404_NOT_FOUND:
        errors = ["Resource not found."]
    else:
        errors = _normalize_errors(response.data)
    response.data = envelope(None, errors)
    return response
