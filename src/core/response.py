"""The `{ "data": ..., "errors": [...] }` envelope shared by every API response."""

from typing import Any

from rest_framework.response import Response
from rest_framework.viewsets import ReadOnlyModelViewSet


def envelope(data: Any = None, errors: list[Any] | None = None) -> dict[str, Any]:
    """Build the envelope body; successful payloads carry an empty error list."""
    return {"data": data, "errors": list(errors or [])}


def is_enveloped(payload: Any) -> bool:
    return isinstance(payload, dict) and set(payload) == {"data", "errors"}


def api_response(data: Any, status: int = 200) -> Response:
    """Successful JSON response wrapped in the envelope."""
    return Response(envelope(data), status=status)


def error_response(errors: list[Any], status: int) -> Response:
    """Failed JSON response: null data plus the error messages."""
    return Response(envelope(None, errors), status=status)


class EnvelopeMixin:
    """Wrap successful viewset payloads that are not already enveloped."""

    def finalize_response(self, request, response, *args, **kwargs):  # type: ignore[override]
        if getattr(response, "data", None) is not None and response.status_code < 400:
            if not is_enveloped(response.data):
                response.data = envelope(response.data)
        return super().finalize_response(request, response, *args, **kwargs)  # type: ignore[attr-defined]


class BaseReadOnlyViewSet(EnvelopeMixin, ReadOnlyModelViewSet):
    """Read-only viewset whose list/retrieve/extra actions all answer in the envelope."""


__all__ = ["envelope", "api_response", "error_response", "BaseReadOnlyViewSet"]
