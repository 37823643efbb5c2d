"""Error normalization for backend responses.

Every failed call surfaces as a single ``ApiError`` carrying a
human-readable message. The message comes from the response body's
``detail`` or ``message`` key, or from a field-keyed validation map joined
as ``"field: msg1, msg2; field2: msg3"``, or from a per-operation fallback.
"""

from __future__ import annotations

from typing import Any


class ApiError(Exception):
    """Raised for any failed backend call.

    Attributes:
        message: Human-readable message suitable for a toast or banner.
        status_code: HTTP status, or None for network failures.
        field_errors: Field-keyed validation messages from a 4xx body.
        path: Request path that failed.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        field_errors: dict[str, list[str]] | None = None,
        path: str | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.field_errors = field_errors or {}
        self.path = path
        super().__init__(message)

    def __str__(self) -> str:
        return self.message

    @property
    def is_network_error(self) -> bool:
        return self.status_code is None


def _as_messages(value: Any) -> list[str]:
    if isinstance(value, list):
        return [str(v) for v in value]
    if isinstance(value, dict):
        return [f"{k}: {', '.join(_as_messages(v))}" for k, v in value.items()]
    return [str(value)]


def extract_field_errors(payload: Any) -> dict[str, list[str]]:
    """Return the field-keyed validation map of an error body.

    Bodies carrying ``detail`` or ``message`` are not field maps.

    Examples:
        >>> extract_field_errors({"name": ["This field is required."]})
        {'name': ['This field is required.']}
        >>> extract_field_errors({"detail": "Not found."})
        {}
    """
    if not isinstance(payload, dict) or not payload:
        return {}
    if "detail" in payload or "message" in payload:
        return {}
    return {str(field): _as_messages(messages) for field, messages in payload.items()}


def format_field_errors(field_errors: dict[str, list[str]]) -> str:
    """Join a field map as ``"field: msg1, msg2; field2: msg3"``."""
    return "; ".join(
        f"{field}: {', '.join(messages)}" for field, messages in field_errors.items()
    )


def extract_error_message(payload: Any, fallback: str) -> str:
    """Pick the most useful message from an error body.

    Order: ``detail``, ``message``, joined field map, ``fallback``.

    Examples:
        >>> extract_error_message({"detail": "Not found."}, "Failed")
        'Not found.'
        >>> extract_error_message({"name": ["taken"], "category": ["bad", "worse"]}, "Failed")
        'name: taken; category: bad, worse'
        >>> extract_error_message(None, "Failed to fetch cabinet types")
        'Failed to fetch cabinet types'
    """
    if isinstance(payload, dict):
        for key in ("detail", "message"):
            value = payload.get(key)
            if value:
                return "; ".join(_as_messages(value)) if not isinstance(value, str) else value
        field_errors = extract_field_errors(payload)
        if field_errors:
            return format_field_errors(field_errors)
    elif isinstance(payload, list) and payload:
        return ", ".join(_as_messages(payload))
    return fallback
