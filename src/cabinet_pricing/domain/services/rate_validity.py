"""Validity windows for dated rates.

A rate applies from ``effective_from`` (inclusive) up to ``effective_to``
(exclusive). An open-ended rate has no ``effective_to``.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

from cabinet_pricing.domain.value_objects import RateStatus

DateLike = date | str | None


def coerce_date(value: DateLike) -> date | None:
    """Turn an ISO date string (or datetime) into a date.

    Blank strings and None give None. Datetime strings keep only their
    date part.

    Raises:
        ValueError: If a non-blank string is not an ISO date.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    return date.fromisoformat(text[:10])


def read_date(value: DateLike) -> date | None:
    """Like ``coerce_date`` but unreadable text gives None instead of raising."""
    try:
        return coerce_date(value)
    except ValueError:
        return None


def is_rate_valid_on(
    effective_from: DateLike,
    effective_to: DateLike,
    on: DateLike,
) -> bool:
    """Return True if a rate applies on the given date.

    Unreadable dates are treated as absent, so a rate without a readable
    start is never valid.
    """
    start = read_date(effective_from)
    end = read_date(effective_to)
    query = read_date(on)
    if start is None or query is None:
        return False
    return start <= query and (end is None or end > query)


def classify_rate(
    effective_from: DateLike,
    effective_to: DateLike,
    today: DateLike = None,
) -> RateStatus:
    """Classify a rate as expired, future or current relative to ``today``.

    Expired wins over future when a malformed window satisfies both.
    Unreadable dates are treated as absent.

    Examples:
        >>> classify_rate("2025-01-01", "2025-06-01", "2025-07-01")
        <RateStatus.EXPIRED: 'expired'>
        >>> classify_rate("2025-01-01", "2025-06-01", "2024-12-01")
        <RateStatus.FUTURE: 'future'>
    """
    reference = read_date(today) or date.today()
    start = read_date(effective_from)
    end = read_date(effective_to)

    if end is not None and end < reference:
        return RateStatus.EXPIRED
    if start is not None and start > reference:
        return RateStatus.FUTURE
    return RateStatus.CURRENT


def validate_rate_window(
    effective_from: DateLike,
    effective_to: DateLike,
    today: DateLike = None,
    creating: bool = True,
) -> dict[str, str]:
    """Check a rate's date window before it is sent to the server.

    Rules:
        1. ``effective_from`` is required.
        2. When creating, ``effective_from`` may not be earlier than
           yesterday (one day of timezone slack).
        3. ``effective_to``, if given, must be strictly after
           ``effective_from``.

    Returns:
        Mapping of field name to error message (empty if valid).
    """
    errors: dict[str, str] = {}
    reference = coerce_date(today) or date.today()

    try:
        start = coerce_date(effective_from)
    except ValueError:
        errors["effective_from"] = "Effective from date is invalid"
        start = None
    else:
        if start is None:
            errors["effective_from"] = "Effective from date is required"
        elif creating and start < reference - timedelta(days=1):
            errors["effective_from"] = "Effective from date cannot be in the past"

    try:
        end = coerce_date(effective_to)
    except ValueError:
        errors["effective_to"] = "Effective to date is invalid"
        return errors

    if end is not None and start is not None and end <= start:
        errors["effective_to"] = "Effective to date must be after effective from date"

    return errors
