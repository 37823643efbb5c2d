"""Lenient numeric parsing for form input and backend decimal strings.

Form fields arrive as free text and the backend serializes decimals as
strings. Both are parsed by reading the leading numeric prefix, so
``"12.5 mm"`` reads as 12.5 and anything unreadable reads as zero.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, DecimalException, InvalidOperation, localcontext
from typing import Any

from cabinet_pricing.domain.value_objects import TWO_PLACES

_DECIMAL_PREFIX = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"^\s*[+-]?\d+")

# Magnitudes beyond this are read as malformed input.
MAX_EXPONENT = 100
MONEY_PRECISION = MAX_EXPONENT + 10


def parse_decimal(value: Any, default: Decimal = Decimal("0")) -> Decimal:
    """Parse a value into a Decimal, falling back to ``default``.

    Examples:
        >>> parse_decimal("285")
        Decimal('285')
        >>> parse_decimal("12abc")
        Decimal('12')
        >>> parse_decimal(None)
        Decimal('0')
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        return value if _in_range(value) else default
    if isinstance(value, int):
        parsed = Decimal(value)
        return parsed if _in_range(parsed) else default
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return default
        parsed = Decimal(str(value))
        return parsed if _in_range(parsed) else default

    match = _DECIMAL_PREFIX.match(str(value))
    if not match:
        return default
    try:
        parsed = Decimal(match.group(0).strip())
    except InvalidOperation:
        return default
    return parsed if _in_range(parsed) else default


def parse_int(value: Any, default: int = 0) -> int:
    """Parse a value into an int, truncating any fractional part.

    Examples:
        >>> parse_int("2")
        2
        >>> parse_int("2.7")
        2
        >>> parse_int("")
        0
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        try:
            return int(value)
        except (ValueError, OverflowError, InvalidOperation):
            return default

    match = _INT_PREFIX.match(str(value))
    if not match:
        return default
    text = match.group(0).strip()
    if len(text.lstrip("+-")) > MAX_EXPONENT:
        return default
    return int(text)


def _in_range(value: Decimal) -> bool:
    return value.is_finite() and (value.is_zero() or abs(value.adjusted()) <= MAX_EXPONENT)


def round_money(value: Decimal) -> Decimal:
    """Round to two places, half-up, giving zero when the value cannot be rounded.

    Examples:
        >>> round_money(Decimal("10.005"))
        Decimal('10.01')
        >>> round_money(Decimal("1e30"))
        Decimal('1000000000000000000000000000000.00')
    """
    with localcontext() as ctx:
        ctx.prec = MONEY_PRECISION
        try:
            return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
        except DecimalException:
            return Decimal("0.00")
