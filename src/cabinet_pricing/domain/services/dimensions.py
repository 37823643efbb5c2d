"""Dimension limits for project line items."""

from __future__ import annotations

from typing import Any

from cabinet_pricing.domain.services.numbers import parse_decimal
from cabinet_pricing.domain.value_objects import DimensionLimits

LINE_ITEM_LIMITS: dict[str, DimensionLimits] = {
    "width_mm": DimensionLimits(50, 5000),
    "depth_mm": DimensionLimits(50, 1000),
    "height_mm": DimensionLimits(50, 3000),
    "qty": DimensionLimits(1, 100),
}

_MESSAGES = {
    "width_mm": "Width must be between 50mm and 5000mm",
    "depth_mm": "Depth must be between 50mm and 1000mm",
    "height_mm": "Height must be between 50mm and 3000mm",
    "qty": "Quantity must be between 1 and 100",
}


def validate_dimensions(dimensions: dict[str, Any]) -> dict[str, str]:
    """Check width/depth/height/qty against their allowed ranges.

    Missing, zero or unreadable values fail the check.

    Returns:
        Mapping of field name to error message (empty if valid).
    """
    errors: dict[str, str] = {}
    for name, limits in LINE_ITEM_LIMITS.items():
        value = parse_decimal(dimensions.get(name))
        if not value or not limits.contains(value):
            errors[name] = _MESSAGES[name]
    return errors
