"""Domain layer - pricing rules and value objects."""

from .services import (
    LightingTotals,
    RuleSelection,
    aggregate_lighting_costs,
    classify_rate,
    is_rate_valid_on,
    preview_accessory_pricing,
    select_lighting_rule,
    validate_dimensions,
    validate_rate_window,
)
from .value_objects import (
    DEFAULT_CURRENCY,
    DEFAULT_TAX_RATE,
    BudgetTier,
    DimensionLimits,
    MaterialRole,
    PricingPreview,
    RateStatus,
    Scope,
)

__all__ = [
    "DEFAULT_CURRENCY",
    "DEFAULT_TAX_RATE",
    "BudgetTier",
    "DimensionLimits",
    "LightingTotals",
    "MaterialRole",
    "PricingPreview",
    "RateStatus",
    "RuleSelection",
    "Scope",
    "aggregate_lighting_costs",
    "classify_rate",
    "is_rate_valid_on",
    "preview_accessory_pricing",
    "select_lighting_rule",
    "validate_dimensions",
    "validate_rate_window",
]
