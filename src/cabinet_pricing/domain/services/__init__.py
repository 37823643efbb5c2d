"""Pure computations over already-loaded pricing records."""

from .accessory_pricing import preview_accessory_pricing
from .dimensions import LINE_ITEM_LIMITS, validate_dimensions
from .lighting import (
    LightingTotals,
    MaterialTypeCombination,
    RuleSelection,
    aggregate_lighting_costs,
    applicable_lighting_rules,
    material_type_combinations,
    rule_matches,
    select_lighting_rule,
)
from .numbers import parse_decimal, parse_int, round_money
from .rate_validity import (
    classify_rate,
    coerce_date,
    is_rate_valid_on,
    read_date,
    validate_rate_window,
)

__all__ = [
    "LINE_ITEM_LIMITS",
    "LightingTotals",
    "MaterialTypeCombination",
    "RuleSelection",
    "aggregate_lighting_costs",
    "applicable_lighting_rules",
    "classify_rate",
    "coerce_date",
    "is_rate_valid_on",
    "material_type_combinations",
    "parse_decimal",
    "parse_int",
    "preview_accessory_pricing",
    "read_date",
    "round_money",
    "rule_matches",
    "select_lighting_rule",
    "validate_dimensions",
    "validate_rate_window",
]
