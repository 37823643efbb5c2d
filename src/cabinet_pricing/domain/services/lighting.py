"""Lighting rule selection and project lighting cost aggregation.

Rules are matched against a (material, cabinet type) pair within a project.
When several rules match, the most specific one wins: customer-specific
rules outrank global ones, and type-specific rules outrank rules that apply
to every cabinet type. Per-item costs are computed by the backend; this
module only sums them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Protocol

from cabinet_pricing.domain.services.numbers import parse_decimal, parse_int

logger = logging.getLogger(__name__)


class LightingRuleLike(Protocol):
    """Fields of a lighting rule read during selection."""

    id: Any
    cabinet_material: Any
    cabinet_type: Any
    budget_tier: Any
    is_global: bool
    customer: Any
    is_active: bool


class ProjectLike(Protocol):
    """Fields of a project read during selection."""

    customer: Any
    budget_tier: Any


class LightingItemLike(Protocol):
    """Pre-computed cost fields of a project lighting item."""

    is_active: bool
    led_under_wall_cost: Any
    led_work_top_cost: Any
    led_skirting_cost: Any
    spot_lights_cost: Any
    total_cost: Any


@dataclass(frozen=True)
class RuleSelection:
    """Outcome of picking a lighting rule.

    Attributes:
        rule: The applicable rule, or None if nothing matched.
        candidates: All matching rules, most specific first.
        ambiguous: True when the runner-up ties with the winner on
            specificity, so input order decided the result.
    """

    rule: Any | None
    candidates: tuple[Any, ...] = ()
    ambiguous: bool = False


@dataclass(frozen=True)
class LightingTotals:
    """Summed lighting costs over a project's active items."""

    total_led_cost: Decimal = Decimal("0")
    total_spot_cost: Decimal = Decimal("0")
    grand_total: Decimal = Decimal("0")
    active_count: int = 0
    total_count: int = 0


@dataclass
class MaterialTypeCombination:
    """A (material, cabinet type) pair used in a project, with its measures."""

    material_id: Any
    cabinet_type_id: Any
    material_name: str = "Unknown"
    cabinet_type_name: str = "All Types"
    wall_width_mm: int = 0
    base_width_mm: int = 0
    wall_count: int = 0
    line_item_ids: list[Any] = field(default_factory=list)

    @property
    def key(self) -> str:
        return f"{self.material_id}_{self.cabinet_type_id or 'null'}"


def _same_id(left: Any, right: Any) -> bool:
    """Compare foreign keys that may arrive as ints or numeric strings."""
    if left is None or right is None:
        return left is right
    return str(left) == str(right)


def _tier_value(tier: Any) -> Any:
    return getattr(tier, "value", tier)


def specificity(rule: LightingRuleLike) -> tuple[int, int]:
    """Sort key: lower sorts first (customer-specific, then type-specific)."""
    return (
        1 if rule.is_global else 0,
        0 if rule.cabinet_type is not None else 1,
    )


def rule_matches(
    rule: LightingRuleLike,
    material: Any,
    cabinet_type: Any,
    project: ProjectLike,
) -> bool:
    """Return True if ``rule`` applies to the pair within ``project``."""
    if not rule.is_active:
        return False
    if not _same_id(rule.cabinet_material, material):
        return False
    if rule.cabinet_type is not None and not _same_id(rule.cabinet_type, cabinet_type):
        return False
    if _tier_value(rule.budget_tier) != _tier_value(project.budget_tier):
        return False
    return rule.is_global or _same_id(rule.customer, project.customer)


def applicable_lighting_rules(
    rules: Iterable[LightingRuleLike],
    material: Any,
    cabinet_type: Any,
    project: ProjectLike,
) -> list[LightingRuleLike]:
    """Filter rules for a pair and order them most specific first.

    The sort is stable, so rules of equal specificity keep input order.
    """
    matching = [r for r in rules if rule_matches(r, material, cabinet_type, project)]
    return sorted(matching, key=specificity)


def select_lighting_rule(
    rules: Iterable[LightingRuleLike],
    material: Any,
    cabinet_type: Any,
    project: ProjectLike,
) -> RuleSelection:
    """Pick the applicable lighting rule for a (material, cabinet type) pair."""
    candidates = applicable_lighting_rules(rules, material, cabinet_type, project)
    if not candidates:
        return RuleSelection(rule=None)

    ambiguous = len(candidates) > 1 and specificity(candidates[0]) == specificity(
        candidates[1]
    )
    if ambiguous:
        logger.warning(
            f"Lighting rules {candidates[0].id} and {candidates[1].id} tie on "
            f"specificity for material={material} type={cabinet_type}; "
            f"using {candidates[0].id}"
        )
    return RuleSelection(
        rule=candidates[0], candidates=tuple(candidates), ambiguous=ambiguous
    )


def aggregate_lighting_costs(items: Sequence[LightingItemLike]) -> LightingTotals:
    """Sum pre-computed lighting costs over active items only.

    Cost fields may be Decimals, numbers or decimal strings; anything
    unreadable counts as zero.
    """
    active = [item for item in items if item.is_active]

    total_led = sum(
        (
            parse_decimal(item.led_under_wall_cost)
            + parse_decimal(item.led_work_top_cost)
            + parse_decimal(item.led_skirting_cost)
            for item in active
        ),
        Decimal("0"),
    )
    total_spot = sum(
        (parse_decimal(item.spot_lights_cost) for item in active), Decimal("0")
    )
    grand_total = sum(
        (parse_decimal(item.total_cost) for item in active), Decimal("0")
    )

    return LightingTotals(
        total_led_cost=total_led,
        total_spot_cost=total_spot,
        grand_total=grand_total,
        active_count=len(active),
        total_count=len(items),
    )


def _detail_name(detail: Any, default: str) -> str:
    if detail is None:
        return default
    if isinstance(detail, dict):
        return detail.get("name") or default
    return getattr(detail, "name", None) or default


def _category_name(line: Any) -> str:
    detail = getattr(line, "cabinet_type_detail", None)
    if detail is None:
        return ""
    category = (
        detail.get("category") if isinstance(detail, dict) else getattr(detail, "category", None)
    )
    return _detail_name(category, "").upper()


def material_type_combinations(line_items: Iterable[Any]) -> list[MaterialTypeCombination]:
    """Collect unique (cabinet material, cabinet type) pairs in a project.

    Widths are ``width_mm * qty`` summed over lines whose cabinet type
    category is WALL or BASE; wall count sums ``qty`` of WALL lines.
    Order follows first appearance.
    """
    combos: dict[tuple[str, str], MaterialTypeCombination] = {}
    for line in line_items:
        key = (str(line.cabinet_material), str(line.cabinet_type))
        combo = combos.get(key)
        if combo is None:
            combo = MaterialTypeCombination(
                material_id=line.cabinet_material,
                cabinet_type_id=line.cabinet_type,
                material_name=_detail_name(
                    getattr(line, "cabinet_material_detail", None), "Unknown"
                ),
                cabinet_type_name=_detail_name(
                    getattr(line, "cabinet_type_detail", None), "All Types"
                ),
            )
            combos[key] = combo

        qty = parse_int(line.qty)
        width = parse_int(line.width_mm) * qty
        category = _category_name(line)
        if category == "WALL":
            combo.wall_width_mm += width
            combo.wall_count += qty
        elif category == "BASE":
            combo.base_width_mm += width
        combo.line_item_ids.append(line.id)

    return list(combos.values())
