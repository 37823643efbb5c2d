"""Lighting stores: the project's lighting items, and the rules admin screen."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from cabinet_pricing.application.stores.base import ActionResult, ResourceStore
from cabinet_pricing.contracts.records import (
    LightingItem,
    LightingRule,
    LineItem,
    Material,
    ProjectRef,
)
from cabinet_pricing.domain.services.lighting import (
    LightingTotals,
    MaterialTypeCombination,
    RuleSelection,
    aggregate_lighting_costs,
    applicable_lighting_rules,
    material_type_combinations,
    select_lighting_rule,
)
from cabinet_pricing.infrastructure.api.errors import ApiError
from cabinet_pricing.infrastructure.api.lighting import LightingClient, LightingRulesClient
from cabinet_pricing.infrastructure.api.materials import MaterialsClient


class LightingStore(ResourceStore[LightingItem]):
    """Lighting items of one project.

    ``items`` holds the lighting items; ``rules`` holds every lighting rule
    visible to the admin, filtered per pair on demand.
    """

    def __init__(self, project: ProjectRef, client: LightingClient | None = None) -> None:
        self.lighting = client or LightingClient()
        super().__init__(self.lighting.items, paginate=False)
        self.project = project
        self.rules: list[LightingRule] = []

    def base_params(self) -> dict[str, Any]:
        return {"project": self.project.id}

    async def load_rules(self) -> ActionResult[list[LightingRule]]:
        try:
            page = await self._run(self.lighting.list_rules({"is_active": True}))
        except ApiError as e:
            return self._fail(e)
        self.rules = page.items
        return ActionResult.ok(self.rules)

    def applicable_rules(self, material: Any, cabinet_type: Any) -> list[LightingRule]:
        return applicable_lighting_rules(self.rules, material, cabinet_type, self.project)

    def select_rule(self, material: Any, cabinet_type: Any) -> RuleSelection:
        return select_lighting_rule(self.rules, material, cabinet_type, self.project)

    def combinations(self, line_items: list[LineItem]) -> list[MaterialTypeCombination]:
        return material_type_combinations(line_items)

    def totals(self) -> LightingTotals:
        return aggregate_lighting_costs(self.items)

    async def toggle_item(self, record_id: Any) -> ActionResult[LightingItem]:
        """Flip an item's ``is_active`` flag."""
        item = self.find(record_id)
        if item is None:
            return ActionResult(success=False, error="Lighting item not found")
        return await self.toggle_status(record_id, not item.is_active)

    async def recalculate_item(self, record_id: Any) -> ActionResult[LightingItem]:
        return await self._mutate(record_id, lambda: self.lighting.recalculate_item(record_id))


@dataclass(frozen=True)
class LightingRuleStats:
    total: int
    global_rules: int
    customer_rules: int
    active: int


class LightingRuleStore(ResourceStore[LightingRule]):
    """Every lighting rule, with the cabinet materials rules may name."""

    def __init__(
        self,
        client: LightingRulesClient | None = None,
        materials_client: MaterialsClient | None = None,
    ) -> None:
        client = client or LightingRulesClient()
        super().__init__(client, paginate=False)
        self.materials_client = materials_client or MaterialsClient(client.api)
        self.materials: list[Material] = []

    async def load_materials(self) -> ActionResult[list[Material]]:
        try:
            self.materials = await self._run(self.materials_client.cabinet_materials())
        except ApiError as e:
            return self._fail(e)
        return ActionResult.ok(self.materials)

    def stats(self) -> LightingRuleStats:
        global_rules = sum(1 for r in self.items if r.is_global)
        return LightingRuleStats(
            total=len(self.items),
            global_rules=global_rules,
            customer_rules=len(self.items) - global_rules,
            active=sum(1 for r in self.items if r.is_active),
        )
