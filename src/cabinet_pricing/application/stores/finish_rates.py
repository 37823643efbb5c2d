"""Finish rate store with per-material history grouping and tier averages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any

from cabinet_pricing.application.stores.base import ActionResult, ResourceStore, percentage
from cabinet_pricing.contracts.records import FinishRate, Material
from cabinet_pricing.domain.services.numbers import round_money
from cabinet_pricing.domain.services.rate_validity import classify_rate
from cabinet_pricing.domain.value_objects import BudgetTier, RateStatus
from cabinet_pricing.infrastructure.api.errors import ApiError
from cabinet_pricing.infrastructure.api.finish_rates import FinishRatesClient
from cabinet_pricing.infrastructure.api.materials import MaterialsClient


@dataclass(frozen=True)
class MaterialRateGroup:
    material_id: Any
    material_name: str
    rates: list[FinishRate] = field(default_factory=list)


@dataclass(frozen=True)
class FinishRateStats:
    total: int
    active: int
    inactive: int
    by_budget_tier: dict[str, int]
    unique_materials: int
    average_luxury_rate: Decimal
    average_economy_rate: Decimal
    active_percentage: int


def _average(values: list[Decimal]) -> Decimal:
    if not values:
        return Decimal("0.00")
    return round_money(sum(values, Decimal("0")) / len(values))


class FinishRateStore(ResourceStore[FinishRate]):
    """Finish rates plus the cabinet-eligible materials they price."""

    client: FinishRatesClient

    def __init__(
        self,
        client: FinishRatesClient | None = None,
        materials_client: MaterialsClient | None = None,
        page_size: int = 20,
    ) -> None:
        client = client or FinishRatesClient()
        super().__init__(client, page_size=page_size)
        self.materials_client = materials_client or MaterialsClient(client.api)
        self.materials: list[Material] = []

    async def load_materials(self) -> ActionResult[list[Material]]:
        """Load materials usable for cabinets (CABINET or BOTH)."""
        try:
            self.materials = await self._run(self.materials_client.cabinet_materials())
        except ApiError as e:
            return self._fail(e)
        return ActionResult.ok(self.materials)

    async def current_rates(self, today: date | None = None) -> ActionResult[list[FinishRate]]:
        try:
            page = await self._run(self.client.current_rates(today=today))
        except ApiError as e:
            return self._fail(e)
        return ActionResult.ok(page.items)

    async def rate_history(self, material_id: Any) -> ActionResult[list[FinishRate]]:
        try:
            page = await self._run(self.client.rate_history(material_id))
        except ApiError as e:
            return self._fail(e)
        return ActionResult.ok(page.items)

    async def bulk_update_prices(self, update_data: dict[str, Any]) -> ActionResult[Any]:
        """Apply a server-side bulk price change, then reload the list."""
        self.error = None
        try:
            result = await self._run(self.client.bulk_update_prices(update_data))
        except ApiError as e:
            return self._fail(e)
        await self.fetch_all()
        return ActionResult.ok(result)

    def status_of(self, rate: FinishRate, today: date | None = None) -> RateStatus:
        return classify_rate(rate.effective_from, rate.effective_to, today)

    def grouped_by_material(self) -> list[MaterialRateGroup]:
        """Group rates by material name, newest ``effective_from`` first."""
        groups: dict[str, tuple[Any, list[FinishRate]]] = {}
        for rate in self.items:
            name = rate.material_name
            groups.setdefault(name, (rate.material, []))[1].append(rate)
        return [
            MaterialRateGroup(
                material_id=material_id,
                material_name=name,
                rates=sorted(rates, key=lambda r: r.effective_from, reverse=True),
            )
            for name, (material_id, rates) in groups.items()
        ]

    def stats(self) -> FinishRateStats:
        total = len(self.items)
        active_rates = [r for r in self.items if r.is_active]
        by_tier = {tier.value: 0 for tier in BudgetTier}
        for rate in self.items:
            by_tier[rate.budget_tier.value] += 1
        return FinishRateStats(
            total=total,
            active=len(active_rates),
            inactive=total - len(active_rates),
            by_budget_tier=by_tier,
            unique_materials=len({str(r.material) for r in self.items}),
            average_luxury_rate=_average(
                [r.unit_rate for r in active_rates if r.budget_tier is BudgetTier.LUXURY]
            ),
            average_economy_rate=_average(
                [r.unit_rate for r in active_rates if r.budget_tier is BudgetTier.ECONOMY]
            ),
            active_percentage=percentage(len(active_rates), total),
        )
