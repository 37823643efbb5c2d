"""Finish rates: dated per-material prices by budget tier."""

from __future__ import annotations

from datetime import date
from typing import Any

from cabinet_pricing.contracts.pages import Page
from cabinet_pricing.contracts.records import FinishRate
from cabinet_pricing.domain.value_objects import BudgetTier
from cabinet_pricing.infrastructure.api.http import ResourceClient


class FinishRatesClient(ResourceClient[FinishRate]):
    """Client for ``/api/pricing/finish-rates/``."""

    path = "/api/pricing/finish-rates/"
    record_type = FinishRate
    label = "finish rate"
    plural = "finish rates"

    async def by_material(self, material_id: Any) -> Page[FinishRate]:
        payload = await self.api.request(
            "GET",
            self.path,
            params={"material": material_id},
            fallback="Failed to fetch rates for material",
        )
        return self.parse_page(payload)

    async def by_budget_tier(self, budget_tier: BudgetTier | str) -> Page[FinishRate]:
        payload = await self.api.request(
            "GET",
            self.path,
            params={"budget_tier": BudgetTier(budget_tier).value},
            fallback="Failed to fetch rates by budget tier",
        )
        return self.parse_page(payload)

    async def current_rates(
        self, params: dict[str, Any] | None = None, today: date | None = None
    ) -> Page[FinishRate]:
        """Active rates that have already taken effect."""
        on = (today or date.today()).isoformat()
        payload = await self.api.request(
            "GET",
            self.path,
            params={**(params or {}), "effective_from__lte": on, "is_active": True},
            fallback="Failed to fetch current rates",
        )
        return self.parse_page(payload)

    async def rate_history(
        self, material_id: Any, params: dict[str, Any] | None = None
    ) -> Page[FinishRate]:
        """All rates of a material, newest first."""
        payload = await self.api.request(
            "GET",
            self.path,
            params={"material": material_id, "ordering": "-effective_from", **(params or {})},
            fallback="Failed to fetch rate history",
        )
        return self.parse_page(payload)

    async def bulk_update_prices(self, update_data: dict[str, Any]) -> Any:
        return await self.api.request(
            "POST",
            self.action_path("bulk-update"),
            json=update_data,
            fallback="Failed to bulk update prices",
        )
