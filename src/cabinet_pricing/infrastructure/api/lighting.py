"""Lighting rules and the per-project lighting items priced from them."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from cabinet_pricing.contracts.pages import Page
from cabinet_pricing.contracts.records import LightingItem, LightingRule
from cabinet_pricing.infrastructure.api.http import ApiClient, ResourceClient


class LightingRulesClient(ResourceClient[LightingRule]):
    path = "/api/pricing/lighting-rules/"
    record_type = LightingRule
    label = "lighting rule"
    plural = "lighting rules"


class LightingItemsClient(ResourceClient[LightingItem]):
    path = "/api/pricing/lighting-items/"
    record_type = LightingItem
    label = "lighting item"
    plural = "lighting items"

    async def for_project(self, project_id: Any) -> Page[LightingItem]:
        return await self.list({"project": project_id})

    async def recalculate(self, record_id: Any) -> LightingItem:
        payload = await self.api.request(
            "POST",
            self.detail_path(record_id, "recalculate"),
            fallback="Failed to recalculate lighting item",
            status_messages=self._missing(),
        )
        return self.parse(payload)


class LightingClient:
    """Facade over the two lighting endpoints, sharing one ``ApiClient``."""

    def __init__(self, api: ApiClient | None = None) -> None:
        api = api or ApiClient()
        self.rules = LightingRulesClient(api)
        self.items = LightingItemsClient(api)

    async def list_rules(self, params: Mapping[str, Any] | None = None) -> Page[LightingRule]:
        return await self.rules.list(params)

    async def list_items(self, project_id: Any) -> Page[LightingItem]:
        return await self.items.for_project(project_id)

    async def recalculate_item(self, record_id: Any) -> LightingItem:
        return await self.items.recalculate(record_id)
