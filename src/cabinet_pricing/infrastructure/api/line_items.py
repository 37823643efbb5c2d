"""Project line items and their server-side price computation."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from cabinet_pricing.contracts.pages import Page
from cabinet_pricing.contracts.records import LineItem
from cabinet_pricing.infrastructure.api.http import ResourceClient

DIMENSION_FIELDS = ("width_mm", "depth_mm", "height_mm", "qty")
MATERIAL_FIELDS = ("cabinet_material", "door_material")


def _pick(data: Mapping[str, Any], fields: Iterable[str]) -> dict[str, Any]:
    return {key: data[key] for key in fields if key in data}


class LineItemsClient(ResourceClient[LineItem]):
    """Client for ``/api/pricing/project-line-items/``."""

    path = "/api/pricing/project-line-items/"
    record_type = LineItem
    label = "line item"
    plural = "line items"

    async def for_project(
        self, project_id: Any, params: Mapping[str, Any] | None = None
    ) -> Page[LineItem]:
        return await self.list({**(params or {}), "project": project_id})

    async def compute(self, record_id: Any) -> LineItem:
        """Ask the backend to recompute a line item's areas and totals."""
        payload = await self.api.request(
            "POST",
            self.detail_path(record_id, "compute"),
            fallback="Failed to compute pricing",
            status_messages=self._missing(),
        )
        return self.parse(payload)

    async def update_dimensions(self, record_id: Any, dimensions: Mapping[str, Any]) -> LineItem:
        payload = await self.api.request(
            "PATCH",
            self.detail_path(record_id, "update-dimensions"),
            json=_pick(dimensions, DIMENSION_FIELDS),
            fallback="Failed to update dimensions",
            status_messages=self._missing(),
        )
        return self.parse(payload)

    async def update_materials(self, record_id: Any, materials: Mapping[str, Any]) -> LineItem:
        payload = await self.api.request(
            "PATCH",
            self.detail_path(record_id, "update-materials"),
            json=_pick(materials, MATERIAL_FIELDS),
            fallback="Failed to update materials",
            status_messages=self._missing(),
        )
        return self.parse(payload)

    async def batch_compute(self, line_item_ids: Iterable[Any]) -> Any:
        return await self.api.request(
            "POST",
            self.action_path("batch-compute"),
            json={"line_item_ids": list(line_item_ids)},
            fallback="Failed to batch compute pricing",
        )

    async def duplicate(self, record_id: Any, overrides: Mapping[str, Any] | None = None) -> LineItem:
        payload = await self.api.request(
            "POST",
            self.detail_path(record_id, "duplicate"),
            json=dict(overrides or {}),
            fallback="Failed to duplicate line item",
            status_messages=self._missing(),
        )
        return self.parse(payload)

    async def bulk_create(self, line_items: Iterable[Mapping[str, Any]]) -> list[LineItem]:
        payload = await self.api.request(
            "POST",
            self.action_path("bulk-create"),
            json={"line_items": [dict(item) for item in line_items]},
            fallback="Failed to create line items",
        )
        return self.parse_page(payload).items

    async def summary(self, project_id: Any) -> dict[str, Any]:
        """Backend's project summary (totals per scope, tax, grand total)."""
        payload = await self.api.request(
            "GET",
            self.action_path(f"summary/{project_id}"),
            fallback="Failed to fetch project summary",
        )
        return payload or {}
