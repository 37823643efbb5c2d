"""Accessories attached to project line items, plus catalog lookups."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from cabinet_pricing.contracts.pages import Page, unwrap_results
from cabinet_pricing.contracts.records import Brand, ProductVariant, ProjectAccessory
from cabinet_pricing.infrastructure.api.errors import ApiError
from cabinet_pricing.infrastructure.api.http import ResourceClient, parse_rows

logger = logging.getLogger(__name__)

BRANDS_PATH = "/api/catalog/brands/"

DEFAULT_BRANDS: tuple[str, ...] = ("Blum", "Hafele", "Hettich", "Godrej", "Ebco")
DEFAULT_ACCESSORY_CATEGORIES: tuple[str, ...] = (
    "Hardware",
    "Lighting",
    "Storage",
    "Decorative",
    "Handles & Knobs",
    "Hinges",
    "Slides & Rails",
)

# Fields copied when an accessory is duplicated onto another line item
COPY_FIELDS = ("product_variant", "qty", "unit_price", "installation_notes")


class ProjectAccessoriesClient(ResourceClient[ProjectAccessory]):
    """Client for ``/api/pricing/project-line-item-accessories/``."""

    path = "/api/pricing/project-line-item-accessories/"
    record_type = ProjectAccessory
    label = "accessory"
    plural = "accessories"

    async def for_project(
        self, project_id: Any, params: Mapping[str, Any] | None = None
    ) -> Page[ProjectAccessory]:
        return await self.list({**(params or {}), "project": project_id})

    async def for_line_item(self, line_item_id: Any) -> Page[ProjectAccessory]:
        return await self.list({"line_item": line_item_id})

    async def available_products(
        self, params: Mapping[str, Any] | None = None
    ) -> list[ProductVariant]:
        """Catalog variants that can be attached (accessories category by default)."""
        payload = await self.api.request(
            "GET",
            self.action_path("available_products"),
            params={"category": "ACCESSORIES", **(params or {})},
            fallback="Failed to fetch available products",
        )
        return parse_rows(payload, ProductVariant, "products")

    async def brands(self) -> list[Brand]:
        """Active catalog brands, or the built-in list if they cannot be loaded."""
        try:
            payload = await self.api.request(
                "GET", BRANDS_PATH, params={"is_active": True}, fallback="Failed to fetch brands"
            )
            return parse_rows(payload, Brand, "brands")
        except ApiError as e:
            logger.debug(f"Using default brands: {e}")
            return [Brand(id=i, name=name) for i, name in enumerate(DEFAULT_BRANDS, 1)]

    async def categories(self) -> list[str]:
        try:
            payload = await self.api.request(
                "GET", self.action_path("categories"), fallback="Failed to fetch categories"
            )
        except ApiError as e:
            logger.debug(f"Using default accessory categories: {e}")
            return list(DEFAULT_ACCESSORY_CATEGORIES)
        names = []
        for raw in unwrap_results(payload):
            names.append(raw.get("name", "") if isinstance(raw, dict) else str(raw))
        return [name for name in names if name]

    async def bulk_create(
        self, accessories: Iterable[Mapping[str, Any]]
    ) -> list[ProjectAccessory]:
        payload = await self.api.request(
            "POST",
            self.action_path("bulk-create"),
            json={"accessories": [dict(a) for a in accessories]},
            fallback="Failed to create accessories",
        )
        return self.parse_page(payload).items

    async def duplicate(self, record_id: Any, target_line_item_id: Any) -> ProjectAccessory:
        """Copy an accessory onto another line item."""
        source = await self.get(record_id)
        data = {key: getattr(source, key) for key in COPY_FIELDS}
        data["unit_price"] = str(source.unit_price)
        data["line_item"] = target_line_item_id
        return await self.create(data)
