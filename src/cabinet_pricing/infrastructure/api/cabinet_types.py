"""Cabinet types and their categories."""

from __future__ import annotations

import logging
from typing import Any

from cabinet_pricing.contracts.pages import Page
from cabinet_pricing.contracts.records import CabinetType, Category
from cabinet_pricing.infrastructure.api.errors import ApiError
from cabinet_pricing.infrastructure.api.http import ResourceClient, parse_rows

logger = logging.getLogger(__name__)

CATEGORIES_PATH = "/api/catalog/categories/"

# Served when the catalog endpoint is unreachable
DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category(id=1, name="Base Cabinets", description="Floor-mounted storage cabinets"),
    Category(id=2, name="Wall Cabinets", description="Wall-mounted upper cabinets"),
    Category(id=3, name="Tall Cabinets", description="Full-height storage units"),
    Category(id=4, name="Special Cabinets", description="Custom and specialty cabinets"),
)


class CabinetTypesClient(ResourceClient[CabinetType]):
    """Client for ``/api/pricing/cabinet-types/``."""

    path = "/api/pricing/cabinet-types/"
    record_type = CabinetType
    label = "cabinet type"
    plural = "cabinet types"

    async def by_category(self, category: str | int) -> Page[CabinetType]:
        """List types in one category. Category codes are sent upper-cased."""
        value = category.upper() if isinstance(category, str) else category
        payload = await self.api.request(
            "GET",
            self.path,
            params={"category": value},
            fallback="Failed to fetch cabinet types by category",
        )
        return self.parse_page(payload)

    async def search(self, query: str, **filters: Any) -> Page[CabinetType]:
        payload = await self.api.request(
            "GET",
            self.path,
            params={"search": query, **filters},
            fallback="Failed to search cabinet types",
        )
        return self.parse_page(payload)

    async def duplicate(self, record_id: Any, new_data: dict[str, Any] | None = None) -> CabinetType:
        """Copy a cabinet type, optionally overriding fields of the copy."""
        payload = await self.api.request(
            "POST",
            self.action_path("duplicate"),
            json={"source_id": record_id, **(new_data or {})},
            fallback="Failed to duplicate cabinet type",
        )
        return self.parse(payload)

    async def bulk_update(self, update_data: dict[str, Any]) -> Any:
        return await self.api.request(
            "POST",
            self.action_path("bulk-update"),
            json=update_data,
            fallback="Failed to perform bulk update",
        )

    async def categories(self) -> list[Category]:
        """Fetch cabinet categories, falling back to the standard four."""
        try:
            payload = await self.api.request(
                "GET", CATEGORIES_PATH, fallback="Failed to fetch categories"
            )
            return parse_rows(payload, Category, "categories")
        except ApiError as e:
            logger.debug(f"Using default categories: {e}")
            return list(DEFAULT_CATEGORIES)
