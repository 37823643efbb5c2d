"""Project accessory store with per-line totals and catalog reference data."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from cabinet_pricing.application.stores.base import ActionResult, ResourceStore, record_key
from cabinet_pricing.contracts.records import Brand, ProductVariant, ProjectAccessory
from cabinet_pricing.domain.services.numbers import parse_decimal
from cabinet_pricing.infrastructure.api.errors import ApiError
from cabinet_pricing.infrastructure.api.project_accessories import ProjectAccessoriesClient


@dataclass(frozen=True)
class AccessoryTotals:
    """Project-wide accessory value and counts per line item."""

    project_total: Decimal = Decimal("0")
    item_counts: dict[str, int] = field(default_factory=dict)
    line_totals: dict[str, Decimal] = field(default_factory=dict)


class ProjectAccessoryStore(ResourceStore[ProjectAccessory]):
    """Accessories of one project."""

    client: ProjectAccessoriesClient

    def __init__(self, project_id: Any, client: ProjectAccessoriesClient | None = None) -> None:
        super().__init__(client or ProjectAccessoriesClient(), paginate=False)
        self.project_id = project_id
        self.products: list[ProductVariant] = []
        self.brands: list[Brand] = []
        self.categories: list[str] = []

    def base_params(self) -> dict[str, Any]:
        return {"project": self.project_id}

    async def load_reference_data(self) -> None:
        """Load brands and categories; both fall back to built-in lists."""
        self.brands = await self._run(self.client.brands())
        self.categories = await self._run(self.client.categories())

    async def available_products(
        self, params: Mapping[str, Any] | None = None
    ) -> ActionResult[list[ProductVariant]]:
        try:
            self.products = await self._run(self.client.available_products(params))
        except ApiError as e:
            return self._fail(e)
        return ActionResult.ok(self.products)

    def product(self, variant_id: Any) -> ProductVariant | None:
        key = record_key(variant_id)
        return next((p for p in self.products if record_key(p.id) == key), None)

    async def bulk_create(
        self, accessories: Iterable[Mapping[str, Any]]
    ) -> ActionResult[list[ProjectAccessory]]:
        self.error = None
        try:
            created = await self._run(self.client.bulk_create(accessories))
        except ApiError as e:
            return self._fail(e)
        for record in reversed(created):
            self.prepend(record)
        return ActionResult.ok(created)

    async def duplicate(
        self, record_id: Any, target_line_item_id: Any
    ) -> ActionResult[ProjectAccessory]:
        self.error = None
        try:
            record = await self._run(self.client.duplicate(record_id, target_line_item_id))
        except ApiError as e:
            return self._fail(e)
        self.prepend(record)
        return ActionResult.ok(record)

    def by_line_item(self) -> dict[str, list[ProjectAccessory]]:
        grouped: dict[str, list[ProjectAccessory]] = {}
        for accessory in self.items:
            grouped.setdefault(record_key(accessory.line_item), []).append(accessory)
        return grouped

    def totals(self) -> AccessoryTotals:
        counts: dict[str, int] = {}
        line_totals: dict[str, Decimal] = {}
        for line_item, accessories in self.by_line_item().items():
            counts[line_item] = len(accessories)
            line_totals[line_item] = sum(
                (parse_decimal(a.total_price) for a in accessories), Decimal("0")
            )
        return AccessoryTotals(
            project_total=sum(line_totals.values(), Decimal("0")),
            item_counts=counts,
            line_totals=line_totals,
        )
