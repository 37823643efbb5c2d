"""Project line item store with server-side pricing computation."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from cabinet_pricing.application.stores.base import ActionResult, ResourceStore, record_key
from cabinet_pricing.contracts.records import LineItem, Material
from cabinet_pricing.domain.services.dimensions import validate_dimensions
from cabinet_pricing.domain.services.numbers import parse_decimal, round_money
from cabinet_pricing.domain.value_objects import Scope
from cabinet_pricing.infrastructure.api.errors import ApiError
from cabinet_pricing.infrastructure.api.line_items import LineItemsClient
from cabinet_pricing.infrastructure.api.materials import MaterialsClient


@dataclass(frozen=True)
class LineItemStats:
    total: int
    total_value: Decimal
    average_line_value: Decimal
    by_scope: dict[str, int]
    by_cabinet_type: dict[str, int]
    total_cabinet_sqft: Decimal
    total_door_sqft: Decimal
    open_kitchen_value: Decimal
    working_kitchen_value: Decimal


def validate_line_item(data: Mapping[str, Any]) -> dict[str, str]:
    """Required references plus dimension ranges, keyed by field."""
    errors: dict[str, str] = {}
    if not data.get("cabinet_type"):
        errors["cabinet_type"] = "Cabinet type is required"
    if not data.get("cabinet_material"):
        errors["cabinet_material"] = "Cabinet material is required"
    if not data.get("door_material"):
        errors["door_material"] = "Door material is required"
    errors.update(validate_dimensions(data))
    return errors


class LineItemStore(ResourceStore[LineItem]):
    """Line items of one project.

    ``calculating`` holds the ids whose pricing is being recomputed.
    """

    client: LineItemsClient

    def __init__(
        self,
        project_id: Any,
        client: LineItemsClient | None = None,
        materials_client: MaterialsClient | None = None,
    ) -> None:
        client = client or LineItemsClient()
        super().__init__(client, paginate=False)
        self.project_id = project_id
        self.materials_client = materials_client or MaterialsClient(client.api)
        self.materials: list[Material] = []
        self.calculating: set[str] = set()

    def base_params(self) -> dict[str, Any]:
        return {"project": self.project_id}

    async def create(self, data: Mapping[str, Any]) -> ActionResult[LineItem]:
        return await super().create({**data, "project": self.project_id})

    async def load_materials(self) -> ActionResult[list[Material]]:
        try:
            self.materials = await self._run(self.materials_client.active())
        except ApiError as e:
            return self._fail(e)
        return ActionResult.ok(self.materials)

    def cabinet_materials(self) -> list[Material]:
        return [m for m in self.materials if m.usable_for_cabinet]

    def door_materials(self) -> list[Material]:
        return [m for m in self.materials if m.usable_for_door]

    def is_calculating(self, record_id: Any) -> bool:
        return record_key(record_id) in self.calculating

    async def compute_pricing(self, record_id: Any) -> ActionResult[LineItem]:
        key = record_key(record_id)
        self.calculating.add(key)
        try:
            return await self._mutate(record_id, lambda: self.client.compute(record_id))
        finally:
            self.calculating.discard(key)

    async def update_dimensions_and_compute(
        self, record_id: Any, dimensions: Mapping[str, Any]
    ) -> ActionResult[LineItem]:
        """Save new dimensions, then recompute pricing."""
        result = await self._mutate(
            record_id, lambda: self.client.update_dimensions(record_id, dimensions)
        )
        if not result.success:
            return result
        return await self.compute_pricing(record_id)

    async def update_materials_and_compute(
        self, record_id: Any, materials: Mapping[str, Any]
    ) -> ActionResult[LineItem]:
        """Save new materials, then recompute pricing."""
        result = await self._mutate(
            record_id, lambda: self.client.update_materials(record_id, materials)
        )
        if not result.success:
            return result
        return await self.compute_pricing(record_id)

    async def batch_compute(self, line_item_ids: Iterable[Any] | None = None) -> ActionResult[Any]:
        """Recompute several lines (all loaded ones by default), then reload."""
        ids = list(line_item_ids) if line_item_ids is not None else [i.id for i in self.items]
        self.error = None
        try:
            result = await self._run(self.client.batch_compute(ids))
        except ApiError as e:
            return self._fail(e)
        await self.fetch_all()
        return ActionResult.ok(result)

    async def duplicate(
        self, record_id: Any, overrides: Mapping[str, Any] | None = None
    ) -> ActionResult[LineItem]:
        self.error = None
        try:
            record = await self._run(self.client.duplicate(record_id, overrides))
        except ApiError as e:
            return self._fail(e)
        self.prepend(record)
        return ActionResult.ok(record)

    async def summary(self) -> ActionResult[dict[str, Any]]:
        try:
            data = await self._run(self.client.summary(self.project_id))
        except ApiError as e:
            return self._fail(e)
        return ActionResult.ok(data)

    def stats(self) -> LineItemStats:
        total = len(self.items)
        zero = Decimal("0")
        values = [parse_decimal(i.line_total_before_tax) for i in self.items]
        total_value = sum(values, zero)

        by_scope = {scope.value: 0 for scope in Scope}
        by_type: dict[str, int] = {}
        open_value = working_value = zero
        for item, value in zip(self.items, values):
            by_scope[item.scope.value] += 1
            name = (
                item.cabinet_type_detail.name
                if item.cabinet_type_detail and item.cabinet_type_detail.name
                else "Unknown"
            )
            by_type[name] = by_type.get(name, 0) + 1
            if item.scope is Scope.OPEN:
                open_value += value
            else:
                working_value += value

        return LineItemStats(
            total=total,
            total_value=total_value,
            average_line_value=round_money(total_value / total) if total else zero,
            by_scope=by_scope,
            by_cabinet_type=by_type,
            total_cabinet_sqft=sum(
                (parse_decimal(i.computed_cabinet_sqft) for i in self.items), zero
            ),
            total_door_sqft=sum((parse_decimal(i.computed_door_sqft) for i in self.items), zero),
            open_kitchen_value=open_value,
            working_kitchen_value=working_value,
        )
