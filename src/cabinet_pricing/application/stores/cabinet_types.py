"""Cabinet type store with category grouping and stats."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from cabinet_pricing.application.stores.base import (
    ActionResult,
    ResourceStore,
    percentage,
    record_key,
)
from cabinet_pricing.contracts.records import CabinetType, Category
from cabinet_pricing.infrastructure.api.cabinet_types import CabinetTypesClient
from cabinet_pricing.infrastructure.api.errors import ApiError


@dataclass(frozen=True)
class CategoryGroup:
    category_id: Any
    category_name: str
    types: list[CabinetType] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.types)


@dataclass(frozen=True)
class CabinetTypeStats:
    total: int
    active: int
    inactive: int
    by_category: dict[str, int]
    active_percentage: int
    categories_count: int


class CabinetTypeStore(ResourceStore[CabinetType]):
    """Cabinet types plus the category reference list."""

    client: CabinetTypesClient

    def __init__(self, client: CabinetTypesClient | None = None, page_size: int = 20) -> None:
        super().__init__(client or CabinetTypesClient(), page_size=page_size)
        self.categories: list[Category] = []

    async def load_categories(self) -> list[Category]:
        """Load categories; the client falls back to defaults on failure."""
        self.categories = await self._run(self.client.categories())
        return self.categories

    def category_name(self, category_id: Any) -> str:
        for category in self.categories:
            if record_key(category.id) == record_key(category_id):
                return category.name
        return "Unknown"

    async def duplicate(
        self, record_id: Any, new_data: Mapping[str, Any] | None = None
    ) -> ActionResult[CabinetType]:
        self.error = None
        try:
            record = await self._run(self.client.duplicate(record_id, dict(new_data or {})))
        except ApiError as e:
            return self._fail(e)
        self.prepend(record)
        return ActionResult.ok(record)

    async def by_category(self, category: str | int) -> ActionResult[list[CabinetType]]:
        """Fetch one category's types without touching ``items``."""
        try:
            page = await self._run(self.client.by_category(category))
        except ApiError as e:
            return self._fail(e)
        return ActionResult.ok(page.items)

    def grouped_by_category(self) -> list[CategoryGroup]:
        """Group current types by category, each group sorted by name.

        Groups appear in order of first appearance.
        """
        groups: dict[str, tuple[Any, str, list[CabinetType]]] = {}
        for cabinet_type in self.items:
            category_id = cabinet_type.category_id
            key = record_key(category_id)
            if key not in groups:
                name = (
                    cabinet_type.category_detail.name
                    if cabinet_type.category_detail and cabinet_type.category_detail.name
                    else self.category_name(category_id)
                )
                groups[key] = (category_id, name, [])
            groups[key][2].append(cabinet_type)

        return [
            CategoryGroup(
                category_id=category_id,
                category_name=name,
                types=sorted(types, key=lambda t: t.name.lower()),
            )
            for category_id, name, types in groups.values()
        ]

    def stats(self) -> CabinetTypeStats:
        total = len(self.items)
        active = sum(1 for t in self.items if t.is_active)
        by_category: dict[str, int] = {}
        for group in self.grouped_by_category():
            by_category[group.category_name] = group.count
        return CabinetTypeStats(
            total=total,
            active=active,
            inactive=total - active,
            by_category=by_category,
            active_percentage=percentage(active, total),
            categories_count=len(by_category),
        )
