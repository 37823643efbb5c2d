"""Client-side list views: search, filters, sorting, paging and selection.

A ``ListView`` never changes the records it is given; every query returns a
new list. With an empty search and no filters the filtered view holds every
record.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Hashable, Iterable, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Generic, TypeVar

T = TypeVar("T")

Accessor = Callable[[Any], Any]


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def _same(left: Any, right: Any) -> bool:
    """Exact-match filter comparison tolerant of int vs numeric string ids."""
    return _text(getattr(left, "value", left)) == _text(getattr(right, "value", right))


def _sort_key(value: Any) -> tuple[int, Any]:
    if value is None:
        return (1, "")
    if isinstance(value, str):
        return (0, value.lower())
    return (0, value)


@dataclass(frozen=True)
class ListCounts:
    shown: int
    filtered: int
    total: int

    def __str__(self) -> str:
        return f"Showing {self.shown} of {self.filtered}"


@dataclass
class ListView(Generic[T]):
    """Filtered, sorted, paged view over a list of records.

    Attributes:
        search_fields: Accessors whose text is searched (case-insensitive
            substring).
        filter_fields: Filter name to accessor; blank filter values are
            ignored.
        sort_fields: Sort name to accessor.
    """

    search_fields: Sequence[Accessor] = ()
    filter_fields: dict[str, Accessor] = field(default_factory=dict)
    sort_fields: dict[str, Accessor] = field(default_factory=dict)
    search: str = ""
    filters: dict[str, Any] = field(default_factory=dict)
    sort_by: str | None = None
    descending: bool = False
    page: int = 1
    page_size: int | None = None

    def set_search(self, term: str) -> None:
        self.search = term
        self.page = 1

    def set_filter(self, name: str, value: Any) -> None:
        if name not in self.filter_fields:
            raise KeyError(f"Unknown filter: {name}")
        self.filters[name] = value
        self.page = 1

    def clear(self) -> None:
        self.search = ""
        self.filters = {}
        self.page = 1

    def set_sort(self, name: str, descending: bool = False) -> None:
        if name not in self.sort_fields:
            raise KeyError(f"Unknown sort field: {name}")
        self.sort_by = name
        self.descending = descending

    def matches(self, record: T) -> bool:
        term = self.search.strip().lower()
        if term and not any(term in _text(get(record)).lower() for get in self.search_fields):
            return False
        for name, wanted in self.filters.items():
            if wanted is None or wanted == "":
                continue
            if not _same(self.filter_fields[name](record), wanted):
                return False
        return True

    def filtered(self, records: Iterable[T]) -> list[T]:
        result = [r for r in records if self.matches(r)]
        if self.sort_by is not None:
            get = self.sort_fields[self.sort_by]
            result.sort(key=lambda r: _sort_key(get(r)), reverse=self.descending)
        return result

    def page_count(self, records: Iterable[T]) -> int:
        if not self.page_size:
            return 1
        return max(1, -(-len(self.filtered(records)) // self.page_size))

    def visible(self, records: Iterable[T]) -> list[T]:
        result = self.filtered(records)
        if not self.page_size:
            return result
        start = (self.page - 1) * self.page_size
        return result[start : start + self.page_size]

    def counts(self, records: Sequence[T]) -> ListCounts:
        return ListCounts(
            shown=len(self.visible(records)),
            filtered=len(self.filtered(records)),
            total=len(records),
        )


@dataclass(frozen=True)
class RecordGroup(Generic[T]):
    key: Any
    label: str
    records: list[T]

    @property
    def count(self) -> int:
        return len(self.records)


def group_records(
    records: Iterable[T],
    key: Callable[[T], Hashable],
    label: Callable[[T], str] | None = None,
) -> list[RecordGroup[T]]:
    """Group records by ``key`` in order of first appearance."""
    groups: dict[Hashable, tuple[str, list[T]]] = {}
    for record in records:
        group_key = key(record)
        if group_key not in groups:
            groups[group_key] = (label(record) if label else str(group_key), [])
        groups[group_key][1].append(record)
    return [RecordGroup(key=k, label=name, records=items) for k, (name, items) in groups.items()]


class Selection:
    """Checkbox selection over record ids."""

    def __init__(self) -> None:
        self.selected: list[Any] = []

    def __contains__(self, record_id: Any) -> bool:
        return str(record_id) in {str(i) for i in self.selected}

    def __len__(self) -> int:
        return len(self.selected)

    def toggle(self, record_id: Any) -> None:
        if record_id in self:
            self.selected = [i for i in self.selected if str(i) != str(record_id)]
        else:
            self.selected.append(record_id)

    def select_all(self, records: Iterable[Any]) -> None:
        self.selected = [record.id for record in records]

    def all_selected(self, records: Sequence[Any]) -> bool:
        return bool(records) and all(record.id in self for record in records)

    def clear(self) -> None:
        self.selected = []

    async def bulk_action(self, callback: Callable[[list[Any]], Awaitable[Any]]) -> Any:
        """Hand the selected ids to ``callback``; a no-op when nothing is selected."""
        if not self.selected:
            return None
        return await callback(list(self.selected))


def _attr(name: str) -> Accessor:
    return lambda record: getattr(record, name, None)


def _detail_name(name: str) -> Accessor:
    def get(record: Any) -> Any:
        detail = getattr(record, name, None)
        return getattr(detail, "name", None) if detail is not None else None

    return get


def cabinet_types_view(page_size: int | None = None) -> ListView[Any]:
    return ListView(
        search_fields=(_attr("name"), _attr("description")),
        filter_fields={"category": lambda r: r.category_id, "is_active": _attr("is_active")},
        sort_fields={"name": _attr("name"), "category": lambda r: _text(r.category_id)},
        page_size=page_size,
    )


def finish_rates_view(page_size: int | None = None) -> ListView[Any]:
    return ListView(
        search_fields=(lambda r: r.material_name, _attr("unit_rate")),
        filter_fields={"material": _attr("material"), "budget_tier": _attr("budget_tier")},
        sort_fields={
            "material": lambda r: r.material_name,
            "unit_rate": _attr("unit_rate"),
            "effective_from": _attr("effective_from"),
        },
        page_size=page_size,
    )


def accessories_view(page_size: int | None = None) -> ListView[Any]:
    return ListView(
        search_fields=(
            _attr("accessory_name"),
            _attr("material_code"),
            _attr("installation_notes"),
        ),
        filter_fields={"line_item": _attr("line_item")},
        sort_fields={"name": _attr("accessory_name"), "total_price": _attr("total_price")},
        page_size=page_size,
    )


def line_items_view(page_size: int | None = None) -> ListView[Any]:
    return ListView(
        search_fields=(
            _detail_name("cabinet_type_detail"),
            _detail_name("cabinet_material_detail"),
            _detail_name("door_material_detail"),
        ),
        filter_fields={"scope": _attr("scope"), "cabinet_type": _attr("cabinet_type")},
        sort_fields={
            "width": _attr("width_mm"),
            "line_total": _attr("line_total_before_tax"),
        },
        page_size=page_size,
    )


def lighting_rules_view(page_size: int | None = None) -> ListView[Any]:
    """Rules by name or material; the ``customer`` filter value ``"global"`` means global rules."""
    return ListView(
        search_fields=(_attr("name"), _attr("cabinet_material")),
        filter_fields={
            "customer": lambda r: "global" if r.is_global else r.customer,
            "cabinet_material": _attr("cabinet_material"),
            "budget_tier": _attr("budget_tier"),
            "is_active": _attr("is_active"),
        },
        sort_fields={
            "name": _attr("name"),
            "budget_tier": lambda r: r.budget_tier.value,
            "led_strip_rate": _attr("led_strip_rate_per_mm"),
        },
        page_size=page_size,
    )


def pdf_history_view(page_size: int | None = None) -> ListView[Any]:
    return ListView(
        search_fields=(_attr("project_name"), _attr("customer_name"), _attr("filename")),
        filter_fields={
            "status": lambda r: r.pdf_status,
            "template_type": _attr("template_type"),
        },
        sort_fields={
            "created_at": _attr("created_at"),
            "final_amount": _attr("final_amount"),
            "filename": _attr("filename"),
        },
        page_size=page_size,
    )
