"""Unit tests for client-side list views and selection."""

from __future__ import annotations

from decimal import Decimal

import pytest

from cabinet_pricing.application.listing import (
    Selection,
    cabinet_types_view,
    finish_rates_view,
    group_records,
    lighting_rules_view,
    line_items_view,
    pdf_history_view,
)
from cabinet_pricing.contracts.records import FinishRate, LightingRule, LineItem, PdfHistoryEntry
from fakes import cabinet_type
from payloads import (
    finish_rate_payload,
    lighting_rule_payload,
    line_item_payload,
    pdf_history_payload,
)


@pytest.fixture
def cabinet_types():
    return [
        cabinet_type(1, name="Sink Base", description="Under sink"),
        cabinet_type(2, name="Drawer Base"),
        cabinet_type(3, name="Wall Glass", category=2, category_detail=None, is_active=False),
        cabinet_type(4, name="wall plain", category="2", category_detail=None),
    ]


class TestListView:
    """Tests for ListView search, filters, sorting and paging."""

    def test_no_search_or_filters_shows_everything(self, cabinet_types) -> None:
        view = cabinet_types_view()
        assert view.filtered(cabinet_types) == cabinet_types

    def test_search_is_case_insensitive_over_fields(self, cabinet_types) -> None:
        view = cabinet_types_view()
        view.set_search("SINK")
        assert [t.id for t in view.filtered(cabinet_types)] == [1]
        view.set_search("under")
        assert [t.id for t in view.filtered(cabinet_types)] == [1]

    def test_filter_tolerates_int_and_string_ids(self, cabinet_types) -> None:
        view = cabinet_types_view()
        view.set_filter("category", "2")
        assert [t.id for t in view.filtered(cabinet_types)] == [3, 4]

    def test_boolean_filter(self, cabinet_types) -> None:
        view = cabinet_types_view()
        view.set_filter("is_active", False)
        assert [t.id for t in view.filtered(cabinet_types)] == [3]

    def test_blank_filter_ignored(self, cabinet_types) -> None:
        view = cabinet_types_view()
        view.set_filter("category", "")
        assert len(view.filtered(cabinet_types)) == 4

    def test_unknown_filter_rejected(self) -> None:
        with pytest.raises(KeyError):
            cabinet_types_view().set_filter("colour", "red")

    def test_filtering_does_not_touch_source(self, cabinet_types) -> None:
        before = list(cabinet_types)
        view = cabinet_types_view()
        view.set_search("wall")
        view.set_sort("name", descending=True)
        view.filtered(cabinet_types)
        assert cabinet_types == before

    def test_sort_by_name_ignores_case(self, cabinet_types) -> None:
        view = cabinet_types_view()
        view.set_sort("name")
        assert [t.name for t in view.filtered(cabinet_types)] == [
            "Drawer Base",
            "Sink Base",
            "Wall Glass",
            "wall plain",
        ]

    def test_paging_and_counts(self, cabinet_types) -> None:
        view = cabinet_types_view(page_size=3)
        assert view.page_count(cabinet_types) == 2
        view.page = 2
        assert [t.id for t in view.visible(cabinet_types)] == [4]

        view.set_search("base")
        assert view.page == 1
        counts = view.counts(cabinet_types)
        assert (counts.shown, counts.filtered, counts.total) == (2, 2, 4)
        assert str(counts) == "Showing 2 of 2"

    def test_clear(self, cabinet_types) -> None:
        view = cabinet_types_view()
        view.set_search("sink")
        view.set_filter("is_active", True)
        view.clear()
        assert len(view.filtered(cabinet_types)) == 4


class TestResourceViews:
    def test_finish_rates_filter_by_tier_and_search_rate(self) -> None:
        rates = [
            FinishRate.model_validate(finish_rate_payload(1)),
            FinishRate.model_validate(
                finish_rate_payload(2, budget_tier="ECONOMY", unit_rate="275.50")
            ),
        ]
        view = finish_rates_view()
        view.set_filter("budget_tier", "ECONOMY")
        assert [r.id for r in view.filtered(rates)] == [2]

        view.clear()
        view.set_search("275.5")
        assert [r.id for r in view.filtered(rates)] == [2]

    def test_finish_rates_sort_by_rate_descending(self) -> None:
        rates = [
            FinishRate.model_validate(finish_rate_payload(1, unit_rate="100")),
            FinishRate.model_validate(finish_rate_payload(2, unit_rate="900")),
        ]
        view = finish_rates_view()
        view.set_sort("unit_rate", descending=True)
        assert [r.unit_rate for r in view.filtered(rates)] == [Decimal("900"), Decimal("100")]

    def test_line_items_search_material_names(self) -> None:
        items = [
            LineItem.model_validate(line_item_payload(1)),
            LineItem.model_validate(
                line_item_payload(2, door_material_detail={"id": 12, "name": "Lacquer"})
            ),
        ]
        view = line_items_view()
        view.set_search("lacq")
        assert [i.id for i in view.filtered(items)] == [2]

    def test_lighting_rules_customer_filter_treats_global_as_a_value(self) -> None:
        rules = [
            LightingRule.model_validate(lighting_rule_payload(1)),
            LightingRule.model_validate(
                lighting_rule_payload(2, is_global=False, customer=42, is_active=False)
            ),
        ]
        view = lighting_rules_view()
        view.set_filter("customer", "global")
        assert [r.id for r in view.filtered(rules)] == [1]

        view.set_filter("customer", "42")
        assert [r.id for r in view.filtered(rules)] == [2]

        view.set_filter("is_active", True)
        assert view.filtered(rules) == []

    def test_pdf_history_status_filter_reads_backend_words(self) -> None:
        entries = [
            PdfHistoryEntry.model_validate(pdf_history_payload(1)),
            PdfHistoryEntry.model_validate(
                pdf_history_payload(2, status="in_progress", customer_name="Ravi Kumar")
            ),
        ]
        view = pdf_history_view()
        view.set_filter("status", "generating")
        assert [e.id for e in view.filtered(entries)] == [2]

        view.clear()
        view.set_search("ravi")
        assert [e.id for e in view.filtered(entries)] == [2]


def test_group_records_in_first_appearance_order(cabinet_types) -> None:
    groups = group_records(cabinet_types, key=lambda t: str(t.category_id))
    assert [g.key for g in groups] == ["1", "2"]
    assert [g.count for g in groups] == [2, 2]


class TestSelection:
    def test_toggle_and_membership(self) -> None:
        selection = Selection()
        selection.toggle(1)
        selection.toggle("2")
        assert 2 in selection
        selection.toggle("1")
        assert 1 not in selection
        assert len(selection) == 1

    def test_select_all(self, cabinet_types) -> None:
        selection = Selection()
        selection.select_all(cabinet_types)
        assert selection.all_selected(cabinet_types)
        selection.clear()
        assert not selection.all_selected(cabinet_types)
        assert not selection.all_selected([])

    @pytest.mark.asyncio
    async def test_bulk_action(self) -> None:
        received = []

        async def archive(ids):
            received.append(ids)
            return len(ids)

        selection = Selection()
        assert await selection.bulk_action(archive) is None
        selection.toggle(5)
        assert await selection.bulk_action(archive) == 1
        assert received == [[5]]
