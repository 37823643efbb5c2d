"""Integration tests for admin page controllers.

These tests drive an AdminPage through whole admin flows, including:
- Loading and retrying the list
- Create/edit through the editor and form
- Delete and toggle with notifications
- Notification expiry
- The quotation PDF screen: customization, generation and download
"""

from __future__ import annotations

import pytest
from pytest_httpx import HTTPXMock

from cabinet_pricing.application.config import ClientSettings
from cabinet_pricing.application.forms import CabinetTypeForm
from cabinet_pricing.application.listing import cabinet_types_view
from cabinet_pricing.application.pages import (
    AdminPage,
    EditorMode,
    EditorState,
    NotificationType,
    Notifier,
    QuotationPdfPage,
    accessories_page,
    cabinet_types_page,
    lighting_rules_page,
    quotation_pdf_page,
)
from cabinet_pricing.application.stores import CabinetTypeStore, QuotationPdfStore
from cabinet_pricing.infrastructure.api.errors import ApiError
from fakes import FakeCabinetTypesClient, FakeQuotationPdfClient, cabinet_type
from payloads import BASE_URL, cabinet_type_payload, lighting_rule_payload, url


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def make_page(*records) -> tuple[AdminPage, FakeCabinetTypesClient]:
    client = FakeCabinetTypesClient(list(records))
    page = AdminPage(
        CabinetTypeStore(client),  # type: ignore[arg-type]
        cabinet_types_view(),
        CabinetTypeForm,
        "cabinet type",
    )
    return page, client


class TestNotifier:
    def test_expires_after_configured_seconds(self) -> None:
        clock = FakeClock()
        notifier = Notifier(seconds=5, clock=clock)
        notifier.success("Saved")
        clock.now += 4.9
        assert notifier.current.message == "Saved"
        clock.now += 0.1
        assert notifier.current is None

    def test_new_notification_replaces_old(self) -> None:
        notifier = Notifier(clock=FakeClock())
        notifier.success("first")
        notifier.error("second")
        assert notifier.current.message == "second"
        assert notifier.current.type is NotificationType.ERROR
        notifier.dismiss()
        assert notifier.current is None


class TestEditorState:
    def test_states(self) -> None:
        assert not EditorState.closed().is_open
        assert EditorState.creating().mode is EditorMode.CREATING
        editing = EditorState.editing(4)
        assert editing.is_open
        assert editing.record_id == 4


class TestAdminPageFlows:
    """End-to-end flows over an in-memory backend."""

    @pytest.mark.asyncio
    async def test_load_failure_notifies_and_retry_recovers(self) -> None:
        page, client = make_page(cabinet_type(1))
        client.fail_next("Failed to fetch cabinet types", status_code=None)
        await page.load()
        assert page.notifier.current.message == "Failed to fetch cabinet types"
        assert page.store.error == "Failed to fetch cabinet types"

        result = await page.retry()
        assert result.success
        assert [t.id for t in page.visible()] == [1]

    @pytest.mark.asyncio
    async def test_create_flow(self) -> None:
        page, _ = make_page(cabinet_type(1))
        await page.load()

        form = page.open_create()
        assert page.editor.mode is EditorMode.CREATING
        form.set_field("name", "Corner Unit")
        form.set_field("category", "1")
        result = await page.save()

        assert result.success
        assert page.editor == EditorState.closed()
        assert page.form is None
        assert page.notifier.current.message == "Cabinet type created successfully"
        assert [t.name for t in page.store.items] == ["Corner Unit", "Base Unit 1"]

    @pytest.mark.asyncio
    async def test_invalid_form_keeps_editor_open(self) -> None:
        page, client = make_page()
        page.open_create()
        assert await page.save() is None
        assert page.editor.is_open
        assert page.form.errors["name"] == "Cabinet type name is required"
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_edit_flow(self) -> None:
        page, _ = make_page(cabinet_type(1), cabinet_type(2))
        await page.load()

        form = page.open_edit(2)
        assert page.editor == EditorState.editing(2)
        form.set_field("name", "Tall Pantry")
        await page.save()

        assert page.notifier.current.message == "Cabinet type updated successfully"
        assert [t.name for t in page.store.items] == ["Base Unit 1", "Tall Pantry"]
        assert not page.editor.is_open

    @pytest.mark.asyncio
    async def test_save_failure_shows_error_and_stays_open(self) -> None:
        page, client = make_page(cabinet_type(1))
        await page.load()
        page.open_edit(1)
        client.fail_next("name: already exists", status_code=400, field_errors={"name": ["already exists"]})

        await page.save()

        assert page.editor.is_open
        assert page.form.errors["name"] == "already exists"
        assert page.notifier.current.type is NotificationType.ERROR

    def test_edit_unknown_record(self) -> None:
        page, _ = make_page()
        assert page.open_edit(99) is None
        assert page.notifier.current.message == "Cabinet type not found"
        assert not page.editor.is_open

    @pytest.mark.asyncio
    async def test_delete_clears_selection_and_editor(self) -> None:
        page, _ = make_page(cabinet_type(1), cabinet_type(2))
        await page.load()
        page.selection.toggle(1)
        page.selection.toggle(2)
        page.open_edit(1)

        await page.delete(1)

        assert [t.id for t in page.store.items] == [2]
        assert page.selection.selected == [2]
        assert not page.editor.is_open
        assert page.notifier.current.message == "Cabinet type deleted successfully"

    @pytest.mark.asyncio
    async def test_delete_failure(self) -> None:
        page, client = make_page(cabinet_type(1))
        await page.load()
        client.fail_next("Cabinet type is in use and cannot be deleted", status_code=409)
        await page.delete(1)
        assert page.notifier.current.message == "Cabinet type is in use and cannot be deleted"
        assert [t.id for t in page.store.items] == [1]

    @pytest.mark.asyncio
    async def test_toggle(self) -> None:
        page, _ = make_page(cabinet_type(1), cabinet_type(2, is_active=False))
        await page.load()

        await page.toggle(1)
        assert page.notifier.current.message == "Cabinet type deactivated successfully"
        await page.toggle(2)
        assert page.notifier.current.message == "Cabinet type activated successfully"
        assert [t.is_active for t in page.store.items] == [False, True]

    @pytest.mark.asyncio
    async def test_counts_follow_search(self) -> None:
        page, _ = make_page(cabinet_type(1, name="Sink Base"), cabinet_type(2, name="Pantry"))
        await page.load()
        page.view.set_search("sink")
        assert str(page.counts()) == "Showing 1 of 1"
        assert page.counts().total == 2


class TestPageFactories:
    @pytest.mark.asyncio
    async def test_cabinet_types_page_talks_to_configured_backend(
        self, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(
            url=url("/api/pricing/cabinet-types/?page=1&page_size=50"),
            json=[cabinet_type_payload(1)],
        )
        page = cabinet_types_page(ClientSettings(base_url=BASE_URL, page_size=50))
        result = await page.load()
        assert result.success
        assert page.label == "cabinet type"

    def test_accessories_page_labels(self) -> None:
        page = accessories_page(7, line_item_id=3, settings=ClientSettings(base_url=BASE_URL))
        assert page.plural == "accessories"
        form = page.open_create()
        assert form.data["line_item"] == 3

    @pytest.mark.asyncio
    async def test_lighting_rules_page_hides_inactive_rules(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            url=url("/api/pricing/lighting-rules/"),
            json=[lighting_rule_payload(1), lighting_rule_payload(2, is_active=False)],
        )
        page = lighting_rules_page(ClientSettings(base_url=BASE_URL))
        await page.load()
        assert [r.id for r in page.visible()] == [1]

        page.view.set_filter("is_active", "")
        assert [r.id for r in page.visible()] == [1, 2]
        form = page.open_edit(2)
        assert form.data["budget_tier"] == "LUXURY"
        assert form.data["customer"] == ""

    def test_quotation_pdf_page(self) -> None:
        page = quotation_pdf_page(7, ClientSettings(base_url=BASE_URL, notification_seconds=2))
        assert page.store.project_id == 7
        assert page.notifier.seconds == 2


class TestQuotationPdfPage:
    def make_page(self) -> tuple[QuotationPdfPage, FakeQuotationPdfClient]:
        client = FakeQuotationPdfClient()
        return QuotationPdfPage(QuotationPdfStore(7, client)), client  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_load(self) -> None:
        page, client = self.make_page()
        result = await page.load()
        assert result.success
        assert [name for name, _ in client.calls] == [
            "customization",
            "templates",
            "project_history",
        ]
        assert page.counts().total == 1

    @pytest.mark.asyncio
    async def test_load_failure_notifies(self) -> None:
        page, client = self.make_page()
        client.failures = [None, None, ApiError("Failed to fetch project PDF history")]
        await page.load()
        assert page.notifier.current.message == "Failed to fetch project PDF history"
        assert page.notifier.current.type is NotificationType.ERROR

    @pytest.mark.asyncio
    async def test_select_unknown_template(self) -> None:
        page, _ = self.make_page()
        await page.load()
        assert page.select_template("standard") is True
        assert page.select_template("glossy") is False
        assert page.selected_template == "standard"
        assert page.notifier.current.message == "Template not found"

    @pytest.mark.asyncio
    async def test_customize_then_generate(self) -> None:
        page, client = self.make_page()
        await page.load()
        page.select_template("simple")

        form = page.open_customization()
        form.set_field("template_type", "SIMPLE")
        form.set_field("discount_percentage", "10")
        form.set_field("discount_reason", " Festive offer ")
        saved = await page.save_customization()

        assert saved.success
        assert page.form is None
        assert page.store.customization.discount_reason == "Festive offer"

        result = await page.generate()
        assert result.success
        assert page.notifier.current.message == "PDF generated successfully"
        _, (_, template_id, options) = client.calls[-2]
        assert template_id == "simple"
        assert options["discount_percentage"] == "10"

    @pytest.mark.asyncio
    async def test_invalid_customization_is_not_saved(self) -> None:
        page, client = self.make_page()
        form = page.open_customization()
        form.set_field("discount_amount", "500")
        assert await page.save_customization() is None
        assert form.errors == {"discount_reason": "Please provide a reason for the discount"}
        assert all(name != "save_customization" for name, _ in client.calls)

    @pytest.mark.asyncio
    async def test_download_failure_notifies(self) -> None:
        page, client = self.make_page()
        client.fail_next("Failed to download PDF")
        result = await page.download(1)
        assert result.success is False
        assert page.notifier.current.message == "Failed to download PDF"
