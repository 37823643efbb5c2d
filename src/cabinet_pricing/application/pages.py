"""Admin page controllers composing a store, a list view and a form.

The editor of a page is always in exactly one of three states: closed,
creating a new record, or editing one record by id.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from cabinet_pricing.application.config.settings import ClientSettings
from cabinet_pricing.application.forms import (
    AccessoryForm,
    CabinetTypeForm,
    FinishRateForm,
    LightingRuleForm,
    LineItemForm,
    PdfCustomizationForm,
    ResourceForm,
)
from cabinet_pricing.application.listing import (
    ListCounts,
    ListView,
    Selection,
    accessories_view,
    cabinet_types_view,
    finish_rates_view,
    lighting_rules_view,
    line_items_view,
    pdf_history_view,
)
from cabinet_pricing.application.stores import (
    ActionResult,
    CabinetTypeStore,
    DownloadedPdf,
    FinishRateStore,
    LightingRuleStore,
    LineItemStore,
    ProjectAccessoryStore,
    QuotationPdfStore,
    ResourceStore,
)
from cabinet_pricing.infrastructure.api import (
    CabinetTypesClient,
    FinishRatesClient,
    LightingRulesClient,
    LineItemsClient,
    MaterialsClient,
    ProjectAccessoriesClient,
    QuotationPdfClient,
)

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")


class EditorMode(str, Enum):
    CLOSED = "closed"
    CREATING = "creating"
    EDITING = "editing"


@dataclass(frozen=True)
class EditorState:
    mode: EditorMode = EditorMode.CLOSED
    record_id: Any = None

    @classmethod
    def closed(cls) -> "EditorState":
        return cls()

    @classmethod
    def creating(cls) -> "EditorState":
        return cls(mode=EditorMode.CREATING)

    @classmethod
    def editing(cls, record_id: Any) -> "EditorState":
        return cls(mode=EditorMode.EDITING, record_id=record_id)

    @property
    def is_open(self) -> bool:
        return self.mode is not EditorMode.CLOSED


class NotificationType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    message: str
    type: NotificationType
    expires_at: float


class Notifier:
    """Holds at most one toast; a new one replaces the old."""

    def __init__(self, seconds: float = 5.0, clock: Callable[[], float] = time.monotonic) -> None:
        self.seconds = seconds
        self._clock = clock
        self._notification: Notification | None = None

    def show(self, message: str, type: NotificationType = NotificationType.SUCCESS) -> Notification:
        self._notification = Notification(message, type, self._clock() + self.seconds)
        return self._notification

    def success(self, message: str) -> Notification:
        return self.show(message, NotificationType.SUCCESS)

    def error(self, message: str) -> Notification:
        return self.show(message, NotificationType.ERROR)

    @property
    def current(self) -> Notification | None:
        if self._notification is not None and self._clock() >= self._notification.expires_at:
            self._notification = None
        return self._notification

    def dismiss(self) -> None:
        self._notification = None


FormFactory = Callable[[Any], ResourceForm]


class AdminPage(Generic[RecordT]):
    """One admin screen.

    Args:
        store: Store holding the page's records.
        view: Client-side list view over ``store.items``.
        form_factory: Builds a form for a record (or None for a new one).
        label: Human name of one record, used in notifications.
        notifier: Toast holder; a 5 second one is made if omitted.
        plural: Plural label; defaults to ``label`` plus "s".
    """

    def __init__(
        self,
        store: ResourceStore[RecordT],
        view: ListView[RecordT],
        form_factory: FormFactory,
        label: str,
        notifier: Notifier | None = None,
        plural: str | None = None,
    ) -> None:
        self.store = store
        self.view = view
        self.form_factory = form_factory
        self.label = label
        self.plural = plural or f"{label}s"
        self.notifier = notifier or Notifier()
        self.selection = Selection()
        self.editor = EditorState.closed()
        self.form: ResourceForm | None = None

    @property
    def title(self) -> str:
        return self.label[:1].upper() + self.label[1:]

    async def load(self) -> ActionResult[Any]:
        result = await self.store.fetch_all()
        if not result.success and not result.stale:
            self.notifier.error(result.error or f"Failed to load {self.plural}")
        return result

    async def retry(self) -> ActionResult[Any] | None:
        """Re-run the last failed fetch."""
        return await self.store.retry()

    def visible(self) -> list[RecordT]:
        return self.view.visible(self.store.items)

    def counts(self) -> ListCounts:
        return self.view.counts(self.store.items)

    def open_create(self) -> ResourceForm:
        self.editor = EditorState.creating()
        self.form = self.form_factory(None)
        return self.form

    def open_edit(self, record_id: Any) -> ResourceForm | None:
        record = self.store.find(record_id)
        if record is None:
            logger.debug(f"Cannot edit {self.label} {record_id}: not loaded")
            self.notifier.error(f"{self.title} not found")
            return None
        self.editor = EditorState.editing(record_id)
        self.form = self.form_factory(record)
        return self.form

    def close(self) -> None:
        self.editor = EditorState.closed()
        self.form = None

    async def save(self) -> ActionResult[Any] | None:
        """Submit the open form as a create or an update, per the editor state."""
        if self.form is None or not self.editor.is_open:
            return None

        if self.editor.mode is EditorMode.CREATING:
            result = await self.form.submit(self.store.create)
            done = f"{self.title} created successfully"
        else:
            record_id = self.editor.record_id
            result = await self.form.submit(
                lambda payload: self.store.update(record_id, payload)
            )
            done = f"{self.title} updated successfully"

        if result is None or result.stale:
            return result
        if result.success:
            self.notifier.success(done)
            self.close()
        else:
            self.notifier.error(result.error or f"Failed to save {self.label}")
        return result

    async def delete(self, record_id: Any) -> ActionResult[Any]:
        result = await self.store.delete(record_id)
        if result.success:
            self.notifier.success(f"{self.title} deleted successfully")
            self.selection.selected = [
                i for i in self.selection.selected if str(i) != str(record_id)
            ]
            if self.editor.record_id is not None and str(self.editor.record_id) == str(record_id):
                self.close()
        elif not result.stale:
            self.notifier.error(result.error or f"Failed to delete {self.label}")
        return result

    async def toggle(self, record_id: Any) -> ActionResult[Any]:
        record = self.store.find(record_id)
        if record is None:
            self.notifier.error(f"{self.title} not found")
            return ActionResult(success=False, error=f"{self.title} not found")
        is_active = not getattr(record, "is_active", True)
        result = await self.store.toggle_status(record_id, is_active)
        if result.success:
            state = "activated" if is_active else "deactivated"
            self.notifier.success(f"{self.title} {state} successfully")
        elif not result.stale:
            self.notifier.error(result.error or f"Failed to update {self.label} status")
        return result


class QuotationPdfPage:
    """Quotation PDF screen: template choice, customization, generation and history."""

    def __init__(
        self,
        store: QuotationPdfStore,
        view: ListView[Any] | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self.store = store
        self.view = view or pdf_history_view()
        self.notifier = notifier or Notifier()
        self.selected_template: Any = None
        self.form: PdfCustomizationForm | None = None

    async def load(self) -> ActionResult[Any]:
        if self.store.project_id is not None:
            await self.store.load_customization()
        result = await self.store.refresh()
        if not result.success and not result.stale:
            self.notifier.error(result.error or "Failed to load PDF history")
        return result

    def visible(self) -> list[Any]:
        return self.view.visible(self.store.history)

    def counts(self) -> ListCounts:
        return self.view.counts(self.store.history)

    def select_template(self, template_id: Any) -> bool:
        if self.store.find_template(template_id) is None:
            self.notifier.error("Template not found")
            return False
        self.selected_template = template_id
        return True

    def open_customization(self) -> PdfCustomizationForm:
        self.form = PdfCustomizationForm(self.store.customization)
        return self.form

    def close_customization(self) -> None:
        self.form = None

    async def save_customization(self) -> ActionResult[Any] | None:
        if self.form is None:
            return None
        result = await self.form.submit(self.store.save_customization)
        if result is None or result.stale:
            return result
        if result.success:
            self.notifier.success("PDF customization saved successfully")
            self.form = None
        else:
            self.notifier.error(result.error or "Failed to save PDF customization")
        return result

    async def generate(self) -> ActionResult[Any]:
        """Generate with the selected template and the saved customization."""
        result = await self.store.generate(self.selected_template)
        if result.success:
            self.notifier.success(result.data["message"])
        else:
            self.notifier.error(result.error or "Failed to generate PDF")
        return result

    async def download(self, pdf_id: Any) -> ActionResult[DownloadedPdf]:
        result = await self.store.download(pdf_id)
        if result.success:
            self.notifier.success("PDF downloaded successfully")
        else:
            self.notifier.error(result.error or "Failed to download PDF")
        return result


def cabinet_types_page(settings: ClientSettings | None = None) -> AdminPage[Any]:
    settings = settings or ClientSettings()
    store = CabinetTypeStore(CabinetTypesClient(settings.api_client()), page_size=settings.page_size)
    return AdminPage(
        store,
        cabinet_types_view(),
        CabinetTypeForm,
        "cabinet type",
        Notifier(settings.notification_seconds),
    )


def finish_rates_page(settings: ClientSettings | None = None) -> AdminPage[Any]:
    settings = settings or ClientSettings()
    api = settings.api_client()
    store = FinishRateStore(
        FinishRatesClient(api), MaterialsClient(api), page_size=settings.page_size
    )
    return AdminPage(
        store,
        finish_rates_view(),
        FinishRateForm,
        "finish rate",
        Notifier(settings.notification_seconds),
    )


def line_items_page(project_id: Any, settings: ClientSettings | None = None) -> AdminPage[Any]:
    settings = settings or ClientSettings()
    api = settings.api_client()
    store = LineItemStore(project_id, LineItemsClient(api), MaterialsClient(api))
    return AdminPage(
        store,
        line_items_view(),
        LineItemForm,
        "line item",
        Notifier(settings.notification_seconds),
    )


def accessories_page(
    project_id: Any, line_item_id: Any = None, settings: ClientSettings | None = None
) -> AdminPage[Any]:
    settings = settings or ClientSettings()
    store = ProjectAccessoryStore(project_id, ProjectAccessoriesClient(settings.api_client()))

    def make_form(record: Any) -> AccessoryForm:
        return AccessoryForm(
            record,
            line_item_id=line_item_id,
            products=store.products,
            tax_rate=settings.tax_rate,
        )

    return AdminPage(
        store,
        accessories_view(),
        make_form,
        "accessory",
        Notifier(settings.notification_seconds),
        plural="accessories",
    )


def lighting_rules_page(settings: ClientSettings | None = None) -> AdminPage[Any]:
    """Lighting rules admin; inactive rules are hidden until the ``is_active`` filter is cleared."""
    settings = settings or ClientSettings()
    api = settings.api_client()
    view = lighting_rules_view()
    view.set_filter("is_active", True)
    return AdminPage(
        LightingRuleStore(LightingRulesClient(api), MaterialsClient(api)),
        view,
        LightingRuleForm,
        "lighting rule",
        Notifier(settings.notification_seconds),
    )


def quotation_pdf_page(
    project_id: Any = None, settings: ClientSettings | None = None
) -> QuotationPdfPage:
    settings = settings or ClientSettings()
    store = QuotationPdfStore(project_id, QuotationPdfClient(settings.api_client()))
    return QuotationPdfPage(
        store, pdf_history_view(), Notifier(settings.notification_seconds)
    )
