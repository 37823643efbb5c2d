"""Quotation PDF store: templates, customization, generation and history."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from cabinet_pricing.application.stores.base import ActionResult, record_key
from cabinet_pricing.contracts.records import PdfCustomization, PdfHistoryEntry, PdfTemplate
from cabinet_pricing.domain.value_objects import PdfTemplateType
from cabinet_pricing.infrastructure.api.errors import ApiError
from cabinet_pricing.infrastructure.api.quotation_pdf import QuotationPdfClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class DownloadedPdf:
    filename: str
    content: bytes


class QuotationPdfStore:
    """PDF state of one project, or of every project when ``project_id`` is None.

    Only ``load_history``, ``load_templates`` and ``refresh`` work without
    a project. Actions return ``ActionResult`` and never raise ``ApiError``.

    Attributes:
        history: Generated PDFs, newest first as the backend sends them.
        templates: Templates offered for generation.
        customization: The project's saved customization.
        generating: Keys of generations in flight (see ``generation_key``).
    """

    def __init__(self, project_id: Any = None, client: QuotationPdfClient | None = None) -> None:
        self.client = client or QuotationPdfClient()
        self.project_id = project_id
        self.history: list[PdfHistoryEntry] = []
        self.templates: list[PdfTemplate] = []
        self.customization = PdfCustomization()
        self.generating: set[str] = set()
        self.error: str | None = None
        self._in_flight = 0
        self._history_ticket = 0

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    async def _run(self, call: Awaitable[T]) -> T:
        self._in_flight += 1
        try:
            return await call
        finally:
            self._in_flight -= 1

    def _fail(self, error: ApiError) -> ActionResult[Any]:
        logger.debug(f"{type(self).__name__} call failed: {error.message}")
        self.error = error.message
        return ActionResult.failed(error)

    # -- history -------------------------------------------------------------

    async def load_history(
        self, filters: Mapping[str, Any] | None = None
    ) -> ActionResult[list[PdfHistoryEntry]]:
        """Reload ``history``; an answer overtaken by a newer load is discarded."""
        self._history_ticket += 1
        ticket = self._history_ticket
        self.error = None
        try:
            if self.project_id is not None:
                history = await self._run(self.client.project_history(self.project_id))
            else:
                history = await self._run(self.client.history(filters))
        except ApiError as e:
            if ticket != self._history_ticket:
                return ActionResult.discarded()
            return self._fail(e)

        if ticket != self._history_ticket:
            return ActionResult.discarded(history)
        self.history = history
        return ActionResult.ok(history)

    def filename_for(self, pdf_id: Any) -> str:
        key = record_key(pdf_id)
        for entry in self.history:
            if record_key(entry.id) == key and entry.filename:
                return entry.filename
        return f"quotation-{pdf_id}.pdf"

    # -- templates -----------------------------------------------------------

    async def load_templates(self) -> list[PdfTemplate]:
        self.templates = await self._run(self.client.templates())
        return self.templates

    def find_template(self, template_id: Any) -> PdfTemplate | None:
        key = record_key(template_id)
        return next((t for t in self.templates if record_key(t.id) == key), None)

    def template_by_type(self, template_type: Any) -> PdfTemplate | None:
        """The template of a type, else the detailed one."""
        wanted = getattr(template_type, "value", template_type)
        for template in self.templates:
            if template.template_type.value == wanted:
                return template
        return next(
            (t for t in self.templates if t.template_type is PdfTemplateType.DETAILED), None
        )

    # -- customization -------------------------------------------------------

    async def load_customization(self) -> PdfCustomization:
        self.customization = await self._run(self.client.customization(self.project_id))
        return self.customization

    async def save_customization(
        self, data: Mapping[str, Any]
    ) -> ActionResult[PdfCustomization]:
        self.error = None
        try:
            saved = await self._run(self.client.save_customization(self.project_id, data))
        except ApiError as e:
            return self._fail(e)
        self.customization = saved
        return ActionResult.ok(saved)

    async def validate_customization(
        self, data: Mapping[str, Any]
    ) -> ActionResult[dict[str, Any]]:
        try:
            answer = await self._run(self.client.validate_customization(self.project_id, data))
        except ApiError as e:
            return self._fail(e)
        return ActionResult.ok(answer)

    # -- generation ----------------------------------------------------------

    def generation_key(self, template_id: Any = None) -> str:
        return f"{self.project_id}-{template_id or 'default'}"

    def is_generating(self, template_id: Any = None) -> bool:
        return self.generation_key(template_id) in self.generating

    async def generate(
        self, template_id: Any = None, options: Mapping[str, Any] | None = None
    ) -> ActionResult[dict[str, Any]]:
        """Generate a PDF with the saved customization (overridden by ``options``).

        On success the history is reloaded and the result carries
        ``download_url`` (the backend's ``download_url`` or ``file_url``).
        """
        key = self.generation_key(template_id)
        if key in self.generating:
            return ActionResult(success=False, error="PDF generation already in progress")

        body = {**self.customization.model_dump(mode="json"), **(options or {})}
        self.generating.add(key)
        self.error = None
        try:
            answer = await self._run(self.client.generate(self.project_id, template_id, body))
        except ApiError as e:
            return self._fail(e)
        finally:
            self.generating.discard(key)

        await self.load_history()
        return ActionResult.ok(
            {
                **answer,
                "download_url": answer.get("download_url") or answer.get("file_url"),
                "message": answer.get("message") or "PDF generated successfully",
            }
        )

    async def download(self, pdf_id: Any) -> ActionResult[DownloadedPdf]:
        try:
            content = await self._run(self.client.download(pdf_id))
        except ApiError as e:
            return self._fail(e)
        return ActionResult.ok(DownloadedPdf(self.filename_for(pdf_id), content))

    async def preview(self, template_id: Any = None) -> ActionResult[bytes]:
        try:
            content = await self._run(self.client.preview(self.project_id, template_id))
        except ApiError as e:
            return self._fail(e)
        return ActionResult.ok(content)

    async def refresh(self) -> ActionResult[list[PdfHistoryEntry]]:
        """Reload templates and history together."""
        _, result = await asyncio.gather(self.load_templates(), self.load_history())
        return result
