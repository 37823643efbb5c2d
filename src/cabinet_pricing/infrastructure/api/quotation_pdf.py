"""Quotation PDF templates, per-project customization, generation and history."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from cabinet_pricing.contracts.records import PdfCustomization, PdfHistoryEntry, PdfTemplate
from cabinet_pricing.domain.value_objects import PdfTemplateType
from cabinet_pricing.infrastructure.api.errors import ApiError
from cabinet_pricing.infrastructure.api.http import ApiClient, parse_rows

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES: tuple[PdfTemplate, ...] = (
    PdfTemplate(
        id="detailed",
        name="Detailed Template",
        template_type=PdfTemplateType.DETAILED,
        description="Complete quotation with all sections, images, and specifications",
        features=[
            "Product Images",
            "Floor Plans",
            "Detailed Specs",
            "Warranty Info",
            "Terms & Conditions",
        ],
        estimated_pages="6-8 pages",
        best_for="High-value projects, detailed presentations",
    ),
    PdfTemplate(
        id="standard",
        name="Standard Template",
        template_type=PdfTemplateType.STANDARD,
        description="Professional quotation with essential information and key details",
        features=["Line Items", "Basic Images", "Pricing Summary", "Contact Info"],
        estimated_pages="3-4 pages",
        best_for="Most projects, balanced detail",
    ),
    PdfTemplate(
        id="simple",
        name="Simple Template",
        template_type=PdfTemplateType.SIMPLE,
        description="Quick price quote with essential line items and totals",
        features=["Line Items", "Total Amount", "Basic Contact"],
        estimated_pages="1-2 pages",
        best_for="Quick quotes, simple projects",
    ),
)


def generation_payload(
    template_id: Any = None, options: Mapping[str, Any] | None = None
) -> dict[str, Any]:
    """Request body for a PDF generation: default customization overlaid by ``options``."""
    body = PdfCustomization().model_dump(mode="json")
    body["template_id"] = template_id
    body["selected_plan_images"] = []
    body.update(options or {})
    return body


class QuotationPdfClient:
    """Client for ``/api/quotation-pdf/``.

    Templates and customization fall back to built-in defaults when the
    backend cannot supply them, and the all-projects history falls back
    to an empty list. Every other call raises ``ApiError``.
    """

    path = "/api/quotation-pdf/"

    def __init__(self, api: ApiClient | None = None) -> None:
        self.api = api or ApiClient()

    def _path(self, *parts: Any) -> str:
        return self.path + "".join(f"{part}/" for part in parts)

    async def templates(self) -> list[PdfTemplate]:
        try:
            payload = await self.api.request(
                "GET", self._path("templates"), fallback="Failed to fetch PDF templates"
            )
            return parse_rows(payload, PdfTemplate, "PDF templates")
        except ApiError as e:
            logger.debug(f"Using default PDF templates: {e}")
            return list(DEFAULT_TEMPLATES)

    async def customization(self, project_id: Any) -> PdfCustomization:
        try:
            payload = await self.api.request(
                "GET",
                self._path("customization", project_id),
                fallback="Failed to fetch PDF customization",
            )
            return PdfCustomization.model_validate(payload or {})
        except (ApiError, PydanticValidationError) as e:
            logger.debug(f"Using default PDF customization for project {project_id}: {e}")
            return PdfCustomization()

    async def save_customization(
        self, project_id: Any, data: Mapping[str, Any]
    ) -> PdfCustomization:
        """Save a project's customization.

        A response without a customization object echoes ``data``.

        Raises:
            ApiError: If the save fails or the saved values are invalid.
        """
        payload = await self.api.request(
            "POST",
            self._path("customization", project_id, "save"),
            json=dict(data),
            fallback="Failed to save PDF customization",
        )
        saved = payload if isinstance(payload, Mapping) and "template_type" in payload else data
        try:
            return PdfCustomization.model_validate(dict(saved))
        except PydanticValidationError as e:
            logger.warning(f"Invalid PDF customization payload: {e.error_count()} errors")
            raise ApiError("Invalid PDF customization data received") from e

    async def validate_customization(
        self, project_id: Any, data: Mapping[str, Any]
    ) -> dict[str, Any]:
        payload = await self.api.request(
            "POST",
            self._path("validate", project_id),
            json=dict(data),
            fallback="Failed to validate customization",
        )
        return dict(payload) if isinstance(payload, Mapping) else {}

    async def generate(
        self,
        project_id: Any,
        template_id: Any = None,
        options: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Generate a quotation PDF; returns the backend's answer (ids, urls, message)."""
        payload = await self.api.request(
            "POST",
            self._path("generate", project_id),
            json=generation_payload(template_id, options),
            fallback="Failed to generate PDF",
        )
        return dict(payload) if isinstance(payload, Mapping) else {}

    async def download(self, pdf_id: Any) -> bytes:
        return await self.api.download(
            "GET", self._path("download", pdf_id), fallback="Failed to download PDF"
        )

    async def preview(self, project_id: Any, template_id: Any = None) -> bytes:
        return await self.api.download(
            "POST",
            self._path("preview", project_id),
            json={"template_id": template_id},
            fallback="Failed to generate PDF preview",
        )

    async def history(self, params: Mapping[str, Any] | None = None) -> list[PdfHistoryEntry]:
        """PDFs generated for every project; an unavailable endpoint reads as none."""
        try:
            payload = await self.api.request(
                "GET", self._path("history"), params=params, fallback="Failed to fetch PDF history"
            )
        except ApiError as e:
            logger.debug(f"No PDF history available: {e}")
            return []
        return parse_rows(payload, PdfHistoryEntry, "PDF history")

    async def project_history(self, project_id: Any) -> list[PdfHistoryEntry]:
        payload = await self.api.request(
            "GET",
            self._path("history", project_id),
            fallback="Failed to fetch project PDF history",
        )
        return parse_rows(payload, PdfHistoryEntry, "PDF history")
