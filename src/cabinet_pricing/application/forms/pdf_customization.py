"""Quotation PDF customization form.

A discount is either a percentage or an amount, never both, and any
discount needs a reason. ``reset`` returns to the values the form was
opened with, not to the defaults.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from cabinet_pricing.application.forms.base import ResourceForm
from cabinet_pricing.contracts.records import PdfCustomization
from cabinet_pricing.domain.services.numbers import parse_decimal
from cabinet_pricing.domain.value_objects import PdfTemplateType

BOOLEAN_FIELDS = tuple(
    name
    for name, info in PdfCustomization.model_fields.items()
    if info.annotation is bool
)
TEXT_FIELDS = (
    "discount_reason",
    "special_instructions",
    "installation_notes",
    "timeline_notes",
    "custom_requirements",
)

MAX_DISCOUNT_PERCENTAGE = Decimal("100")


class PdfCustomizationForm(ResourceForm):
    default_error = "Failed to save PDF customization"

    def __init__(self, record: PdfCustomization | None = None) -> None:
        super().__init__(record)
        self.initial = dict(self.data)

    def defaults(self) -> dict[str, Any]:
        return PdfCustomization().model_dump(mode="json")

    @property
    def has_changes(self) -> bool:
        return self.data != self.initial

    @property
    def has_discount(self) -> bool:
        return (
            parse_decimal(self.data.get("discount_percentage")) > 0
            or parse_decimal(self.data.get("discount_amount")) > 0
        )

    def reset(self) -> None:
        self.data = dict(self.initial)
        self.errors = {}

    def check(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        if self.data.get("template_type") not in {t.value for t in PdfTemplateType}:
            errors["template_type"] = "Please select a template"

        percentage = parse_decimal(self.data.get("discount_percentage"))
        amount = parse_decimal(self.data.get("discount_amount"))
        if percentage < 0 or percentage > MAX_DISCOUNT_PERCENTAGE:
            errors["discount_percentage"] = "Discount percentage must be between 0 and 100"
        if amount < 0:
            errors["discount_amount"] = "Discount amount cannot be negative"
        if percentage > 0 and amount > 0:
            errors["discount_general"] = "Please specify either percentage OR amount, not both"
        if self.has_discount and not str(self.data.get("discount_reason") or "").strip():
            errors["discount_reason"] = "Please provide a reason for the discount"
        return errors

    def payload(self) -> dict[str, Any]:
        data = dict(self.data)
        for name in BOOLEAN_FIELDS:
            data[name] = bool(data.get(name))
        for name in TEXT_FIELDS:
            data[name] = str(data.get(name) or "").strip()
        data["discount_percentage"] = str(parse_decimal(data.get("discount_percentage")))
        data["discount_amount"] = str(parse_decimal(data.get("discount_amount")))
        return data
