"""Lighting rule form: scope, rates, date window and the cabinet categories it covers."""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from cabinet_pricing.application.forms.base import ResourceForm, optional_id
from cabinet_pricing.domain.services.numbers import parse_decimal
from cabinet_pricing.domain.services.rate_validity import read_date
from cabinet_pricing.domain.value_objects import (
    DEFAULT_CURRENCY,
    BudgetTier,
    LightingCalcMethod,
)

CATEGORY_FIELDS = (
    "applies_to_wall_cabinets",
    "applies_to_base_cabinets",
    "applies_to_tall_cabinets",
    "applies_to_work_top",
)

RATE_FIELDS = {
    "led_strip_rate_per_mm": "A valid, positive LED strip rate is required",
    "spot_light_rate_per_cabinet": "A valid, positive spot light rate is required",
}


def _is_rate(raw: Any) -> bool:
    if raw is None or str(raw).strip() == "":
        return False
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation:
        return False
    return value.is_finite() and value >= 0


class LightingRuleForm(ResourceForm):
    """Form for one lighting rule.

    A global rule carries no customer; a customer-specific rule must name
    one. At least one cabinet category must be covered.

    Args:
        record: Rule being edited, or None to create one.
        today: Default start date of a new rule.
    """

    default_error = "Failed to save lighting rule"

    def __init__(self, record: Any = None, today: date | None = None) -> None:
        self.today = today or date.today()
        super().__init__(record)

    def defaults(self) -> dict[str, Any]:
        return {
            "name": "",
            "cabinet_material": "",
            "cabinet_type": "",
            "calc_method": LightingCalcMethod.PER_WIDTH.value,
            "customer": "",
            "is_global": True,
            "budget_tier": BudgetTier.LUXURY.value,
            "led_strip_rate_per_mm": "2.0",
            "spot_light_rate_per_cabinet": "500",
            "currency": DEFAULT_CURRENCY,
            "applies_to_wall_cabinets": True,
            "applies_to_base_cabinets": True,
            "applies_to_tall_cabinets": False,
            "applies_to_work_top": True,
            "effective_from": self.today.isoformat(),
            "effective_to": "",
        }

    def set_scope(self, is_global: bool) -> None:
        """Switch between a global and a customer-specific rule."""
        self.set_field("is_global", is_global)
        if is_global:
            self.data["customer"] = ""
        self.errors.pop("customer", None)

    def check(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        if not str(self.data.get("name") or "").strip():
            errors["name"] = "Rule name is required"
        if optional_id(self.data.get("cabinet_material")) is None:
            errors["cabinet_material"] = "Cabinet material is required"
        if optional_id(self.data.get("cabinet_type")) is None:
            errors["cabinet_type"] = "Cabinet type is required"
        if self.data.get("calc_method") not in {m.value for m in LightingCalcMethod}:
            errors["calc_method"] = "Calculation method is required"
        if not self.data.get("is_global") and optional_id(self.data.get("customer")) is None:
            errors["customer"] = "Customer is required for customer-specific rules"

        for name, message in RATE_FIELDS.items():
            if not _is_rate(self.data.get(name)):
                errors[name] = message

        start = read_date(self.data.get("effective_from"))
        end = read_date(self.data.get("effective_to"))
        if start is None:
            errors["effective_from"] = "Effective from date is required"
        if self.data.get("effective_to") and end is None:
            errors["effective_to"] = "End date is not a valid date"
        elif start is not None and end is not None and end < start:
            errors["effective_to"] = "End date must be after start date"

        if not any(self.data.get(name) for name in CATEGORY_FIELDS):
            errors["category_applications"] = "At least one category must be selected"
        return errors

    def payload(self) -> dict[str, Any]:
        is_global = bool(self.data.get("is_global"))
        payload: dict[str, Any] = {
            "name": str(self.data["name"]).strip(),
            "cabinet_material": optional_id(self.data["cabinet_material"]),
            "cabinet_type": optional_id(self.data["cabinet_type"]),
            "calc_method": self.data["calc_method"],
            "customer": None if is_global else optional_id(self.data.get("customer")),
            "is_global": is_global,
            "budget_tier": self.data["budget_tier"],
            "led_strip_rate_per_mm": str(parse_decimal(self.data["led_strip_rate_per_mm"])),
            "spot_light_rate_per_cabinet": str(
                parse_decimal(self.data["spot_light_rate_per_cabinet"])
            ),
            "currency": self.data.get("currency") or DEFAULT_CURRENCY,
            "effective_from": self.data["effective_from"],
        }
        for name in CATEGORY_FIELDS:
            payload[name] = bool(self.data.get(name))
        if self.data.get("effective_to"):
            payload["effective_to"] = self.data["effective_to"]
        return payload
