"""Finish rate form with unit rate and date window checks."""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from cabinet_pricing.application.forms.base import FormMode, ResourceForm, optional_id
from cabinet_pricing.domain.services.numbers import parse_decimal
from cabinet_pricing.domain.services.rate_validity import validate_rate_window
from cabinet_pricing.domain.value_objects import DEFAULT_CURRENCY, BudgetTier

MAX_UNIT_RATE = Decimal("999999")


class FinishRateForm(ResourceForm):
    """Form for one finish rate.

    Args:
        record: Rate being edited, or None to create one.
        today: Reference date for the default start date and the
            "not in the past" rule.
    """

    default_error = "Failed to save finish rate"

    def __init__(self, record: Any = None, today: date | None = None) -> None:
        self.today = today or date.today()
        super().__init__(record)

    def defaults(self) -> dict[str, Any]:
        return {
            "material": "",
            "budget_tier": BudgetTier.LUXURY.value,
            "unit_rate": "",
            "currency": DEFAULT_CURRENCY,
            "effective_from": self.today.isoformat(),
            "effective_to": "",
            "is_active": True,
        }

    def check(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        if optional_id(self.data.get("material")) is None:
            errors["material"] = "Material is required"
        if not self.data.get("budget_tier"):
            errors["budget_tier"] = "Budget tier is required"

        rate_error = self._check_unit_rate(self.data.get("unit_rate"))
        if rate_error:
            errors["unit_rate"] = rate_error

        errors.update(
            validate_rate_window(
                self.data.get("effective_from"),
                self.data.get("effective_to"),
                today=self.today,
                creating=self.mode is FormMode.CREATE,
            )
        )
        return errors

    @staticmethod
    def _check_unit_rate(raw: Any) -> str | None:
        if raw is None or str(raw).strip() == "":
            return "Unit rate is required"
        try:
            value = Decimal(str(raw).strip())
        except InvalidOperation:
            return "Unit rate must be a valid number"
        if not value.is_finite():
            return "Unit rate must be a valid number"
        if value <= 0:
            return "Unit rate must be greater than 0"
        if value > MAX_UNIT_RATE:
            return "Unit rate must be less than 999,999"
        return None

    def payload(self) -> dict[str, Any]:
        return {
            "material": optional_id(self.data["material"]),
            "budget_tier": self.data["budget_tier"],
            "unit_rate": str(parse_decimal(self.data["unit_rate"])),
            "currency": self.data.get("currency") or DEFAULT_CURRENCY,
            "effective_from": self.data["effective_from"],
            "effective_to": self.data.get("effective_to") or None,
            "is_active": bool(self.data.get("is_active", True)),
        }
