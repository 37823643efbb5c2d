"""Accessory form with a live price preview.

Choosing a product variant fills ``unit_price`` from the variant's company
price; the admin may then override it, and ``reset_price`` restores the
catalog price.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from cabinet_pricing.application.forms.base import ResourceForm, optional_id
from cabinet_pricing.contracts.records import ProductVariant
from cabinet_pricing.domain.services.accessory_pricing import preview_accessory_pricing
from cabinet_pricing.domain.services.numbers import parse_decimal, parse_int
from cabinet_pricing.domain.value_objects import DEFAULT_TAX_RATE, PricingPreview

MAX_UNIT_PRICE = Decimal("9999999")


class AccessoryForm(ResourceForm):
    default_error = "Failed to save accessory"

    def __init__(
        self,
        record: Any = None,
        line_item_id: Any = None,
        products: Sequence[ProductVariant] = (),
        tax_rate: Decimal = DEFAULT_TAX_RATE,
    ) -> None:
        self.line_item_id = line_item_id
        self.products = list(products)
        self.tax_rate = tax_rate
        super().__init__(record)

    def defaults(self) -> dict[str, Any]:
        return {
            "line_item": "" if self.line_item_id is None else self.line_item_id,
            "product_variant": "",
            "qty": 1,
            "unit_price": "",
            "installation_notes": "",
        }

    def selected_product(self) -> ProductVariant | None:
        wanted = str(self.data.get("product_variant") or "")
        return next((p for p in self.products if str(p.id) == wanted), None)

    def set_field(self, name: str, value: Any) -> None:
        super().set_field(name, value)
        if name == "product_variant":
            self.reset_price()

    def reset_price(self) -> None:
        """Restore ``unit_price`` from the selected variant's company price."""
        product = self.selected_product()
        if product is not None:
            self.data["unit_price"] = str(product.company_price)
            self.errors.pop("unit_price", None)

    @property
    def price_overridden(self) -> bool:
        product = self.selected_product()
        if product is None:
            return False
        return parse_decimal(self.data.get("unit_price")) != product.company_price

    @property
    def pricing(self) -> PricingPreview:
        return preview_accessory_pricing(
            self.data.get("unit_price"), self.data.get("qty"), self.tax_rate
        )

    def check(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        if optional_id(self.data.get("product_variant")) is None:
            errors["product_variant"] = "Please select a product"
        if parse_int(self.data.get("qty")) < 1:
            errors["qty"] = "Quantity must be at least 1"
        price = parse_decimal(self.data.get("unit_price"))
        if price <= 0:
            errors["unit_price"] = "Unit price must be greater than 0"
        elif price > MAX_UNIT_PRICE:
            errors["unit_price"] = "Unit price must be less than 9,999,999"
        return errors

    def payload(self) -> dict[str, Any]:
        return {
            "line_item": optional_id(self.data.get("line_item")),
            "product_variant": optional_id(self.data["product_variant"]),
            "qty": parse_int(self.data["qty"]),
            "unit_price": str(parse_decimal(self.data["unit_price"])),
            "installation_notes": str(self.data.get("installation_notes") or "").strip(),
        }
