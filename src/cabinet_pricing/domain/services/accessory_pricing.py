"""Accessory price preview shown while an accessory form is being filled in."""

from __future__ import annotations

from decimal import Decimal, DecimalException, localcontext
from typing import Any

from cabinet_pricing.domain.services.numbers import (
    MONEY_PRECISION,
    parse_decimal,
    parse_int,
    round_money,
)
from cabinet_pricing.domain.value_objects import DEFAULT_TAX_RATE, PricingPreview


def preview_accessory_pricing(
    unit_price: Any,
    qty: Any,
    tax_rate: Decimal = DEFAULT_TAX_RATE,
) -> PricingPreview:
    """Compute subtotal, tax and total for an accessory line.

    Inputs are parsed leniently; missing, non-numeric or out-of-range values
    count as 0. Negative inputs are expected to be rejected by form
    validation first.

    Args:
        unit_price: Price per unit as typed into the form.
        qty: Quantity as typed into the form.
        tax_rate: Fractional tax rate. Defaults to 18% GST.

    Returns:
        PricingPreview with two-decimal money values.

    Example:
        >>> preview_accessory_pricing("285", "2").total
        Decimal('672.60')
    """
    price = parse_decimal(unit_price)
    quantity = parse_int(qty)

    with localcontext() as ctx:
        ctx.prec = MONEY_PRECISION
        try:
            subtotal = round_money(price * quantity)
            tax_amount = round_money(price * quantity * tax_rate)
        except DecimalException:
            subtotal = tax_amount = Decimal("0.00")
        total = round_money(subtotal + tax_amount)

    return PricingPreview(
        subtotal=subtotal,
        tax_amount=tax_amount,
        total=total,
        tax_rate_percent=int(round_money(tax_rate * 100)),
    )
