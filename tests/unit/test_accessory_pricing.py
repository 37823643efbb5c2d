"""Unit tests for the accessory price preview and lenient number parsing."""

from __future__ import annotations

from decimal import Decimal

import pytest

from cabinet_pricing.domain.services.accessory_pricing import preview_accessory_pricing
from cabinet_pricing.domain.services.numbers import parse_decimal, parse_int, round_money


class TestPreviewAccessoryPricing:
    """Tests for preview_accessory_pricing()."""

    def test_reference_example(self) -> None:
        preview = preview_accessory_pricing("285", "2")
        assert preview.subtotal == Decimal("570.00")
        assert preview.tax_amount == Decimal("102.60")
        assert preview.total == Decimal("672.60")
        assert preview.tax_rate_percent == 18

    def test_accepts_numbers(self) -> None:
        preview = preview_accessory_pricing(Decimal("99.99"), 3)
        assert preview.subtotal == Decimal("299.97")
        assert preview.tax_amount == Decimal("53.99")
        assert preview.total == Decimal("353.96")

    def test_tax_rounds_half_up(self) -> None:
        # 0.25 * 0.18 = 0.045 -> 0.05
        preview = preview_accessory_pricing("0.25", "1")
        assert preview.tax_amount == Decimal("0.05")
        assert preview.total == Decimal("0.30")

    @pytest.mark.parametrize(
        "unit_price,qty",
        [("", "2"), (None, "2"), ("abc", "2"), ("285", ""), ("285", None), ("285", "x")],
    )
    def test_missing_or_non_numeric_inputs_count_as_zero(self, unit_price, qty) -> None:
        preview = preview_accessory_pricing(unit_price, qty)
        assert preview.subtotal == Decimal("0.00")
        assert preview.tax_amount == Decimal("0.00")
        assert preview.total == Decimal("0.00")

    def test_numeric_prefix_is_honoured(self) -> None:
        preview = preview_accessory_pricing("12abc", "2.7")
        assert preview.subtotal == Decimal("24.00")

    def test_custom_tax_rate(self) -> None:
        preview = preview_accessory_pricing("100", "1", tax_rate=Decimal("0.05"))
        assert preview.tax_amount == Decimal("5.00")
        assert preview.total == Decimal("105.00")
        assert preview.tax_rate_percent == 5

    def test_display_strings(self) -> None:
        display = preview_accessory_pricing("285", "2").as_display()
        assert display == {
            "subtotal": "570.00",
            "taxAmount": "102.60",
            "total": "672.60",
            "taxRate": "18",
        }

    def test_total_is_subtotal_plus_tax(self) -> None:
        for price, qty in [("1.11", 7), ("2500", 3), ("0.01", 1), ("149.5", 4)]:
            preview = preview_accessory_pricing(price, qty)
            assert preview.total == preview.subtotal + preview.tax_amount

    def test_large_prices_keep_every_digit(self) -> None:
        preview = preview_accessory_pricing("12345678901234567890123456789", "2")
        assert preview.subtotal == Decimal("24691357802469135780246913578")
        assert preview.tax_amount == Decimal("4444444404444444440444444444.04")
        assert preview.total == preview.subtotal + preview.tax_amount

    def test_exponent_notation(self) -> None:
        preview = preview_accessory_pricing("1e30", "1")
        assert preview.subtotal == Decimal("1e30")
        assert preview.total == Decimal("1.18e30")

    @pytest.mark.parametrize(
        "unit_price,qty",
        [("1e300", "1"), ("9" * 5000, "1"), ("285", "9" * 5000), ("1e-300", "1")],
    )
    def test_out_of_range_inputs_count_as_zero(self, unit_price: str, qty: str) -> None:
        preview = preview_accessory_pricing(unit_price, qty)
        assert preview.total == Decimal("0.00")


class TestParseNumbers:
    """Tests for parse_decimal() and parse_int()."""

    def test_parse_decimal_strings(self) -> None:
        assert parse_decimal("450.00") == Decimal("450.00")
        assert parse_decimal(" 12.5 mm") == Decimal("12.5")
        assert parse_decimal(".5") == Decimal("0.5")
        assert parse_decimal("-3") == Decimal("-3")

    def test_parse_decimal_defaults(self) -> None:
        assert parse_decimal(None) == Decimal("0")
        assert parse_decimal("") == Decimal("0")
        assert parse_decimal("n/a") == Decimal("0")
        assert parse_decimal(True) == Decimal("0")
        assert parse_decimal(float("nan")) == Decimal("0")
        assert parse_decimal("x", default=Decimal("1")) == Decimal("1")

    def test_parse_decimal_numbers(self) -> None:
        assert parse_decimal(3) == Decimal("3")
        assert parse_decimal(0.1) == Decimal("0.1")

    def test_parse_int(self) -> None:
        assert parse_int("2") == 2
        assert parse_int("2.7") == 2
        assert parse_int("12abc") == 12
        assert parse_int(Decimal("3.9")) == 3
        assert parse_int(4.2) == 4

    def test_parse_int_defaults(self) -> None:
        assert parse_int(None) == 0
        assert parse_int("") == 0
        assert parse_int("abc") == 0
        assert parse_int(float("inf")) == 0
        assert parse_int("abc", default=1) == 1

    def test_huge_values_use_default(self) -> None:
        assert parse_decimal("1e101") == Decimal("0")
        assert parse_decimal(Decimal("1e-200")) == Decimal("0")
        assert parse_decimal("1e100") == Decimal("1e100")
        assert parse_int("9" * 5000) == 0

    def test_round_money(self) -> None:
        assert round_money(Decimal("10.005")) == Decimal("10.01")
        assert round_money(Decimal("2.5e40")) == Decimal("2.5e40")
        assert round_money(Decimal("1e200")) == Decimal("0.00")
