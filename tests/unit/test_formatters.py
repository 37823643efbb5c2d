"""Unit tests for display formatters."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from cabinet_pricing.contracts.records import FinishRate, PdfHistoryEntry
from cabinet_pricing.domain.services.accessory_pricing import preview_accessory_pricing
from cabinet_pricing.domain.services.lighting import LightingTotals
from cabinet_pricing.infrastructure.formatters import (
    CabinetTypeTableFormatter,
    FinishRateTableFormatter,
    PdfHistoryTableFormatter,
    format_currency,
    format_date,
    format_dimensions,
    format_file_size,
    format_lighting_totals,
    format_pdf_status,
    format_pricing_preview,
    format_sqft,
)
from fakes import cabinet_type
from payloads import finish_rate_payload, pdf_history_payload


class TestFormatCurrency:
    @pytest.mark.parametrize(
        "amount,expected",
        [
            ("0", "₹0.00"),
            ("999", "₹999.00"),
            ("1000", "₹1,000.00"),
            ("123456", "₹1,23,456.00"),
            ("1234567.5", "₹12,34,567.50"),
            (Decimal("10.005"), "₹10.01"),
            ("-2500", "-₹2,500.00"),
            (None, "₹0.00"),
        ],
    )
    def test_indian_grouping(self, amount, expected: str) -> None:
        assert format_currency(amount) == expected

    def test_other_currency_uses_code(self) -> None:
        assert format_currency("1500", "USD") == "USD 1,500.00"


def test_small_formatters() -> None:
    assert format_dimensions(600, 560, 720) == "600×560×720mm"
    assert format_sqft("8.5") == "8.50 sq.ft"
    assert format_sqft(None) == "0.00 sq.ft"
    assert format_date(None) == "-"
    assert format_date(date(2025, 1, 2)) == "2025-01-02"


class TestTables:
    def test_cabinet_types_table(self) -> None:
        output = CabinetTypeTableFormatter().format(
            [cabinet_type(1), cabinet_type(2, is_active=False, category_detail=None)]
        )
        assert "Base Unit 1" in output
        assert "BASE" in output
        assert "Inactive" in output
        assert output.endswith("2 cabinet type(s)")

    def test_empty_tables(self) -> None:
        assert CabinetTypeTableFormatter().format([]) == "No cabinet types found."
        assert FinishRateTableFormatter().format([]) == "No finish rates found."

    def test_finish_rates_table_shows_status(self) -> None:
        rates = [
            FinishRate.model_validate(finish_rate_payload(1, effective_to="2025-02-01")),
            FinishRate.model_validate(finish_rate_payload(2, effective_from="2025-06-01")),
        ]
        lines = FinishRateTableFormatter(today=date(2025, 3, 10)).format(rates).splitlines()
        assert lines[4].endswith("expired")
        assert lines[5].endswith("future")
        assert "₹450.00" in lines[4]


def test_pricing_preview() -> None:
    output = format_pricing_preview(preview_accessory_pricing("285", "2"))
    assert output.splitlines() == [
        "Subtotal:   ₹570.00",
        "GST (18%): ₹102.60",
        "Total:      ₹672.60",
    ]


def test_lighting_totals() -> None:
    totals = LightingTotals(
        total_led_cost=Decimal("3500"),
        total_spot_cost=Decimal("1600"),
        grand_total=Decimal("5100"),
        active_count=2,
        total_count=3,
    )
    output = format_lighting_totals(totals)
    assert "₹5,100.00" in output
    assert output.endswith("2 of 3 item(s) active")


class TestPdfFormatters:
    @pytest.mark.parametrize(
        "size,expected",
        [
            (None, "N/A"),
            (0, "N/A"),
            (512, "512 Bytes"),
            (1536, "1.5 KB"),
            (245760, "240 KB"),
            (5 * 1024 * 1024, "5 MB"),
            (1234567, "1.18 MB"),
            (3 * 1024**4, "3072 GB"),
        ],
    )
    def test_file_size(self, size, expected: str) -> None:
        assert format_file_size(size) == expected

    @pytest.mark.parametrize(
        "status,expected",
        [
            ("completed", "Generated"),
            ("generated", "Generated"),
            ("in_progress", "Generating"),
            ("error", "Failed"),
            ("queued", "queued"),
            (None, "Unknown"),
        ],
    )
    def test_status_text(self, status, expected: str) -> None:
        assert format_pdf_status(status) == expected

    def test_history_table(self) -> None:
        entries = [
            PdfHistoryEntry.model_validate(pdf_history_payload(1)),
            PdfHistoryEntry.model_validate(
                pdf_history_payload(2, filename=None, status="failed", created_at=None)
            ),
        ]
        output = PdfHistoryTableFormatter().format(entries)
        assert "quotation-7-1.pdf" in output
        assert "240 KB" in output
        assert "₹1,85,000.00" in output
        assert "2025-03-10" in output
        assert "quotation-2.pdf" in output
        assert "Failed" in output

    def test_empty_history(self) -> None:
        assert PdfHistoryTableFormatter().format([]) == "No PDFs generated yet."
