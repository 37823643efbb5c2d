"""Display formatters for money, dimensions and the CLI tables."""

from __future__ import annotations

from datetime import date
from typing import Any

from cabinet_pricing.contracts.records import CabinetType, FinishRate, PdfHistoryEntry
from cabinet_pricing.domain.services.lighting import LightingTotals
from cabinet_pricing.domain.services.numbers import parse_decimal, round_money
from cabinet_pricing.domain.services.rate_validity import classify_rate
from cabinet_pricing.domain.value_objects import PdfStatus, PricingPreview

CURRENCY_SYMBOLS = {"INR": "₹"}


def _group_indian(digits: str) -> str:
    """Group an integer string the en-IN way: last three, then pairs."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_currency(amount: Any, currency: str = "INR") -> str:
    """Format an amount as currency with two decimals.

    Examples:
        >>> format_currency("1234567.5")
        '₹12,34,567.50'
        >>> format_currency(None)
        '₹0.00'
    """
    value = round_money(parse_decimal(amount))
    sign = "-" if value < 0 else ""
    whole, _, fraction = f"{abs(value):.2f}".partition(".")
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    return f"{sign}{symbol}{_group_indian(whole)}.{fraction}"


def format_dimensions(width: Any, depth: Any, height: Any) -> str:
    """``"600×560×720mm"``."""
    return f"{width}×{depth}×{height}mm"


def format_sqft(value: Any) -> str:
    """``"12.50 sq.ft"``; missing values render as zero."""
    return f"{round_money(parse_decimal(value))} sq.ft"


def format_date(value: date | None) -> str:
    return value.isoformat() if value else "-"


FILE_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def format_file_size(size: Any) -> str:
    """Binary-scaled size with up to two decimals.

    Examples:
        >>> format_file_size(1536)
        '1.5 KB'
        >>> format_file_size(None)
        'N/A'
    """
    value = parse_decimal(size)
    if value <= 0:
        return "N/A"
    unit = 0
    while value >= 1024 and unit < len(FILE_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    text = f"{round_money(value):f}".rstrip("0").rstrip(".")
    return f"{text} {FILE_SIZE_UNITS[unit]}"


def format_pdf_status(status: Any) -> str:
    pdf_status = PdfStatus.from_text(status)
    if pdf_status is PdfStatus.UNKNOWN:
        return str(status) if status else "Unknown"
    return pdf_status.value.capitalize()


class CabinetTypeTableFormatter:
    """Formats cabinet types as a text table."""

    def format(self, cabinet_types: list[CabinetType]) -> str:
        if not cabinet_types:
            return "No cabinet types found."

        lines = [
            "CABINET TYPES",
            "=" * 70,
            f"{'ID':<6} {'Name':<30} {'Category':<20} {'Status'}",
            "-" * 70,
        ]
        for cabinet_type in cabinet_types:
            category = (
                cabinet_type.category_detail.name
                if cabinet_type.category_detail
                else str(cabinet_type.category or "")
            )
            status = "Active" if cabinet_type.is_active else "Inactive"
            lines.append(
                f"{str(cabinet_type.id):<6} {cabinet_type.name[:30]:<30} "
                f"{category[:20]:<20} {status}"
            )
        lines.append("-" * 70)
        lines.append(f"{len(cabinet_types)} cabinet type(s)")
        return "\n".join(lines)


class FinishRateTableFormatter:
    """Formats finish rates with their validity status as of ``today``."""

    def __init__(self, today: date | None = None) -> None:
        self._today = today

    def format(self, rates: list[FinishRate]) -> str:
        if not rates:
            return "No finish rates found."

        lines = [
            "FINISH RATES",
            "=" * 86,
            f"{'Material':<24} {'Tier':<8} {'Rate':>14}  {'From':<10} {'To':<10} {'Status'}",
            "-" * 86,
        ]
        for rate in rates:
            status = classify_rate(rate.effective_from, rate.effective_to, self._today)
            lines.append(
                f"{rate.material_name[:24]:<24} {rate.budget_tier.value:<8} "
                f"{format_currency(rate.unit_rate, rate.currency):>14}  "
                f"{format_date(rate.effective_from):<10} {format_date(rate.effective_to):<10} "
                f"{status.value}"
            )
        lines.append("-" * 86)
        return "\n".join(lines)


class PdfHistoryTableFormatter:
    """Formats generated quotation PDFs as a text table."""

    def format(self, entries: list[PdfHistoryEntry]) -> str:
        if not entries:
            return "No PDFs generated yet."

        lines = [
            "QUOTATION PDFS",
            "=" * 92,
            f"{'File':<32} {'Template':<9} {'Size':>10} {'Amount':>16}  {'Created':<10} {'Status'}",
            "-" * 92,
        ]
        for entry in entries:
            created = entry.created_at.date() if entry.created_at else None
            lines.append(
                f"{(entry.filename or f'quotation-{entry.id}.pdf')[:32]:<32} "
                f"{(entry.template_type or '-')[:9]:<9} "
                f"{format_file_size(entry.file_size):>10} "
                f"{format_currency(entry.final_amount):>16}  "
                f"{format_date(created):<10} {format_pdf_status(entry.status)}"
            )
        lines.append("-" * 92)
        return "\n".join(lines)


def format_pricing_preview(preview: PricingPreview) -> str:
    lines = [
        f"Subtotal:   {format_currency(preview.subtotal)}",
        f"GST ({preview.tax_rate_percent}%): {format_currency(preview.tax_amount)}",
        f"Total:      {format_currency(preview.total)}",
    ]
    return "\n".join(lines)


def format_lighting_totals(totals: LightingTotals) -> str:
    lines = [
        "LIGHTING",
        "=" * 40,
        f"{'LED strips:':<20} {format_currency(totals.total_led_cost):>18}",
        f"{'Spot lights:':<20} {format_currency(totals.total_spot_cost):>18}",
        "-" * 40,
        f"{'Total:':<20} {format_currency(totals.grand_total):>18}",
        f"{totals.active_count} of {totals.total_count} item(s) active",
    ]
    return "\n".join(lines)


__all__ = [
    "CabinetTypeTableFormatter",
    "FinishRateTableFormatter",
    "PdfHistoryTableFormatter",
    "format_currency",
    "format_date",
    "format_dimensions",
    "format_file_size",
    "format_lighting_totals",
    "format_pdf_status",
    "format_pricing_preview",
    "format_sqft",
]

