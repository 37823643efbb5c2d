"""CLI command implementations for the cabinet-pricing application.

This package contains:
- accessory-price: Offline accessory price preview
- rate-status: Offline rate window classification
- cabinet-types, finish-rates, lighting: Backend listing groups
- quotation-pdf: PDF templates, history and download
"""

from cabinet_pricing.cli.commands.catalog import (
    cabinet_types_app,
    finish_rates_app,
    lighting_app,
)
from cabinet_pricing.cli.commands.pricing import accessory_price_command, rate_status_command
from cabinet_pricing.cli.commands.quotation_pdf import quotation_pdf_app

__all__ = [
    "accessory_price_command",
    "cabinet_types_app",
    "finish_rates_app",
    "lighting_app",
    "quotation_pdf_app",
    "rate_status_command",
]
