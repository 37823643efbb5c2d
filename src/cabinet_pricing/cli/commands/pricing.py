"""Offline pricing commands: accessory price preview and rate status.

Neither command talks to the backend.
"""

from datetime import date
from typing import Annotated

import typer

from cabinet_pricing.cli.commands.common import get_settings
from cabinet_pricing.domain.services.accessory_pricing import preview_accessory_pricing
from cabinet_pricing.domain.services.rate_validity import (
    classify_rate,
    coerce_date,
    validate_rate_window,
)
from cabinet_pricing.infrastructure.formatters import format_pricing_preview


def accessory_price_command(
    ctx: typer.Context,
    unit_price: Annotated[str, typer.Option("--unit-price", "-p", help="Price per unit")],
    qty: Annotated[str, typer.Option("--qty", "-q", help="Quantity")] = "1",
) -> None:
    """Preview subtotal, GST and total for an accessory line.

    Example:
        cabinet-pricing accessory-price --unit-price 285 --qty 2
    """
    settings = get_settings(ctx)
    preview = preview_accessory_pricing(unit_price, qty, settings.tax_rate)
    typer.echo(format_pricing_preview(preview))


def rate_status_command(
    effective_from: Annotated[str, typer.Argument(help="Effective from date (YYYY-MM-DD)")],
    effective_to: Annotated[
        str | None, typer.Argument(help="Effective to date (YYYY-MM-DD), omit if open-ended")
    ] = None,
    on: Annotated[
        str | None, typer.Option("--on", help="Reference date (default: today)")
    ] = None,
) -> None:
    """Classify a rate window as expired, future or current.

    Examples:
        cabinet-pricing rate-status 2025-01-01 2025-06-01 --on 2025-07-01
        cabinet-pricing rate-status 2025-01-01
    """
    try:
        today = coerce_date(on) or date.today()
    except ValueError:
        typer.echo(f"Error: Invalid date: {on}", err=True)
        raise typer.Exit(code=1)

    errors = validate_rate_window(effective_from, effective_to, today=today, creating=False)
    if errors:
        for field_name, message in errors.items():
            typer.echo(f"Error: {field_name}: {message}", err=True)
        raise typer.Exit(code=1)

    status = classify_rate(effective_from, effective_to, today)
    typer.echo(f"{status.value} (as of {today.isoformat()})")
