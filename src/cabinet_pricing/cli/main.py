"""Typer CLI for the cabinet pricing admin."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from cabinet_pricing.application.config import ConfigError, load_settings
from cabinet_pricing.cli.commands import (
    accessory_price_command,
    cabinet_types_app,
    finish_rates_app,
    lighting_app,
    quotation_pdf_app,
    rate_status_command,
)

app = typer.Typer(
    name="cabinet-pricing",
    help="Preview prices and browse the kitchen cabinet pricing catalog.",
)

app.command(name="accessory-price")(accessory_price_command)
app.command(name="rate-status")(rate_status_command)

app.add_typer(cabinet_types_app, name="cabinet-types")
app.add_typer(finish_rates_app, name="finish-rates")
app.add_typer(lighting_app, name="lighting")
app.add_typer(quotation_pdf_app, name="quotation-pdf")


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option("--config", help="JSON settings file"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log requests and responses"),
    ] = False,
) -> None:
    """Load settings and configure logging before any command runs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        ctx.obj = load_settings(config)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
