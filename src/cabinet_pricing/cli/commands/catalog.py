"""Backend listing commands: cabinet types, finish rates and lighting totals."""

from datetime import date
from typing import Annotated

import typer

from cabinet_pricing.application.stores import LightingStore
from cabinet_pricing.cli.commands.common import get_settings, run_api
from cabinet_pricing.contracts.records import ProjectRef
from cabinet_pricing.domain.services.rate_validity import classify_rate
from cabinet_pricing.domain.value_objects import BudgetTier, RateStatus
from cabinet_pricing.infrastructure.api import (
    CabinetTypesClient,
    FinishRatesClient,
    LightingClient,
)
from cabinet_pricing.infrastructure.formatters import (
    CabinetTypeTableFormatter,
    FinishRateTableFormatter,
    format_lighting_totals,
)

cabinet_types_app = typer.Typer(name="cabinet-types", help="Browse cabinet types.")
finish_rates_app = typer.Typer(name="finish-rates", help="Browse finish rates.")
lighting_app = typer.Typer(name="lighting", help="Project lighting costs.")


@cabinet_types_app.command(name="list")
def list_cabinet_types(
    ctx: typer.Context,
    category: Annotated[
        str | None, typer.Option("--category", "-c", help="Category id or code")
    ] = None,
    search: Annotated[
        str | None, typer.Option("--search", "-s", help="Search name and description")
    ] = None,
) -> None:
    """List cabinet types from the backend.

    Example:
        cabinet-pricing cabinet-types list --category WALL
    """
    client = CabinetTypesClient(get_settings(ctx).api_client())
    value = category.upper() if category and not category.isdigit() else category
    page = run_api(client.list({"category": value, "search": search}))
    typer.echo(CabinetTypeTableFormatter().format(page.items))


@finish_rates_app.command(name="list")
def list_finish_rates(
    ctx: typer.Context,
    material: Annotated[str | None, typer.Option("--material", "-m", help="Material id")] = None,
    tier: Annotated[
        BudgetTier | None, typer.Option("--tier", "-t", help="Budget tier")
    ] = None,
    status: Annotated[
        RateStatus | None, typer.Option("--status", help="Only rates with this status today")
    ] = None,
) -> None:
    """List finish rates with their current validity status.

    Example:
        cabinet-pricing finish-rates list --tier LUXURY --status current
    """
    client = FinishRatesClient(get_settings(ctx).api_client())
    params = {"material": material, "budget_tier": tier.value if tier else None}
    rates = run_api(client.list(params)).items

    today = date.today()
    if status is not None:
        rates = [
            r for r in rates if classify_rate(r.effective_from, r.effective_to, today) is status
        ]
    typer.echo(FinishRateTableFormatter(today).format(rates))


@lighting_app.command(name="totals")
def lighting_totals(
    ctx: typer.Context,
    project_id: Annotated[str, typer.Argument(help="Project id")],
) -> None:
    """Sum LED and spot light costs over a project's active lighting items.

    Example:
        cabinet-pricing lighting totals 42
    """
    store = LightingStore(
        ProjectRef(id=project_id), LightingClient(get_settings(ctx).api_client())
    )
    result = run_api(store.fetch_all())
    if not result.success:
        typer.echo(f"Error: {result.error}", err=True)
        raise typer.Exit(code=1)
    typer.echo(format_lighting_totals(store.totals()))


__all__ = [
    "cabinet_types_app",
    "finish_rates_app",
    "lighting_app",
]
