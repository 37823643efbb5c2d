"""Quotation PDF commands: templates, history and download."""

from pathlib import Path
from typing import Annotated

import typer

from cabinet_pricing.application.stores import QuotationPdfStore
from cabinet_pricing.cli.commands.common import get_settings, run_api
from cabinet_pricing.infrastructure.api import QuotationPdfClient
from cabinet_pricing.infrastructure.formatters import PdfHistoryTableFormatter

quotation_pdf_app = typer.Typer(name="quotation-pdf", help="Quotation PDF templates and history.")


def _store(ctx: typer.Context, project_id: str | None = None) -> QuotationPdfStore:
    return QuotationPdfStore(project_id, QuotationPdfClient(get_settings(ctx).api_client()))


@quotation_pdf_app.command(name="templates")
def list_templates(ctx: typer.Context) -> None:
    """List the templates a quotation PDF can be generated with."""
    for template in run_api(_store(ctx).load_templates()):
        pages = f" ({template.estimated_pages})" if template.estimated_pages else ""
        typer.echo(f"{template.template_type.value:<9} {template.name}{pages}")


@quotation_pdf_app.command(name="history")
def history(
    ctx: typer.Context,
    project_id: Annotated[
        str | None, typer.Argument(help="Project id (all projects if omitted)")
    ] = None,
) -> None:
    """List generated quotation PDFs.

    Example:
        cabinet-pricing quotation-pdf history 42
    """
    result = run_api(_store(ctx, project_id).load_history())
    if not result.success:
        typer.echo(f"Error: {result.error}", err=True)
        raise typer.Exit(code=1)
    typer.echo(PdfHistoryTableFormatter().format(result.data))


@quotation_pdf_app.command(name="download")
def download(
    ctx: typer.Context,
    pdf_id: Annotated[str, typer.Argument(help="Generated PDF id")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="File to write (default: the PDF's filename)"),
    ] = None,
) -> None:
    """Download a generated quotation PDF."""
    result = run_api(_store(ctx).download(pdf_id))
    if not result.success:
        typer.echo(f"Error: {result.error}", err=True)
        raise typer.Exit(code=1)
    path = output or Path(result.data.filename)
    path.write_bytes(result.data.content)
    typer.echo(f"Saved {path}")
