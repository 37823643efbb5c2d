"""Helpers shared by CLI commands."""

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

import typer

from cabinet_pricing.application.config import ClientSettings
from cabinet_pricing.infrastructure.api.errors import ApiError

T = TypeVar("T")


def get_settings(ctx: typer.Context) -> ClientSettings:
    """Settings loaded by the app callback (defaults if none were loaded)."""
    root = ctx.find_root()
    if isinstance(root.obj, ClientSettings):
        return root.obj
    return ClientSettings()


def run_api(call: Coroutine[Any, Any, T]) -> T:
    """Run a backend call, turning ``ApiError`` into an ``Error:`` line and exit 1."""
    try:
        return asyncio.run(call)
    except ApiError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
