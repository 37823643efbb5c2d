"""Command line interface for the cabinet pricing admin."""

from cabinet_pricing.cli.main import app

__all__ = ["app"]
