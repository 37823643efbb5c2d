"""Admin client for a kitchen cabinet quotation and pricing backend."""

__version__ = "0.1.0"
