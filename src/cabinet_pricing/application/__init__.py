"""Application layer - settings, stores, forms, list views and pages."""

from .config import (
    ClientSettings as ClientSettings,
    ConfigError as ConfigError,
    load_settings as load_settings,
)
from .pages import (
    AdminPage as AdminPage,
    EditorMode as EditorMode,
    EditorState as EditorState,
    Notifier as Notifier,
    QuotationPdfPage as QuotationPdfPage,
)
