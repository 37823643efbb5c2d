"""Client settings loading.

Public API:
    - ClientSettings: Runtime settings model
    - load_settings: Load settings from a JSON file and the environment
    - ConfigError: Exception for settings errors
"""

from .settings import (
    ConfigError as ConfigError,
    ClientSettings as ClientSettings,
    load_settings as load_settings,
)
