"""Client settings with file and environment overrides.

Settings come from defaults, then an optional JSON file, then
``CABINET_PRICING_*`` environment variables. Loading errors raise
``ConfigError`` with an ``error_type`` of ``file_not_found``,
``file_read_error``, ``json_parse`` or ``validation``.
"""

import json
import os
from collections.abc import Mapping
from decimal import Decimal
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from cabinet_pricing.domain.value_objects import DEFAULT_CURRENCY, DEFAULT_TAX_RATE
from cabinet_pricing.infrastructure.api.http import DEFAULT_BASE_URL, ApiClient

ENV_PREFIX = "CABINET_PRICING_"

# Environment variable suffix -> settings field
ENV_FIELDS: dict[str, str] = {
    "BASE_URL": "base_url",
    "TIMEOUT": "timeout",
    "PAGE_SIZE": "page_size",
}


class ConfigError(Exception):
    """Exception raised for settings-related errors.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, json_parse, validation)
        path: Path to the settings file (if applicable)
        details: Line/column for JSON errors, or per-field validation errors
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ClientSettings(BaseModel):
    """Runtime settings for the admin client.

    Attributes:
        base_url: Root URL of the pricing backend.
        timeout: HTTP timeout in seconds.
        page_size: Default page size for list views and stores.
        currency: Currency code used for display.
        tax_rate: Tax rate applied to accessory price previews.
        notification_seconds: How long a toast stays visible.
    """

    model_config = ConfigDict(extra="forbid")

    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(default=10.0, gt=0)
    page_size: int = Field(default=20, ge=1, le=500)
    currency: str = DEFAULT_CURRENCY
    tax_rate: Decimal = Field(default=DEFAULT_TAX_RATE, ge=0, lt=1)
    notification_seconds: float = Field(default=5.0, ge=0)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v

    def api_client(self) -> ApiClient:
        return ApiClient(base_url=self.base_url, timeout=self.timeout)


def _setting_name(loc: tuple[str | int, ...]) -> str:
    """Dotted name for a validation location; an empty location is the whole file."""
    return ".".join(str(part) for part in loc) or "(settings)"


def _validation_details(
    error: PydanticValidationError, sources: Mapping[str, str]
) -> list[dict[str, Any]]:
    """One entry per failed setting, noting the file or variable that supplied it."""
    return [
        {
            "path": _setting_name(err["loc"]),
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
            "source": sources.get(_setting_name(err["loc"]), ""),
        }
        for err in error.errors()
    ]


def _validation_message(details: list[dict[str, Any]]) -> str:
    lines = ["Settings validation failed:"]
    for detail in details:
        line = f"  - {detail['path']}: {detail['message']}"
        if detail["source"]:
            line += f" (got {detail['value']!r} from {detail['source']})"
        lines.append(line)
    return "\n".join(lines)


def _read_settings_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(
            message=f"Settings file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            message=f"Error reading settings file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        )

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=f"Invalid JSON in settings file: {path} (line {e.lineno}, column {e.colno}): {e.msg}",
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )

    if not isinstance(data, dict):
        raise ConfigError(
            message=f"Settings file must contain a JSON object: {path}",
            error_type="validation",
            path=path,
        )
    return data


def load_settings(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ClientSettings:
    """Load settings from an optional JSON file and the environment.

    Args:
        path: JSON settings file; skipped when None.
        environ: Environment mapping (defaults to ``os.environ``).

    Returns:
        Validated ``ClientSettings``.

    Raises:
        ConfigError: If the file is missing, unreadable, not valid JSON,
            or the merged values fail validation.

    Example:
        >>> settings = load_settings(environ={"CABINET_PRICING_PAGE_SIZE": "50"})
        >>> settings.page_size
        50
    """
    data: dict[str, Any] = _read_settings_file(path) if path is not None else {}
    sources = {key: str(path) for key in data}

    env = os.environ if environ is None else environ
    for suffix, field_name in ENV_FIELDS.items():
        variable = f"{ENV_PREFIX}{suffix}"
        value = env.get(variable)
        if value:
            data[field_name] = value
            sources[field_name] = variable

    try:
        return ClientSettings.model_validate(data)
    except PydanticValidationError as e:
        details = _validation_details(e, sources)
        raise ConfigError(
            message=_validation_message(details),
            error_type="validation",
            path=path,
            details=details,
        )
