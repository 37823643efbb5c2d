"""Draft-holding forms with submit-time validation.

A form keeps a draft seeded from the record being edited (or from
defaults), validates only when submitted, and reports both client-side and
server-side problems as ``errors`` keyed by field. Save-time failures go
under the ``"submit"`` key.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel

from cabinet_pricing.application.stores.base import ActionResult
from cabinet_pricing.infrastructure.api.errors import ApiError

logger = logging.getLogger(__name__)

SUBMIT_ERROR = "submit"

SaveFn = Callable[[dict[str, Any]], Awaitable[ActionResult[Any]]]


class FormMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


class ResourceForm:
    """Base form.

    Subclasses implement ``defaults`` and ``check`` and may override
    ``from_record`` and ``payload``.

    Attributes:
        data: Current draft values.
        errors: Field name to message; ``"submit"`` holds save failures.
        submitting: True while a save is in flight.
        closed: True after a successful edit.
    """

    default_error = "Failed to save"

    def __init__(self, record: BaseModel | None = None) -> None:
        self.record = record
        self.mode = FormMode.EDIT if record is not None else FormMode.CREATE
        self.data: dict[str, Any] = self.defaults()
        if record is not None:
            self.data.update(self.from_record(record))
        self.errors: dict[str, str] = {}
        self.submitting = False
        self.closed = False

    @property
    def record_id(self) -> Any:
        return getattr(self.record, "id", None)

    @property
    def is_edit(self) -> bool:
        return self.mode is FormMode.EDIT

    def defaults(self) -> dict[str, Any]:
        raise NotImplementedError

    def from_record(self, record: BaseModel) -> dict[str, Any]:
        """Draft values taken from an existing record (default fields only)."""
        dumped = record.model_dump(mode="json")
        return {
            key: "" if dumped.get(key) is None else dumped[key]
            for key in self.defaults()
            if key in dumped
        }

    def check(self) -> dict[str, str]:
        raise NotImplementedError

    def payload(self) -> dict[str, Any]:
        return dict(self.data)

    def set_field(self, name: str, value: Any) -> None:
        """Update one draft value and clear that field's shown error."""
        self.data[name] = value
        self.errors.pop(name, None)

    def validate(self) -> bool:
        self.errors = self.check()
        return not self.errors

    def reset(self) -> None:
        self.data = self.defaults()
        self.errors = {}

    async def submit(self, save: SaveFn) -> ActionResult[Any] | None:
        """Validate and hand the payload to ``save``.

        Returns None without calling ``save`` when already submitting or
        when validation fails.
        """
        if self.submitting:
            return None
        if not self.validate():
            return None

        self.submitting = True
        try:
            result = await save(self.payload())
        except ApiError as e:
            result = ActionResult.failed(e)
        finally:
            self.submitting = False

        if result.stale:
            return result
        if result.success:
            if self.is_edit:
                self.closed = True
            else:
                self.reset()
            return result

        logger.debug(f"{type(self).__name__} save failed: {result.error}")
        self.errors[SUBMIT_ERROR] = result.error or self.default_error
        for field_name, messages in result.field_errors.items():
            self.errors[field_name] = ", ".join(messages)
        return result


def optional_id(value: Any) -> Any:
    """Form selections arrive as text; send numeric ids as ints and blanks as None."""
    if value is None or value == "":
        return None
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return value
