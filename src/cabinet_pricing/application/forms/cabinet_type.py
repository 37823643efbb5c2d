"""Cabinet type form."""

from __future__ import annotations

from typing import Any

from cabinet_pricing.application.forms.base import ResourceForm, optional_id

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 150


class CabinetTypeForm(ResourceForm):
    default_error = "Failed to save cabinet type"

    def defaults(self) -> dict[str, Any]:
        return {
            "name": "",
            "category": "",
            "description": "",
            "is_active": True,
            "notes": "",
        }

    def check(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        name = str(self.data.get("name") or "").strip()
        if not name:
            errors["name"] = "Cabinet type name is required"
        elif len(name) < NAME_MIN_LENGTH:
            errors["name"] = "Name must be at least 2 characters long"
        elif len(name) > NAME_MAX_LENGTH:
            errors["name"] = "Name must be less than 150 characters"

        if optional_id(self.data.get("category")) is None:
            errors["category"] = "Category is required"
        return errors

    def payload(self) -> dict[str, Any]:
        return {
            "name": str(self.data["name"]).strip(),
            "category": optional_id(self.data["category"]),
            "description": str(self.data.get("description") or "").strip(),
            "is_active": bool(self.data.get("is_active", True)),
            "notes": str(self.data.get("notes") or "").strip(),
        }
