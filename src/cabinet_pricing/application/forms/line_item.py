"""Line item form."""

from __future__ import annotations

from typing import Any

from cabinet_pricing.application.forms.base import ResourceForm, optional_id
from cabinet_pricing.application.stores.line_items import validate_line_item
from cabinet_pricing.domain.services.numbers import parse_int
from cabinet_pricing.domain.value_objects import Scope

DIMENSION_LABELS = {
    "width_mm": "Width",
    "depth_mm": "Depth",
    "height_mm": "Height",
    "qty": "Quantity",
}


class LineItemForm(ResourceForm):
    default_error = "Failed to save line item"

    def defaults(self) -> dict[str, Any]:
        return {
            "cabinet_type": "",
            "scope": Scope.OPEN.value,
            "width_mm": "",
            "depth_mm": "",
            "height_mm": "",
            "qty": "1",
            "cabinet_material": "",
            "door_material": "",
            "remarks": "",
        }

    def check(self) -> dict[str, str]:
        errors = validate_line_item(self.data)
        for name, label in DIMENSION_LABELS.items():
            if str(self.data.get(name) or "").strip() == "":
                errors[name] = f"{label} is required"
        if self.data.get("scope") not in {scope.value for scope in Scope}:
            errors["scope"] = "Scope must be OPEN or WORKING"
        return errors

    def payload(self) -> dict[str, Any]:
        payload = {
            "cabinet_type": optional_id(self.data["cabinet_type"]),
            "scope": self.data["scope"],
            "cabinet_material": optional_id(self.data["cabinet_material"]),
            "door_material": optional_id(self.data["door_material"]),
            "remarks": str(self.data.get("remarks") or "").strip(),
        }
        for name in DIMENSION_LABELS:
            payload[name] = parse_int(self.data[name])
        return payload
