"""Backend payload builders shared by the test modules."""

from __future__ import annotations

from typing import Any

BASE_URL = "http://pricing.test"


def url(path: str) -> str:
    """Absolute URL of a backend path on the test server."""
    return f"{BASE_URL}/{path.lstrip('/')}"


def cabinet_type_payload(id: int = 1, **overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": id,
        "name": f"Base Unit {id}",
        "category": 1,
        "category_detail": {"id": 1, "name": "BASE", "description": "Base cabinets"},
        "description": "Floor standing",
        "is_active": True,
        "notes": "",
        "created_at": "2025-01-01T10:00:00Z",
    }
    data.update(overrides)
    return data


def finish_rate_payload(id: int = 1, **overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": id,
        "material": 10,
        "material_detail": {"id": 10, "name": "Marine Ply"},
        "budget_tier": "LUXURY",
        "unit_rate": "450.00",
        "currency": "INR",
        "effective_from": "2025-01-01",
        "effective_to": None,
        "is_active": True,
    }
    data.update(overrides)
    return data


def material_payload(id: int = 10, **overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {"id": id, "name": f"Material {id}", "role": "BOTH", "is_active": True}
    data.update(overrides)
    return data


def line_item_payload(id: int = 1, **overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": id,
        "project": 7,
        "cabinet_type": 1,
        "cabinet_type_detail": {
            "id": 1,
            "name": "Base Unit",
            "category": {"id": 1, "name": "BASE"},
        },
        "cabinet_material": 10,
        "cabinet_material_detail": {"id": 10, "name": "Marine Ply"},
        "door_material": 11,
        "door_material_detail": {"id": 11, "name": "Acrylic"},
        "width_mm": 600,
        "depth_mm": 560,
        "height_mm": 720,
        "qty": 1,
        "scope": "OPEN",
        "line_total_before_tax": "12500.00",
        "computed_cabinet_sqft": "8.50",
        "computed_door_sqft": "4.65",
    }
    data.update(overrides)
    return data


def accessory_payload(id: int = 1, **overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": id,
        "line_item": 1,
        "product_variant": 501,
        "qty": 2,
        "unit_price": "285.00",
        "installation_notes": "",
        "total_price": "570.00",
        "accessory_name": "Soft-close hinge",
        "material_code": "HNG-01",
    }
    data.update(overrides)
    return data


def lighting_rule_payload(id: int = 1, **overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": id,
        "name": f"Rule {id}",
        "cabinet_material": 10,
        "cabinet_type": None,
        "budget_tier": "LUXURY",
        "is_global": True,
        "customer": None,
        "is_active": True,
        "led_strip_rate_per_mm": "1.50",
        "spot_light_rate_per_cabinet": "400.00",
        "calc_method": "PER_WIDTH",
        "applies_to_tall_cabinets": False,
    }
    data.update(overrides)
    return data


def lighting_item_payload(id: int = 1, **overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": id,
        "project": 7,
        "cabinet_material": 10,
        "cabinet_type": 1,
        "lighting_rule": 3,
        "led_under_wall_cost": "1000.00",
        "led_work_top_cost": "500.00",
        "led_skirting_cost": "250.00",
        "spot_lights_cost": "800.00",
        "total_cost": "2550.00",
        "is_active": True,
    }
    data.update(overrides)
    return data


def pdf_history_payload(id: int = 1, **overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": id,
        "project_id": 7,
        "project_name": "Sharma Residence",
        "customer_name": "Anita Sharma",
        "template_type": "DETAILED",
        "filename": f"quotation-7-{id}.pdf",
        "file_size": 245760,
        "status": "completed",
        "final_amount": "185000.00",
        "created_at": "2025-03-10T11:30:00Z",
    }
    data.update(overrides)
    return data


def pdf_template_payload(id: int = 1, **overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": id,
        "name": "Standard Template",
        "template_type": "STANDARD",
        "description": "Essentials only",
        "is_active": True,
        "features": ["Line Items", "Pricing Summary"],
        "estimated_pages": "3-4 pages",
    }
    data.update(overrides)
    return data


def paginated(
    results: list[dict[str, Any]], count: int | None = None, next: str | None = None
) -> dict[str, Any]:
    return {
        "results": results,
        "count": len(results) if count is None else count,
        "next": next,
        "previous": None,
    }
