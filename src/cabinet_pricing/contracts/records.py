"""Pydantic records mirrored from the pricing backend.

Records are frozen: the client replaces a record wholesale when the server
returns a new version, it never edits one in place. Unknown keys (the
backend's ``*_detail`` expansions, audit timestamps) are kept as extras.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from cabinet_pricing.domain.value_objects import (
    DEFAULT_CURRENCY,
    BudgetTier,
    LightingCalcMethod,
    MaterialRole,
    PdfStatus,
    PdfTemplateType,
    Scope,
)


class Record(BaseModel):
    """Base for every backend record."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    id: int | str

    def to_payload(self) -> dict[str, Any]:
        """Serialize for a request body (JSON-compatible, extras included)."""
        return self.model_dump(mode="json", exclude={"id"})


class Category(Record):
    """Cabinet category (BASE, WALL, TALL, ...). Read-only here."""

    name: str = ""
    description: str | None = ""


class CabinetType(Record):
    """A cabinet type within a category."""

    name: str
    category: int | str | None = None
    category_detail: Category | None = None
    description: str | None = ""
    is_active: bool = True
    notes: str | None = ""

    @property
    def category_id(self) -> int | str | None:
        if self.category_detail is not None:
            return self.category_detail.id
        return self.category


class Material(Record):
    """A board or finish material."""

    name: str
    role: MaterialRole = MaterialRole.BOTH
    notes: str | None = ""
    is_active: bool = True

    @property
    def usable_for_cabinet(self) -> bool:
        return self.role.usable_for_cabinet

    @property
    def usable_for_door(self) -> bool:
        return self.role.usable_for_door


class MaterialRef(BaseModel):
    """Expanded material reference embedded in other records."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: int | str
    name: str = ""


class FinishRate(Record):
    """Per-square-foot finish rate for a material and budget tier."""

    material: int | str
    material_detail: MaterialRef | None = None
    budget_tier: BudgetTier
    unit_rate: Decimal = Field(ge=0)
    currency: str = DEFAULT_CURRENCY
    effective_from: date
    effective_to: date | None = None
    is_active: bool = True

    @property
    def material_name(self) -> str:
        if self.material_detail is not None and self.material_detail.name:
            return self.material_detail.name
        return str(self.material)


class CabinetTypeRef(BaseModel):
    """Expanded cabinet type reference embedded in line items."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: int | str
    name: str = ""
    category: Category | None = None


class LineItem(Record):
    """One cabinet within a project, with server-computed pricing."""

    project: int | str | None = None
    cabinet_type: int | str | None = None
    cabinet_type_detail: CabinetTypeRef | None = None
    cabinet_material: int | str | None = None
    cabinet_material_detail: MaterialRef | None = None
    door_material: int | str | None = None
    door_material_detail: MaterialRef | None = None
    width_mm: int = 0
    depth_mm: int = 0
    height_mm: int = 0
    qty: int = 1
    scope: Scope = Scope.OPEN
    line_total_before_tax: Decimal | None = None
    computed_cabinet_sqft: Decimal | None = None
    computed_door_sqft: Decimal | None = None


class Brand(Record):
    """Accessory brand from the product catalog."""

    name: str
    is_active: bool = True


class ProductVariant(Record):
    """A purchasable SKU of a catalog product."""

    name: str | None = None
    sku: str | None = None
    company_price: Decimal = Decimal("0")
    mrp: Decimal | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.sku or str(self.id)


class ProjectAccessory(Record):
    """An accessory attached to a line item."""

    line_item: int | str
    product_variant: int | str
    qty: int = Field(default=1, ge=1)
    unit_price: Decimal = Field(default=Decimal("0"), ge=0)
    installation_notes: str | None = ""
    total_price: Decimal | None = None
    accessory_name: str | None = None
    material_code: str | None = None


class LightingRule(Record):
    """Rates used by the backend to price a lighting item."""

    name: str = ""
    cabinet_material: int | str
    cabinet_type: int | str | None = None
    budget_tier: BudgetTier
    is_global: bool = True
    customer: int | str | None = None
    is_active: bool = True
    effective_from: date | None = None
    effective_to: date | None = None
    calc_method: LightingCalcMethod = LightingCalcMethod.PER_WIDTH
    led_strip_rate_per_mm: Decimal = Decimal("0")
    spot_light_rate_per_cabinet: Decimal = Decimal("0")
    currency: str = DEFAULT_CURRENCY
    applies_to_wall_cabinets: bool = True
    applies_to_base_cabinets: bool = True
    applies_to_work_top: bool = True
    applies_to_tall_cabinets: bool = False


class LightingItem(Record):
    """Lighting costs for one (material, cabinet type) pair in a project."""

    project: int | str | None = None
    cabinet_material: int | str | None = None
    cabinet_type: int | str | None = None
    lighting_rule: int | str | None = None
    led_under_wall_cost: Decimal = Decimal("0")
    led_work_top_cost: Decimal = Decimal("0")
    led_skirting_cost: Decimal = Decimal("0")
    spot_lights_cost: Decimal = Decimal("0")
    total_cost: Decimal = Decimal("0")
    is_active: bool = True


class ProjectRef(BaseModel):
    """The project fields lighting rule selection depends on."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: int | str
    customer: int | str | None = None
    budget_tier: BudgetTier = BudgetTier.ECONOMY


class PdfTemplate(Record):
    """A quotation PDF layout offered by the backend."""

    name: str = ""
    template_type: PdfTemplateType = PdfTemplateType.DETAILED
    description: str | None = ""
    is_active: bool = True
    features: list[str] = Field(default_factory=list)
    estimated_pages: str | None = None
    best_for: str | None = None


class PdfHistoryEntry(Record):
    """One generated quotation PDF."""

    project_id: int | str | None = None
    project_name: str | None = None
    customer_name: str | None = None
    template_type: str | None = None
    filename: str | None = None
    file_size: int | None = None
    status: str | None = None
    final_amount: Decimal | None = None
    created_at: datetime | None = None

    @property
    def pdf_status(self) -> PdfStatus:
        return PdfStatus.from_text(self.status)


class PdfCustomization(BaseModel):
    """What a project's quotation PDF includes and how it looks.

    Not a backend record: there is one customization per project and it
    carries no id of its own.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    template_type: PdfTemplateType = PdfTemplateType.DETAILED

    include_cabinet_details: bool = True
    include_door_details: bool = True
    include_accessories: bool = True
    include_accessory_images: bool = True
    include_plan_images: bool = True
    include_lighting: bool = True
    show_item_codes: bool = True
    show_dimensions: bool = True
    include_warranty_info: bool = True
    include_terms_conditions: bool = True

    discount_percentage: Decimal = Decimal("0")
    discount_amount: Decimal = Decimal("0")
    discount_reason: str | None = ""

    special_instructions: str | None = ""
    installation_notes: str | None = ""
    timeline_notes: str | None = ""
    custom_requirements: str | None = ""

    header_logo: bool = True
    footer_contact: bool = True
    page_numbers: bool = True
    watermark: bool = False
    color_theme: str = "default"
