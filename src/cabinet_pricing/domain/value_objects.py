"""Value objects for the cabinet pricing domain."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


# Goods and services tax applied to accessory previews (18% GST)
DEFAULT_TAX_RATE = Decimal("0.18")

# Finish rates are always quoted in rupees
DEFAULT_CURRENCY = "INR"

TWO_PLACES = Decimal("0.01")


class BudgetTier(str, Enum):
    """Pricing band applied to a material rate or a project."""

    LUXURY = "LUXURY"
    ECONOMY = "ECONOMY"


class MaterialRole(str, Enum):
    """Where a material may be used.

    Attributes:
        BOTH: Cabinet carcass and door finishing.
        CABINET: Cabinet body/carcass only.
        DOOR: Door panels and shutters only.
        TOP: Countertops and work surfaces only.
    """

    BOTH = "BOTH"
    CABINET = "CABINET"
    DOOR = "DOOR"
    TOP = "TOP"

    @property
    def usable_for_cabinet(self) -> bool:
        return self in (MaterialRole.CABINET, MaterialRole.BOTH)

    @property
    def usable_for_door(self) -> bool:
        return self in (MaterialRole.DOOR, MaterialRole.BOTH)

    @property
    def label(self) -> str:
        return _ROLE_LABELS[self]


_ROLE_LABELS = {
    MaterialRole.BOTH: "Cabinet & Door",
    MaterialRole.CABINET: "Cabinet Only",
    MaterialRole.DOOR: "Door Only",
    MaterialRole.TOP: "Countertop Only",
}


class Scope(str, Enum):
    """Kitchen area a line item belongs to."""

    OPEN = "OPEN"
    WORKING = "WORKING"


class RateStatus(str, Enum):
    """Display classification of a dated rate against today."""

    EXPIRED = "expired"
    FUTURE = "future"
    CURRENT = "current"


class LightingCalcMethod(str, Enum):
    """How a lighting rule measures LED strip length."""

    PER_WIDTH = "PER_WIDTH"
    PER_LM = "PER_LM"
    FLAT_RATE = "FLAT_RATE"
    WALL_ONLY = "WALL_ONLY"


class PdfTemplateType(str, Enum):
    """Layouts a quotation PDF can be generated with."""

    DETAILED = "DETAILED"
    STANDARD = "STANDARD"
    SIMPLE = "SIMPLE"


class PdfStatus(str, Enum):
    """Display state of a generated quotation PDF."""

    GENERATED = "generated"
    GENERATING = "generating"
    FAILED = "failed"
    UNKNOWN = "unknown"

    @classmethod
    def from_text(cls, value: object) -> "PdfStatus":
        """Map the backend's status words (``completed``, ``in_progress``, ...)."""
        return _PDF_STATUS_WORDS.get(str(value or "").strip().lower(), cls.UNKNOWN)

    @property
    def tone(self) -> str:
        return _PDF_STATUS_TONES[self]


_PDF_STATUS_WORDS = {
    "generated": PdfStatus.GENERATED,
    "completed": PdfStatus.GENERATED,
    "generating": PdfStatus.GENERATING,
    "in_progress": PdfStatus.GENERATING,
    "failed": PdfStatus.FAILED,
    "error": PdfStatus.FAILED,
}

_PDF_STATUS_TONES = {
    PdfStatus.GENERATED: "success",
    PdfStatus.GENERATING: "warning",
    PdfStatus.FAILED: "error",
    PdfStatus.UNKNOWN: "default",
}


@dataclass(frozen=True)
class PricingPreview:
    """Client-side price preview for an accessory line.

    All money values are quantized to two decimal places.
    """

    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal
    tax_rate_percent: int

    def as_display(self) -> dict[str, str]:
        """Return the preview as two-decimal strings."""
        return {
            "subtotal": f"{self.subtotal:.2f}",
            "taxAmount": f"{self.tax_amount:.2f}",
            "total": f"{self.total:.2f}",
            "taxRate": str(self.tax_rate_percent),
        }


@dataclass(frozen=True)
class DimensionLimits:
    """Inclusive bounds for a line item measurement."""

    minimum: int
    maximum: int

    def contains(self, value: float) -> bool:
        return self.minimum <= value <= self.maximum
