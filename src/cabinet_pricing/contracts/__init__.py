"""Contracts module - records and protocols shared across layers.

This module provides:
- Pydantic records mirrored from the pricing backend
- ``Page``, the single normalized shape of list responses
- Protocols the application layer depends on instead of concrete clients

Example:
    ```python
    from cabinet_pricing.contracts import CabinetType, Page

    page = Page.from_payload(payload, CabinetType.model_validate)
    ```
"""

from .pages import (
    Page as Page,
    UnexpectedPayloadError as UnexpectedPayloadError,
    unwrap_results as unwrap_results,
)
from .protocols import (
    ResourceClientProtocol as ResourceClientProtocol,
    SaveCallback as SaveCallback,
)
from .records import (
    Brand as Brand,
    CabinetType as CabinetType,
    CabinetTypeRef as CabinetTypeRef,
    Category as Category,
    FinishRate as FinishRate,
    LightingItem as LightingItem,
    LightingRule as LightingRule,
    LineItem as LineItem,
    Material as Material,
    MaterialRef as MaterialRef,
    PdfCustomization as PdfCustomization,
    PdfHistoryEntry as PdfHistoryEntry,
    PdfTemplate as PdfTemplate,
    ProductVariant as ProductVariant,
    ProjectAccessory as ProjectAccessory,
    ProjectRef as ProjectRef,
    Record as Record,
)
