"""Resource stores holding fetched records and exposing CRUD actions."""

from .base import (
    ActionResult as ActionResult,
    Pagination as Pagination,
    ResourceStore as ResourceStore,
    StoreStatus as StoreStatus,
)
from .cabinet_types import (
    CabinetTypeStats as CabinetTypeStats,
    CabinetTypeStore as CabinetTypeStore,
    CategoryGroup as CategoryGroup,
)
from .finish_rates import (
    FinishRateStats as FinishRateStats,
    FinishRateStore as FinishRateStore,
    MaterialRateGroup as MaterialRateGroup,
)
from .lighting import (
    LightingRuleStats as LightingRuleStats,
    LightingRuleStore as LightingRuleStore,
    LightingStore as LightingStore,
)
from .line_items import (
    LineItemStats as LineItemStats,
    LineItemStore as LineItemStore,
    validate_line_item as validate_line_item,
)
from .project_accessories import (
    AccessoryTotals as AccessoryTotals,
    ProjectAccessoryStore as ProjectAccessoryStore,
)
from .quotation_pdf import (
    DownloadedPdf as DownloadedPdf,
    QuotationPdfStore as QuotationPdfStore,
)
