"""Async REST clients for the pricing backend."""

from .cabinet_types import CabinetTypesClient as CabinetTypesClient
from .errors import ApiError as ApiError
from .finish_rates import FinishRatesClient as FinishRatesClient
from .http import (
    DEFAULT_BASE_URL as DEFAULT_BASE_URL,
    ApiClient as ApiClient,
    ResourceClient as ResourceClient,
)
from .lighting import (
    LightingClient as LightingClient,
    LightingItemsClient as LightingItemsClient,
    LightingRulesClient as LightingRulesClient,
)
from .line_items import LineItemsClient as LineItemsClient
from .materials import MaterialsClient as MaterialsClient
from .project_accessories import ProjectAccessoriesClient as ProjectAccessoriesClient
from .quotation_pdf import QuotationPdfClient as QuotationPdfClient
