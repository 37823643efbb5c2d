"""Infrastructure layer - backend clients and display formatting."""

from .api import (
    ApiClient as ApiClient,
    ApiError as ApiError,
    CabinetTypesClient as CabinetTypesClient,
    FinishRatesClient as FinishRatesClient,
    LightingClient as LightingClient,
    LineItemsClient as LineItemsClient,
    MaterialsClient as MaterialsClient,
    ProjectAccessoriesClient as ProjectAccessoriesClient,
)
