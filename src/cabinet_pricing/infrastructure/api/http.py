"""HTTP plumbing shared by every resource client.

``ApiClient`` opens a short-lived ``httpx.AsyncClient`` per call, maps
failures onto ``ApiError`` and decodes JSON. ``ResourceClient`` adds the
CRUD verbs every pricing resource supports and parses bodies into records.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, ClassVar, Generic, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from cabinet_pricing.contracts.pages import Page, UnexpectedPayloadError, unwrap_results
from cabinet_pricing.infrastructure.api.errors import (
    ApiError,
    extract_error_message,
    extract_field_errors,
)

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

DEFAULT_BASE_URL = "http://127.0.0.1:8000/"


def clean_params(params: Mapping[str, Any] | None) -> dict[str, Any]:
    """Drop unset query parameters (None or blank strings)."""
    if not params:
        return {}
    return {
        key: value
        for key, value in params.items()
        if value is not None and not (isinstance(value, str) and not value.strip())
    }


def parse_rows(payload: Any, model: type[RecordT], label: str) -> list[RecordT]:
    """Validate the rows of a reference list (categories, brands, products).

    Raises:
        ApiError: If any row does not describe a valid record.
    """
    try:
        return [model.model_validate(raw) for raw in unwrap_results(payload)]
    except PydanticValidationError as e:
        logger.warning(f"Invalid {label} payload: {e.error_count()} errors")
        raise ApiError(f"Invalid {label} data received") from e


class ApiClient:
    """Thin async wrapper around httpx for the pricing backend.

    Attributes:
        base_url: Backend root URL (default: http://127.0.0.1:8000/)
        timeout: Request timeout in seconds (default: 10.0)

    Example:
        >>> api = ApiClient("http://localhost:8000")
        >>> data = await api.request("GET", "/api/pricing/cabinet-types/",
        ...                          fallback="Failed to fetch cabinet types")
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {"Content-Type": "application/json", **(headers or {})}

    def url_for(self, path: str) -> str:
        """Join ``path`` onto the base URL whether or not it has a leading slash."""
        return f"{self.base_url}/{path.lstrip('/')}"

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        fallback: str = "Request failed",
        status_messages: Mapping[int, str] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (None if empty).

        Args:
            method: HTTP verb.
            path: Path relative to the base URL.
            params: Query parameters; unset values are dropped.
            json: JSON request body.
            fallback: Message used when the response gives none.
            status_messages: Messages that override the body for given statuses.

        Raises:
            ApiError: On network failure, HTTP error status, or a body that
                is not JSON.
        """
        response = await self._send(method, path, params, json, fallback, status_messages)
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"Non-JSON body from {method} {self.url_for(path)}")
            raise ApiError(fallback, status_code=response.status_code, path=path) from e

    async def download(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        fallback: str = "Download failed",
        accept: str = "application/pdf",
    ) -> bytes:
        """Send a request and return the raw response body.

        Raises:
            ApiError: On network failure or an HTTP error status.
        """
        response = await self._send(method, path, None, json, fallback, None, {"Accept": accept})
        return response.content

    async def _send(
        self,
        method: str,
        path: str,
        params: Mapping[str, Any] | None,
        json: Any,
        fallback: str,
        status_messages: Mapping[int, str] | None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        url = self.url_for(path)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, headers={**self.headers, **(headers or {})}
            ) as client:
                response = await client.request(
                    method, url, params=clean_params(params), json=json
                )
        except httpx.TimeoutException as e:
            logger.debug(f"Timeout calling {method} {url}: {e}")
            raise ApiError(fallback, path=path) from e
        except httpx.RequestError as e:
            logger.debug(f"Request error calling {method} {url}: {e}")
            raise ApiError(fallback, path=path) from e

        if response.is_error:
            raise self._error_from_response(response, path, fallback, status_messages)
        return response

    def _error_from_response(
        self,
        response: httpx.Response,
        path: str,
        fallback: str,
        status_messages: Mapping[int, str] | None,
    ) -> ApiError:
        try:
            payload = response.json()
        except ValueError:
            payload = None

        status = response.status_code
        logger.debug(f"{response.request.method} {path} failed with status {status}")

        field_errors = extract_field_errors(payload)
        if status_messages and status in status_messages:
            message = status_messages[status]
        else:
            message = extract_error_message(payload, fallback)
        return ApiError(message, status_code=status, field_errors=field_errors, path=path)


class ResourceClient(Generic[RecordT]):
    """CRUD client for one REST resource.

    Subclasses set ``path`` (collection URL with trailing slash),
    ``record_type`` and the human ``label``/``plural`` used in messages.
    """

    path: ClassVar[str] = ""
    record_type: ClassVar[type[BaseModel]]
    label: ClassVar[str] = "record"
    plural: ClassVar[str] = "records"

    def __init__(self, api: ApiClient | None = None) -> None:
        self.api = api or ApiClient()

    @property
    def title(self) -> str:
        return self.label[:1].upper() + self.label[1:]

    def detail_path(self, record_id: Any, action: str | None = None) -> str:
        path = f"{self.path}{record_id}/"
        return f"{path}{action}/" if action else path

    def action_path(self, action: str) -> str:
        return f"{self.path}{action}/"

    def parse(self, raw: Any) -> RecordT:
        """Validate one raw record.

        Raises:
            ApiError: If the body does not describe a valid record.
        """
        try:
            return self.record_type.model_validate(raw)  # type: ignore[return-value]
        except PydanticValidationError as e:
            logger.warning(f"Invalid {self.label} payload: {e.error_count()} errors")
            raise ApiError(f"Invalid {self.label} data received") from e

    def parse_page(self, payload: Any) -> Page[RecordT]:
        try:
            return Page.from_payload(payload, self.parse)
        except UnexpectedPayloadError as e:
            logger.warning(f"Unexpected {self.plural} list payload: {e}")
            raise ApiError(f"Invalid {self.plural} data received") from e

    def _missing(self) -> dict[int, str]:
        return {404: f"{self.title} not found"}

    async def list(self, params: Mapping[str, Any] | None = None) -> Page[RecordT]:
        payload = await self.api.request(
            "GET", self.path, params=params, fallback=f"Failed to fetch {self.plural}"
        )
        return self.parse_page(payload)

    async def get(self, record_id: Any) -> RecordT:
        payload = await self.api.request(
            "GET",
            self.detail_path(record_id),
            fallback=f"Failed to fetch {self.label}",
            status_messages=self._missing(),
        )
        return self.parse(payload)

    async def create(self, data: Mapping[str, Any]) -> RecordT:
        payload = await self.api.request(
            "POST", self.path, json=dict(data), fallback=f"Failed to create {self.label}"
        )
        return self.parse(payload)

    async def update(self, record_id: Any, data: Mapping[str, Any]) -> RecordT:
        payload = await self.api.request(
            "PUT",
            self.detail_path(record_id),
            json=dict(data),
            fallback=f"Failed to update {self.label}",
        )
        return self.parse(payload)

    async def patch(self, record_id: Any, data: Mapping[str, Any]) -> RecordT:
        payload = await self.api.request(
            "PATCH",
            self.detail_path(record_id),
            json=dict(data),
            fallback=f"Failed to update {self.label}",
            status_messages=self._missing(),
        )
        return self.parse(payload)

    async def delete(self, record_id: Any) -> None:
        await self.api.request(
            "DELETE",
            self.detail_path(record_id),
            fallback=f"Failed to delete {self.label}",
            status_messages={
                404: f"{self.title} not found",
                403: f"You do not have permission to delete this {self.label}",
                409: f"{self.title} is in use and cannot be deleted",
            },
        )

    async def toggle_status(self, record_id: Any, is_active: bool) -> RecordT:
        payload = await self.api.request(
            "PATCH",
            self.detail_path(record_id),
            json={"is_active": is_active},
            fallback=f"Failed to update {self.label} status",
            status_messages=self._missing(),
        )
        return self.parse(payload)
