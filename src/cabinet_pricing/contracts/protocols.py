"""Protocols between the resource stores and the API clients.

Stores depend on ``ResourceClientProtocol`` rather than a concrete httpx
client, so tests and alternative backends can stand in for it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar

if TYPE_CHECKING:
    from cabinet_pricing.contracts.pages import Page

RecordT = TypeVar("RecordT")
RecordT_co = TypeVar("RecordT_co", covariant=True)


class ResourceClientProtocol(Protocol[RecordT]):
    """CRUD operations every resource client offers.

    Example:
        ```python
        class CabinetTypesClient(ResourceClient[CabinetType]):
            path = "/api/pricing/cabinet-types/"
        ```
    """

    label: str

    async def list(self, params: dict[str, Any] | None = None) -> "Page[RecordT]":
        """Fetch one page (or the whole list) of records."""
        ...

    async def get(self, record_id: Any) -> RecordT:
        """Fetch a single record."""
        ...

    async def create(self, data: dict[str, Any]) -> RecordT:
        """Create a record and return the server's copy."""
        ...

    async def update(self, record_id: Any, data: dict[str, Any]) -> RecordT:
        """Replace a record and return the server's copy."""
        ...

    async def delete(self, record_id: Any) -> None:
        """Delete a record."""
        ...

    async def toggle_status(self, record_id: Any, is_active: bool) -> RecordT:
        """Flip a record's ``is_active`` flag."""
        ...


class SaveCallback(Protocol):
    """Awaitable a form calls to persist its draft."""

    async def __call__(self, payload: dict[str, Any]) -> Any:
        ...
