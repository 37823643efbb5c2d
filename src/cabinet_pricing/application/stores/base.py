"""Resource stores: in-memory state containers over the API clients.

A store owns one list of records and exposes CRUD actions that talk to the
backend and then splice the server's answer into the list. Actions never
raise ``ApiError``; they return an ``ActionResult`` and keep the message in
``error``.

Overlapping calls are ordered with a logical clock. Each fetch takes a
ticket; a fetch response is dropped if a newer fetch was issued after it.
Each mutation takes a ticket per record; a mutation response is dropped if a
newer mutation of the same record was issued, and a fetch that started
before a mutation was applied keeps the mutated local copy of that record.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from cabinet_pricing.contracts.pages import Page
from cabinet_pricing.contracts.protocols import ResourceClientProtocol
from cabinet_pricing.infrastructure.api.errors import ApiError

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")
T = TypeVar("T")


class StoreStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"


@dataclass(frozen=True)
class ActionResult(Generic[T]):
    """Outcome of a store action.

    Attributes:
        success: True when the backend accepted the call.
        data: The record (or payload) returned on success.
        error: Human-readable message on failure.
        field_errors: Field-keyed server validation messages.
        stale: True when the response arrived after a newer call and was
            not applied to the store.
    """

    success: bool
    data: T | None = None
    error: str | None = None
    field_errors: dict[str, list[str]] = field(default_factory=dict)
    stale: bool = False

    @classmethod
    def ok(cls, data: Any = None) -> "ActionResult[Any]":
        return cls(success=True, data=data)

    @classmethod
    def failed(cls, error: ApiError) -> "ActionResult[Any]":
        return cls(success=False, error=error.message, field_errors=error.field_errors)

    @classmethod
    def discarded(cls, data: Any = None) -> "ActionResult[Any]":
        return cls(success=False, data=data, stale=True)


@dataclass
class Pagination:
    """Server-side paging state of a store."""

    page: int = 1
    page_size: int = 20
    total: int = 0
    has_next: bool = False
    has_previous: bool = False

    @property
    def total_pages(self) -> int:
        if self.total <= 0:
            return 1
        return -(-self.total // self.page_size)

    def as_params(self) -> dict[str, int]:
        return {"page": self.page, "page_size": self.page_size}


def record_key(record_id: Any) -> str:
    """Normalize ids that may arrive as ints or numeric strings."""
    return str(record_id)


class ResourceStore(Generic[RecordT]):
    """Store over one ``ResourceClientProtocol``.

    Args:
        client: API client for the resource.
        page_size: Initial page size.
        paginate: Send ``page``/``page_size`` with every fetch.
    """

    def __init__(
        self,
        client: ResourceClientProtocol[RecordT],
        page_size: int = 20,
        paginate: bool = True,
    ) -> None:
        self.client = client
        self.items: list[RecordT] = []
        self.filters: dict[str, Any] = {}
        self.pagination = Pagination(page_size=page_size)
        self.paginate = paginate
        self.error: str | None = None
        self.last_failed: Callable[[], Awaitable[ActionResult[Any]]] | None = None
        self._in_flight = 0
        self._clock = 0
        self._fetch_ticket = 0
        self._pending: dict[str, int] = {}
        self._applied: dict[str, int] = {}
        self._deleted: dict[str, int] = {}
        self._created: dict[str, int] = {}

    # -- state ---------------------------------------------------------------

    @property
    def status(self) -> StoreStatus:
        return StoreStatus.LOADING if self._in_flight else StoreStatus.IDLE

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    def find(self, record_id: Any) -> RecordT | None:
        key = record_key(record_id)
        for item in self.items:
            if record_key(item.id) == key:  # type: ignore[attr-defined]
                return item
        return None

    def base_params(self) -> dict[str, Any]:
        """Parameters every fetch of this store sends (e.g. the project)."""
        return {}

    def query_params(self, filters: Mapping[str, Any] | None = None) -> dict[str, Any]:
        params = {**self.base_params(), **self.filters, **(filters or {})}
        if self.paginate:
            params.update(self.pagination.as_params())
        return params

    def _tick(self) -> int:
        self._clock += 1
        return self._clock

    async def _run(self, call: Awaitable[T]) -> T:
        self._in_flight += 1
        try:
            return await call
        finally:
            self._in_flight -= 1

    def _fail(
        self, error: ApiError, retry: Callable[[], Awaitable[ActionResult[Any]]] | None = None
    ) -> ActionResult[Any]:
        logger.debug(f"{type(self).__name__} call failed: {error.message}")
        self.error = error.message
        if retry is not None:
            self.last_failed = retry
        return ActionResult.failed(error)

    # -- fetching ------------------------------------------------------------

    async def fetch_all(self, filters: Mapping[str, Any] | None = None) -> ActionResult[list[RecordT]]:
        """Load the list, replacing ``items`` and ``pagination``.

        A response that arrives after a newer ``fetch_all`` was issued is
        discarded.
        """
        ticket = self._tick()
        self._fetch_ticket = ticket
        params = self.query_params(filters)
        self.error = None
        try:
            page = await self._run(self.load_page(params))
        except ApiError as e:
            if ticket != self._fetch_ticket:
                return ActionResult.discarded()
            return self._fail(e, retry=lambda: self.fetch_all(filters))

        if ticket != self._fetch_ticket:
            logger.debug(f"{type(self).__name__} dropped stale fetch {ticket}")
            return ActionResult.discarded(page.items)

        self.items = self._merge_fetched(page.items, ticket)
        self._prune(ticket)
        self.pagination.total = page.total
        self.pagination.has_next = page.has_next
        self.pagination.has_previous = page.has_previous
        self.last_failed = None
        return ActionResult.ok(self.items)

    async def load_page(self, params: dict[str, Any]) -> Page[RecordT]:
        return await self.client.list(params)

    def _merge_fetched(self, fetched: list[RecordT], ticket: int) -> list[RecordT]:
        """Overlay local mutations applied after the fetch was issued."""
        merged: list[RecordT] = []
        seen: set[str] = set()
        for item in fetched:
            key = record_key(item.id)  # type: ignore[attr-defined]
            seen.add(key)
            if self._deleted.get(key, 0) > ticket:
                continue
            if self._applied.get(key, 0) > ticket:
                local = self.find(key)
                merged.append(local if local is not None else item)
            else:
                merged.append(item)
        created = [
            item
            for item in self.items
            if record_key(item.id) not in seen  # type: ignore[attr-defined]
            and self._created.get(record_key(item.id), 0) > ticket  # type: ignore[attr-defined]
        ]
        return created + merged

    def _prune(self, ticket: int) -> None:
        """Forget local marks that no later fetch can be older than."""
        for marks in (self._applied, self._deleted, self._created):
            for key in [key for key, tick in marks.items() if tick <= ticket]:
                del marks[key]

    # -- mutations -----------------------------------------------------------

    def _begin(self, record_id: Any) -> int:
        ticket = self._tick()
        self._pending[record_key(record_id)] = ticket
        return ticket

    def _settle(self, record_id: Any, ticket: int) -> bool:
        """Return True if ``ticket`` is still the record's latest call, and clear it."""
        key = record_key(record_id)
        if self._pending.get(key) != ticket:
            return False
        del self._pending[key]
        return True

    def _mark_applied(self, record_id: Any) -> None:
        self._applied[record_key(record_id)] = self._tick()

    def replace(self, record: RecordT) -> None:
        """Swap in a new version of a record, keeping list order."""
        key = record_key(record.id)  # type: ignore[attr-defined]
        self.items = [
            record if record_key(item.id) == key else item  # type: ignore[attr-defined]
            for item in self.items
        ]
        self._mark_applied(key)

    def prepend(self, record: RecordT) -> None:
        self.items = [record, *self.items]
        key = record_key(record.id)  # type: ignore[attr-defined]
        self._mark_applied(key)
        self._created[key] = self._applied[key]

    def remove(self, record_id: Any) -> None:
        key = record_key(record_id)
        self.items = [item for item in self.items if record_key(item.id) != key]  # type: ignore[attr-defined]
        self._deleted[key] = self._tick()

    async def create(self, data: Mapping[str, Any]) -> ActionResult[RecordT]:
        self.error = None
        try:
            record = await self._run(self.client.create(dict(data)))
        except ApiError as e:
            return self._fail(e)
        self.prepend(record)
        return ActionResult.ok(record)

    async def _mutate(
        self, record_id: Any, call: Callable[[], Awaitable[RecordT]]
    ) -> ActionResult[RecordT]:
        ticket = self._begin(record_id)
        self.error = None
        try:
            record = await self._run(call())
        except ApiError as e:
            if not self._settle(record_id, ticket):
                return ActionResult.discarded()
            return self._fail(e)
        if not self._settle(record_id, ticket):
            logger.debug(f"{type(self).__name__} dropped stale response for {record_id}")
            return ActionResult.discarded(record)
        self.replace(record)
        return ActionResult.ok(record)

    async def update(self, record_id: Any, data: Mapping[str, Any]) -> ActionResult[RecordT]:
        return await self._mutate(record_id, lambda: self.client.update(record_id, dict(data)))

    async def toggle_status(self, record_id: Any, is_active: bool) -> ActionResult[RecordT]:
        return await self._mutate(
            record_id, lambda: self.client.toggle_status(record_id, is_active)
        )

    async def delete(self, record_id: Any) -> ActionResult[None]:
        ticket = self._begin(record_id)
        self.error = None
        try:
            await self._run(self.client.delete(record_id))
        except ApiError as e:
            if not self._settle(record_id, ticket):
                return ActionResult.discarded()
            return self._fail(e)
        self._settle(record_id, ticket)
        self.remove(record_id)
        return ActionResult.ok()

    # -- filters and paging --------------------------------------------------

    def set_filter(self, name: str, value: Any) -> None:
        """Set one server-side filter; blank values remove it. Resets to page 1."""
        if value is None or value == "":
            self.filters.pop(name, None)
        else:
            self.filters[name] = value
        self.pagination.page = 1

    def clear_filters(self) -> None:
        self.filters = {}
        self.pagination.page = 1

    async def change_page(self, page: int) -> ActionResult[list[RecordT]]:
        self.pagination.page = max(1, page)
        return await self.fetch_all()

    async def change_page_size(self, page_size: int) -> ActionResult[list[RecordT]]:
        self.pagination.page_size = max(1, page_size)
        self.pagination.page = 1
        return await self.fetch_all()

    async def retry(self) -> ActionResult[Any] | None:
        """Re-run the last failed fetch, if any."""
        if self.last_failed is None:
            return None
        return await self.last_failed()


def percentage(part: int, whole: int) -> int:
    """Rounded integer percentage, 0 for an empty whole."""
    return int(part * 100 / whole + 0.5) if whole else 0
