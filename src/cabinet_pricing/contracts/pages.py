"""Normalized list responses.

List endpoints answer either with a bare JSON array or with a paginated
envelope ``{"results": [...], "count": N, "next": url, "previous": url}``.
Both shapes become a ``Page`` at the API-client boundary so nothing
downstream has to tell them apart.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class UnexpectedPayloadError(ValueError):
    """Raised when a list endpoint returns neither an array nor an envelope."""


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of records.

    Attributes:
        items: Records on this page.
        total: Total record count reported by the server (or len(items)
            for a bare array).
        has_next: True when the server reported a following page.
        has_previous: True when the server reported a preceding page.
        paginated: True when the response used the envelope shape.
    """

    items: list[T] = field(default_factory=list)
    total: int = 0
    has_next: bool = False
    has_previous: bool = False
    paginated: bool = False

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @classmethod
    def from_payload(cls, payload: Any, parse: Callable[[Any], T]) -> "Page[T]":
        """Build a page from either response shape.

        Args:
            payload: Decoded JSON body.
            parse: Converts one raw item into a record.

        Raises:
            UnexpectedPayloadError: If the body is neither shape.
        """
        if isinstance(payload, list):
            items = [parse(raw) for raw in payload]
            return cls(items=items, total=len(items))

        if isinstance(payload, dict) and isinstance(payload.get("results"), list):
            items = [parse(raw) for raw in payload["results"]]
            count = payload.get("count")
            return cls(
                items=items,
                total=count if isinstance(count, int) else len(items),
                has_next=bool(payload.get("next")),
                has_previous=bool(payload.get("previous")),
                paginated=True,
            )

        raise UnexpectedPayloadError(
            f"Expected a list or a paginated envelope, got {type(payload).__name__}"
        )


def unwrap_results(payload: Any) -> list[Any]:
    """Return the raw items of either response shape, or [] for anything else."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("results"), list):
        return payload["results"]
    return []
