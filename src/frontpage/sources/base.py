"""Base protocol and data classes for source adapters."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Optional, Protocol, runtime_checkable

DEFAULT_MAX_ITEMS = 10

# Field names that differ between Python and the JSON served to the page.
_WIRE_NAMES = {"comment_count": "commentCount"}


@dataclass(frozen=True)
class FeedItem:
    """A normalized item from any source. Optional fields stay None when unknown."""

    title: str
    url: str
    description: str = ""
    score: Optional[int] = None
    comment_count: Optional[int] = None
    author: Optional[str] = None
    tags: Optional[tuple[str, ...]] = None
    stars: Optional[int] = None
    language: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict with unset optional fields left out."""
        data: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, tuple):
                value = list(value)
            data[_WIRE_NAMES.get(f.name, f.name)] = value
        return data


@dataclass(frozen=True)
class FetchResult:
    """What an adapter returns: its items, or no items and the reason why."""

    source: str
    items: tuple[FeedItem, ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, source: str, error: BaseException | str) -> FetchResult:
        return cls(source=source, items=(), error=str(error) or type(error).__name__)


@runtime_checkable
class SourceAdapter(Protocol):
    """Protocol for pluggable source adapters."""

    name: str

    async def fetch_items(self, **params: Any) -> FetchResult:
        """Fetch and normalize the source's current items.

        Must not raise: failures come back as ``FetchResult.failure``.
        """
        ...
