"""Aggregator — runs all source adapters concurrently and caches the merged feed."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any

from .cache import TTLCache
from .sources.base import FeedItem, FetchResult, SourceAdapter

logger = logging.getLogger(__name__)

DEFAULT_TIME_RANGE = "week"


@dataclass(frozen=True)
class AggregateFeedResult:
    lobsters: tuple[FeedItem, ...]
    trending: tuple[FeedItem, ...]
    announcements: tuple[FeedItem, ...]
    timestamp: int  # epoch milliseconds

    def to_dict(self) -> dict[str, Any]:
        """Wire form served by ``/api/feed``."""
        return {
            "lobsters": [item.to_dict() for item in self.lobsters],
            "github": [item.to_dict() for item in self.trending],
            "productHunt": [item.to_dict() for item in self.announcements],
            "timestamp": self.timestamp,
        }


class FeedAggregator:
    """Fans out to the three feed adapters and memoizes the result per time range."""

    def __init__(
        self,
        cache: TTLCache[AggregateFeedResult],
        lobsters: SourceAdapter,
        trending: SourceAdapter,
        announcements: SourceAdapter,
    ):
        self.cache = cache
        self.lobsters = lobsters
        self.trending = trending
        self.announcements = announcements

    async def fetch_all(self, time_range: str = DEFAULT_TIME_RANGE) -> AggregateFeedResult:
        """Merged feed for ``time_range``; served from cache while fresh."""
        cached = self.cache.get(time_range)
        if cached is not None:
            return cached

        adapters = [self.lobsters, self.trending, self.announcements]
        results = await asyncio.gather(
            self.lobsters.fetch_items(),
            self.trending.fetch_items(time_range=time_range),
            self.announcements.fetch_items(),
            return_exceptions=True,
        )

        lobsters, trending, announcements = (
            self._items(adapter, result) for adapter, result in zip(adapters, results)
        )
        aggregate = AggregateFeedResult(
            lobsters=lobsters,
            trending=trending,
            announcements=announcements,
            timestamp=int(time.time() * 1000),
        )
        self.cache.set(time_range, aggregate)
        logger.info(
            "Feed refreshed (%s): %d lobsters, %d trending, %d announcements",
            time_range,
            len(lobsters),
            len(trending),
            len(announcements),
        )
        return aggregate

    @staticmethod
    def _items(adapter: SourceAdapter, result: Any) -> tuple[FeedItem, ...]:
        if isinstance(result, BaseException):
            logger.error("Adapter %s raised: %s", adapter.name, result)
            return ()
        if isinstance(result, FetchResult):
            if not result.ok:
                logger.warning("Adapter %s returned no items: %s", adapter.name, result.error)
            return result.items
        logger.error("Adapter %s returned %r instead of a FetchResult", adapter.name, result)
        return ()
