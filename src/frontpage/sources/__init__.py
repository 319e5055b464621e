"""Source adapters for the aggregated feeds."""

from .base import FeedItem, FetchResult, SourceAdapter
from .lobsters import LobstersAdapter
from .producthunt import AnnouncementFeedAdapter
from .trending import TrendingAdapter

__all__ = [
    "AnnouncementFeedAdapter",
    "FeedItem",
    "FetchResult",
    "LobstersAdapter",
    "SourceAdapter",
    "TrendingAdapter",
]
