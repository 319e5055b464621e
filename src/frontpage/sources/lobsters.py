"""Lobsters source adapter — reads the hottest stories JSON API."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urljoin

from ..errors import ParseError
from ..transport import DEFAULT_TIMEOUT_SECONDS, fetch_json
from .base import DEFAULT_MAX_ITEMS, FeedItem, FetchResult

logger = logging.getLogger(__name__)

LOBSTERS_BASE_URL = "https://lobste.rs"
LOBSTERS_HOTTEST_URL = f"{LOBSTERS_BASE_URL}/hottest.json"


class LobstersAdapter:
    name = "lobsters"

    def __init__(self, config: dict[str, Any] | None = None):
        cfg = config or {}
        self.url: str = cfg.get("url", LOBSTERS_HOTTEST_URL)
        self.max_items: int = cfg.get("max_items", DEFAULT_MAX_ITEMS)
        self.timeout: float = cfg.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)

    async def fetch_items(self, **params: Any) -> FetchResult:
        """Fetch the hottest stories. No per-story page fetch, to keep latency low."""
        try:
            payload = await fetch_json(self.url, timeout=self.timeout)
            items = parse_stories(payload, self.max_items)
        except Exception as e:
            logger.error("Lobsters fetch error: %s", e)
            return FetchResult.failure(self.name, e)

        logger.info("Lobsters: fetched %d items", len(items))
        return FetchResult(source=self.name, items=tuple(items))


def parse_stories(payload: Any, max_items: int = DEFAULT_MAX_ITEMS) -> list[FeedItem]:
    """Map hottest.json records onto feed items."""
    if not isinstance(payload, list):
        raise ParseError(f"expected a list of stories, got {type(payload).__name__}")

    items = []
    for story in payload[:max_items]:
        if not isinstance(story, dict):
            raise ParseError(f"expected a story object, got {type(story).__name__}")

        url = story.get("url") or urljoin(LOBSTERS_BASE_URL, story.get("comments_url", ""))

        submitter = story.get("submitter_user")
        author = None
        if isinstance(submitter, dict):
            author = submitter.get("username")
        elif isinstance(submitter, str):
            author = submitter

        tags = story.get("tags")
        items.append(
            FeedItem(
                title=story.get("title", ""),
                url=url,
                description=story.get("description_plain") or "",
                score=story.get("score"),
                comment_count=story.get("comment_count"),
                author=author,
                tags=tuple(tags) if isinstance(tags, list) else None,
            )
        )
    return items
