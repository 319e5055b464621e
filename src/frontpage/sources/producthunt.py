"""Product Hunt source adapter — scrapes the public Atom feed of launches."""

from __future__ import annotations

import logging
import re
from typing import Any

from ..transport import DEFAULT_TIMEOUT_SECONDS, fetch_text
from .base import DEFAULT_MAX_ITEMS, FeedItem, FetchResult

logger = logging.getLogger(__name__)

PRODUCTHUNT_FEED_URL = "https://www.producthunt.com/feed"

_ENTRY_RE = re.compile(r"<entry>([\s\S]*?)</entry>")
_TITLE_RE = re.compile(r"<title>(.*?)</title>")
_LINK_RE = re.compile(r'<link rel="alternate"[^>]*href="([^"]+)"')
_CONTENT_RE = re.compile(r"<content[^>]*>([\s\S]*?)</content>")
# The entry content is HTML escaped inside XML, so paragraphs are matched escaped.
_ESCAPED_PARAGRAPH_RE = re.compile(r"&lt;p&gt;\s*([\s\S]*?)\s*&lt;/p&gt;")

_ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
}
_ENTITY_RE = re.compile("|".join(re.escape(entity) for entity in _ENTITIES))


def unescape_entities(text: str) -> str:
    """Decode the five basic XML entities in one pass (no double decoding)."""
    return _ENTITY_RE.sub(lambda m: _ENTITIES[m.group(0)], text)


class AnnouncementFeedAdapter:
    name = "producthunt"

    def __init__(self, config: dict[str, Any] | None = None):
        cfg = config or {}
        self.url: str = cfg.get("url", PRODUCTHUNT_FEED_URL)
        self.max_items: int = cfg.get("max_items", DEFAULT_MAX_ITEMS)
        self.timeout: float = cfg.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)

    async def fetch_items(self, **params: Any) -> FetchResult:
        try:
            feed = await fetch_text(self.url, timeout=self.timeout)
            items = parse_feed(feed, self.max_items)
        except Exception as e:
            logger.error("Product Hunt fetch error: %s", e)
            return FetchResult.failure(self.name, e)

        logger.info("Product Hunt: fetched %d items", len(items))
        return FetchResult(source=self.name, items=tuple(items))


def parse_feed(feed: str, max_items: int = DEFAULT_MAX_ITEMS) -> list[FeedItem]:
    """Pull title, link and first paragraph out of each Atom entry."""
    items = []
    for entry_match in _ENTRY_RE.finditer(feed):
        entry = entry_match.group(1)
        title_match = _TITLE_RE.search(entry)
        link_match = _LINK_RE.search(entry)

        if title_match and link_match:
            items.append(
                FeedItem(
                    title=unescape_entities(title_match.group(1)),
                    url=link_match.group(1),
                    description=_first_paragraph(entry),
                )
            )

        if len(items) >= max_items:
            break
    return items


def _first_paragraph(entry: str) -> str:
    content_match = _CONTENT_RE.search(entry)
    if not content_match:
        return ""
    paragraph = _ESCAPED_PARAGRAPH_RE.search(content_match.group(1))
    if not paragraph:
        return ""
    return unescape_entities(paragraph.group(1).strip())
