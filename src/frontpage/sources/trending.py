"""GitHub trending source adapter — scrapes the trending repositories page.

The page has no API, so entries are cut out of the raw HTML by position:
each repository heading starts an entry and the next ``</article>`` after it
ends the entry. Nested or missing article tags upstream will misattribute
fields; keep this behind ``parse_trending`` so a structural parser can replace
it.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

from ..transport import BROWSER_USER_AGENT, DEFAULT_TIMEOUT_SECONDS, fetch_text
from .base import DEFAULT_MAX_ITEMS, FeedItem, FetchResult

logger = logging.getLogger(__name__)

GITHUB_URL = "https://github.com"
TRENDING_URL = f"{GITHUB_URL}/trending"

_REPO_HEADING_RE = re.compile(r'<h2[^>]*>\s*<a[^>]*href="/([^"]+)"[^>]*>')
_DESCRIPTION_RE = re.compile(r'<p[^>]*class="[^"]*col-9[^"]*"[^>]*>(.*?)</p>', re.DOTALL)
_STARS_RE = re.compile(r"octicon octicon-star[\s\S]*?</svg>\s*([\d,]+)")
_LANGUAGE_RE = re.compile(r'itemprop="programmingLanguage"[^>]*>([^<]+)')
_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")

ARTICLE_END = "</article>"


def since_for_range(time_range: str | None) -> str:
    """``day`` maps to daily; every other selector gets the weekly page."""
    return "daily" if time_range == "day" else "weekly"


class TrendingAdapter:
    name = "trending"

    def __init__(self, config: dict[str, Any] | None = None):
        cfg = config or {}
        self.url: str = cfg.get("url", TRENDING_URL)
        self.max_items: int = cfg.get("max_items", DEFAULT_MAX_ITEMS)
        self.timeout: float = cfg.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)

    async def fetch_items(self, time_range: str = "week", **params: Any) -> FetchResult:
        """Fetch trending repositories for the given window (``day`` or ``week``)."""
        try:
            page = await fetch_text(
                self.url,
                params={"since": since_for_range(time_range)},
                headers={"User-Agent": BROWSER_USER_AGENT},
                timeout=self.timeout,
            )
            items = parse_trending(page, self.max_items)
        except Exception as e:
            logger.error("GitHub trending error: %s", e)
            return FetchResult.failure(self.name, e)

        logger.info("GitHub trending (%s): fetched %d items", time_range, len(items))
        return FetchResult(source=self.name, items=tuple(items))


def parse_trending(page: str, max_items: int = DEFAULT_MAX_ITEMS) -> list[FeedItem]:
    items = []
    for match in _REPO_HEADING_RE.finditer(page):
        if len(items) >= max_items:
            break

        name = match.group(1)
        start = match.start()
        end = page.find(ARTICLE_END, start)
        article = page[start:end] if end != -1 else page[start:]

        items.append(
            FeedItem(
                title=name,
                url=f"{GITHUB_URL}/{name}",
                description=_description(article),
                stars=_stars(article),
                language=_language(article),
            )
        )
    return items


def _description(article: str) -> str:
    match = _DESCRIPTION_RE.search(article)
    if not match:
        return ""
    text = _TAG_RE.sub("", match.group(1))
    return _WHITESPACE_RE.sub(" ", text).strip()


def _stars(article: str) -> int:
    match = _STARS_RE.search(article)
    if not match:
        return 0
    digits = match.group(1).replace(",", "")
    return int(digits) if digits else 0


def _language(article: str) -> Optional[str]:
    match = _LANGUAGE_RE.search(article)
    if not match:
        return None
    return match.group(1).strip() or None
