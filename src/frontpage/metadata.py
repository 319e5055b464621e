"""Page description lookup — pulls a summary out of a page's meta tags."""

from __future__ import annotations

import asyncio
import html
import logging
import re
from dataclasses import asdict, dataclass
from typing import Any

from .cache import TTLCache
from .transport import BROWSER_USER_AGENT, fetch_text

logger = logging.getLogger(__name__)

DESCRIPTION_TIMEOUT_SECONDS = 5.0

# The value cannot contain its own quote character, so a match never spans tags.
_CONTENT = r"""content=(?:"([^"]+)"|'([^']+)')"""

# Tried in order; the first pattern that matches wins.
_DESCRIPTION_PATTERNS = [
    re.compile(
        r"""<meta[^>]*property=["']og:description["'][^>]*""" + _CONTENT,
        re.IGNORECASE,
    ),
    re.compile(
        r"""<meta[^>]*name=["']description["'][^>]*""" + _CONTENT,
        re.IGNORECASE,
    ),
    re.compile(
        r"""<meta[^>]*""" + _CONTENT + r"""[^>]*name=["']description["']""",
        re.IGNORECASE,
    ),
]


@dataclass(frozen=True)
class DescriptionResult:
    url: str
    description: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def extract_description(page: str | None) -> str:
    """Return the best description found in raw HTML, or "" if there is none.

    Open Graph description beats the standard description tag, and the
    standard tag is accepted with its attributes in either order.
    """
    if not page:
        return ""
    for pattern in _DESCRIPTION_PATTERNS:
        match = pattern.search(page)
        if match:
            value = match.group(1) or match.group(2)
            description = html.unescape(value).strip()
            if description:
                return description
    return ""


class DescriptionResolver:
    """Fetches pages and resolves their descriptions, memoized per URL."""

    def __init__(
        self,
        cache: TTLCache[str],
        timeout: float = DESCRIPTION_TIMEOUT_SECONDS,
    ):
        self.cache = cache
        self.timeout = timeout

    @staticmethod
    def _cache_key(url: str) -> str:
        return url.strip().lower()

    async def fetch_description(self, url: str) -> str:
        """Description for a single URL; "" whenever the page can't be read."""
        key = self._cache_key(url)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        try:
            page = await fetch_text(
                url,
                headers={"User-Agent": BROWSER_USER_AGENT},
                timeout=self.timeout,
            )
        except Exception as e:
            logger.debug("Description fetch failed for %s: %s", url, e)
            return ""

        description = extract_description(page)
        if description:
            self.cache.set(key, description)
        return description

    async def resolve_all(self, urls: list[str]) -> list[DescriptionResult]:
        """Resolve every URL concurrently, preserving input order."""
        descriptions = await asyncio.gather(
            *(self.fetch_description(url) for url in urls)
        )
        return [
            DescriptionResult(url=url, description=description)
            for url, description in zip(urls, descriptions)
        ]
