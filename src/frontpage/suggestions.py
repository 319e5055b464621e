"""Search autocomplete proxy for DuckDuckGo and Google."""

from __future__ import annotations

import logging
from typing import Any

from .cache import TTLCache
from .transport import DEFAULT_TIMEOUT_SECONDS, DESKTOP_USER_AGENT, fetch_json

logger = logging.getLogger(__name__)

DDG_AUTOCOMPLETE_URL = "https://ac.duckduckgo.com/ac/"
GOOGLE_AUTOCOMPLETE_URL = "https://suggestqueries.google.com/complete/search"

# engine -> (endpoint, extra query params); the query goes in ``q`` for both.
ENGINES: dict[str, tuple[str, dict[str, str]]] = {
    "ddg": (DDG_AUTOCOMPLETE_URL, {"type": "list"}),
    "google": (GOOGLE_AUTOCOMPLETE_URL, {"client": "firefox"}),
}
DEFAULT_ENGINE = "ddg"


def parse_suggestions(payload: Any) -> list[str]:
    """Both providers answer ``[echoed_query, [suggestion, ...]]``."""
    if isinstance(payload, list) and len(payload) > 1 and isinstance(payload[1], list):
        return [s for s in payload[1] if isinstance(s, str)]
    return []


class SuggestionResolver:
    def __init__(self, cache: TTLCache[list[str]], config: dict[str, Any] | None = None):
        cfg = config or {}
        self.cache = cache
        self.default_engine: str = cfg.get("default_engine", DEFAULT_ENGINE)
        self.min_query_length: int = cfg.get("min_query_length", 2)
        self.max_suggestions: int = cfg.get("max_suggestions", 8)
        self.timeout: float = cfg.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)

    def _engine(self, engine: str | None) -> str:
        if engine in ENGINES:
            return engine
        return self.default_engine if self.default_engine in ENGINES else DEFAULT_ENGINE

    async def suggest(self, query: str | None, engine: str | None = None) -> list[str]:
        """Autocomplete suggestions for ``query``; [] for short queries or failures."""
        if not query or len(query) < self.min_query_length:
            return []

        engine = self._engine(engine)
        cache_key = f"{engine}:{query.lower()}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return list(cached)

        url, params = ENGINES[engine]
        try:
            payload = await fetch_json(
                url,
                params={**params, "q": query},
                headers={"User-Agent": DESKTOP_USER_AGENT},
                timeout=self.timeout,
            )
        except Exception as e:
            logger.error("%s suggestions error: %s", engine, e)
            return []

        suggestions = parse_suggestions(payload)[: self.max_suggestions]
        self.cache.set(cache_key, suggestions)
        return list(suggestions)
