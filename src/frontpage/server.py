"""frontpage HTTP server — exposes the feed, description and suggestion APIs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from aiohttp import web

from .aggregator import DEFAULT_TIME_RANGE, AggregateFeedResult, FeedAggregator
from .cache import DEFAULT_MAX_ENTRIES, TTLCache
from .config import (
    get_cache_config,
    get_descriptions_config,
    get_logging_config,
    get_server_config,
    get_source_config,
    get_suggestions_config,
    load_config,
)
from .metadata import DESCRIPTION_TIMEOUT_SECONDS, DescriptionResolver
from .sources import AnnouncementFeedAdapter, LobstersAdapter, TrendingAdapter
from .suggestions import SuggestionResolver

logger = logging.getLogger(__name__)

FEED_CACHE_CONTROL = "s-maxage=900, stale-while-revalidate"
DEFAULT_STATIC_DIR = "public"

AGGREGATOR_KEY = web.AppKey("aggregator", FeedAggregator)
DESCRIPTIONS_KEY = web.AppKey("descriptions", DescriptionResolver)
SUGGESTIONS_KEY = web.AppKey("suggestions", SuggestionResolver)


def build_aggregator(config: dict[str, Any]) -> FeedAggregator:
    cache_cfg = get_cache_config(config)
    cache: TTLCache[AggregateFeedResult] = TTLCache(
        ttl=cache_cfg.get("feed_ttl_seconds", 30 * 60),
        max_entries=cache_cfg.get("max_entries", DEFAULT_MAX_ENTRIES),
        name="feed-cache",
    )
    return FeedAggregator(
        cache,
        lobsters=LobstersAdapter(config=get_source_config(config, "lobsters")),
        trending=TrendingAdapter(config=get_source_config(config, "trending")),
        announcements=AnnouncementFeedAdapter(config=get_source_config(config, "producthunt")),
    )


def build_description_resolver(config: dict[str, Any]) -> DescriptionResolver:
    cache_cfg = get_cache_config(config)
    cache: TTLCache[str] = TTLCache(
        ttl=cache_cfg.get("description_ttl_seconds", 60 * 60),
        max_entries=cache_cfg.get("max_entries", DEFAULT_MAX_ENTRIES),
        name="description-cache",
    )
    timeout = get_descriptions_config(config).get("timeout_seconds", DESCRIPTION_TIMEOUT_SECONDS)
    return DescriptionResolver(cache, timeout=timeout)


def build_suggestion_resolver(config: dict[str, Any]) -> SuggestionResolver:
    cache_cfg = get_cache_config(config)
    cache: TTLCache[list[str]] = TTLCache(
        ttl=cache_cfg.get("suggestion_ttl_seconds", 5 * 60),
        max_entries=cache_cfg.get("max_entries", DEFAULT_MAX_ENTRIES),
        name="suggestion-cache",
    )
    return SuggestionResolver(cache, config=get_suggestions_config(config))


async def handle_feed(request: web.Request) -> web.Response:
    time_range = request.query.get("github_range") or DEFAULT_TIME_RANGE
    try:
        result = await request.app[AGGREGATOR_KEY].fetch_all(time_range)
    except Exception:
        logger.exception("Feed fetch error")
        return web.json_response({"error": "Failed to fetch feeds"}, status=500)

    return web.json_response(
        result.to_dict(), headers={"Cache-Control": FEED_CACHE_CONTROL}
    )


async def handle_descriptions(request: web.Request) -> web.Response:
    urls = request.query.getall("urls", [])
    if not urls or urls == [""]:
        return web.json_response({"error": "Missing urls parameter"}, status=400)

    results = await request.app[DESCRIPTIONS_KEY].resolve_all(urls)
    return web.json_response({"descriptions": [r.to_dict() for r in results]})


async def handle_suggestions(request: web.Request) -> web.Response:
    query = request.query.get("q", "")
    engine = request.query.get("engine")
    try:
        suggestions = await request.app[SUGGESTIONS_KEY].suggest(query, engine)
    except Exception:
        logger.exception("Suggestions fetch error")
        suggestions = []
    return web.json_response({"suggestions": suggestions})


def _add_static_routes(app: web.Application, static_dir: str | None) -> None:
    root = Path(static_dir).expanduser().resolve()
    if not root.is_dir():
        logger.warning("Static directory %s not found, not serving files", root)
        return

    index = root / "index.html"

    async def handle_index(request: web.Request) -> web.StreamResponse:
        if not index.is_file():
            raise web.HTTPNotFound()
        return web.FileResponse(index)

    app.router.add_get("/", handle_index)
    app.router.add_static("/", root)


def create_app(
    config: dict[str, Any] | None = None,
    *,
    aggregator: FeedAggregator | None = None,
    descriptions: DescriptionResolver | None = None,
    suggestions: SuggestionResolver | None = None,
) -> web.Application:
    """Build the web app. Components are created from config unless injected."""
    if config is None:
        config = load_config()

    if aggregator is None:
        aggregator = build_aggregator(config)
    if descriptions is None:
        descriptions = build_description_resolver(config)
    if suggestions is None:
        suggestions = build_suggestion_resolver(config)

    app = web.Application()
    app[AGGREGATOR_KEY] = aggregator
    app[DESCRIPTIONS_KEY] = descriptions
    app[SUGGESTIONS_KEY] = suggestions

    app.router.add_get("/api/feed", handle_feed)
    app.router.add_get("/api/descriptions", handle_descriptions)
    app.router.add_get("/api/suggestions", handle_suggestions)
    _add_static_routes(app, get_server_config(config).get("static_dir") or DEFAULT_STATIC_DIR)
    return app


def main() -> None:
    """CLI entry point — serves the app until interrupted."""
    config = load_config()
    logging.basicConfig(
        level=get_logging_config(config).get("level", "INFO"),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    server_cfg = get_server_config(config)
    host = server_cfg.get("host", "0.0.0.0")
    port = server_cfg.get("port", 3000)

    logger.info("Homepage server running at http://localhost:%d", port)
    web.run_app(create_app(config), host=host, port=port, print=None)


if __name__ == "__main__":
    main()
