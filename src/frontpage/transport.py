"""aiohttp GET helpers shared by the source adapters and resolvers."""

from __future__ import annotations

import asyncio
import json
from typing import Any

import aiohttp

from .errors import FetchError, ParseError

BROWSER_USER_AGENT = "Mozilla/5.0"
DESKTOP_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
DEFAULT_TIMEOUT_SECONDS = 10.0


async def fetch_text(
    url: str,
    params: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> str:
    """GET ``url`` and return the decoded body.

    Raises FetchError on timeout, connection failure or any non-2xx status.
    """
    client_timeout = aiohttp.ClientTimeout(total=timeout)
    try:
        async with aiohttp.ClientSession(timeout=client_timeout) as session:
            async with session.get(url, params=params, headers=headers) as resp:
                if not 200 <= resp.status < 300:
                    raise FetchError(url, f"HTTP {resp.status}", status=resp.status)
                return await resp.text(errors="replace")
    except asyncio.TimeoutError as e:
        raise FetchError(url, f"timed out after {timeout}s") from e
    except aiohttp.ClientError as e:
        raise FetchError(url, str(e) or type(e).__name__) from e


async def fetch_json(
    url: str,
    params: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Any:
    """GET ``url`` and decode the body as JSON regardless of its content type."""
    text = await fetch_text(url, params=params, headers=headers, timeout=timeout)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"{url}: invalid JSON ({e})") from e
