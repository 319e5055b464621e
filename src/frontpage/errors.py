"""Exception hierarchy for upstream fetch and parse failures."""

from __future__ import annotations


class FrontpageError(Exception):
    """Base class for all frontpage errors."""


class UpstreamError(FrontpageError):
    """An upstream service could not supply usable data."""


class FetchError(UpstreamError):
    """Upstream was unreachable, timed out, or answered with a non-2xx status."""

    def __init__(self, url: str, reason: str, status: int | None = None):
        self.url = url
        self.reason = reason
        self.status = status
        super().__init__(f"{url}: {reason}")


class ParseError(UpstreamError):
    """Upstream answered but the payload did not have the expected shape."""
