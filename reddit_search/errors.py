"""Exception hierarchy for the reddit_search package."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .client import Response


class RedditSearchError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, message: str, *, response: Response | None = None) -> None:
        super().__init__(message)
        self.response = response


class RequestBuildError(RedditSearchError):
    """A request could not be constructed; nothing was sent."""


class TransportError(RedditSearchError):
    """The HTTP round-trip failed."""


class HTTPStatusError(TransportError):
    def __init__(self, message: str, *, status_code: int, response: Response | None = None) -> None:
        super().__init__(message, response=response)
        self.status_code = status_code


class RateLimitError(HTTPStatusError):
    """Reddit answered with HTTP 429."""


class DecodeError(TransportError):
    """The response body could not be decoded into a listing."""


class ListingDecodeError(ValueError):
    """Raised by the listing decoder for payloads that are not a listing."""


class ListingKindError(RedditSearchError):
    """A listing was projected into a collection of the wrong kind."""

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(f"Expected a {expected} listing but received a {actual} listing")
        self.expected = expected
        self.actual = actual


__all__ = [
    "DecodeError",
    "HTTPStatusError",
    "ListingDecodeError",
    "ListingKindError",
    "RateLimitError",
    "RedditSearchError",
    "RequestBuildError",
    "TransportError",
]
