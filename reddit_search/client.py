"""HTTP transport for Reddit's public JSON endpoints."""
from __future__ import annotations

import logging
import math
import os
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, TypeVar
from urllib.parse import urlsplit, urlunsplit

import requests
from requests.structures import CaseInsensitiveDict

from .errors import (
    DecodeError,
    HTTPStatusError,
    RateLimitError,
    RequestBuildError,
    TransportError,
)
from .search import SearchService

logger = logging.getLogger(__name__)

BASE_URL = "https://www.reddit.com"
DEFAULT_USER_AGENT = "python:reddit-search:0.1.0 (+https://www.reddit.com/dev/api/#section_search)"
DEFAULT_TIMEOUT = 30.0
ALLOWED_METHODS = {"GET", "POST", "PUT", "PATCH", "DELETE"}

T = TypeVar("T")


@dataclass(slots=True)
class ClientConfig:
    """Settings for the HTTP transport."""

    base_url: str = BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    retries: int = 3
    backoff: float = 1.0
    verify: bool = True
    raw_json: bool = True

    def __post_init__(self) -> None:
        self.base_url = str(self.base_url).strip().rstrip("/")
        parsed = urlsplit(self.base_url)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise ValueError(f"Base URL must be an absolute http(s) URL: {self.base_url!r}")
        if not str(self.user_agent).strip():
            raise ValueError("A User-Agent is required")
        self.timeout = float(self.timeout)
        if self.timeout <= 0:
            raise ValueError(f"Timeout must be positive: {self.timeout}")
        self.retries = max(1, int(self.retries))
        self.backoff = max(0.0, float(self.backoff))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> "ClientConfig":
        """Build a config from ``REDDIT_SEARCH_*`` variables; keyword overrides win."""
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        if env.get("REDDIT_SEARCH_BASE_URL"):
            values["base_url"] = env["REDDIT_SEARCH_BASE_URL"]
        if env.get("REDDIT_SEARCH_USER_AGENT"):
            values["user_agent"] = env["REDDIT_SEARCH_USER_AGENT"]
        if env.get("REDDIT_SEARCH_TIMEOUT"):
            try:
                values["timeout"] = float(env["REDDIT_SEARCH_TIMEOUT"])
            except ValueError as exc:
                raise ValueError(
                    f"REDDIT_SEARCH_TIMEOUT must be a number: {env['REDDIT_SEARCH_TIMEOUT']!r}"
                ) from exc
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)


def _header_number(headers: Mapping[str, str], name: str) -> float | None:
    raw = headers.get(name)
    if raw is None:
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


@dataclass(slots=True)
class Rate:
    """Rate limit state reported by Reddit in the ``X-Ratelimit-*`` headers."""

    used: int | None = None
    remaining: float | None = None
    reset_seconds: int | None = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "Rate":
        used = _header_number(headers, "X-Ratelimit-Used")
        remaining = _header_number(headers, "X-Ratelimit-Remaining")
        reset = _header_number(headers, "X-Ratelimit-Reset")
        return cls(
            used=int(used) if used is not None else None,
            remaining=remaining,
            reset_seconds=int(reset) if reset is not None else None,
        )


@dataclass(slots=True)
class Response:
    """Metadata of a completed HTTP exchange."""

    status_code: int
    url: str
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    rate: Rate = field(default_factory=Rate)

    @classmethod
    def from_http(cls, http_response: requests.Response) -> "Response":
        headers = CaseInsensitiveDict(http_response.headers or {})
        return cls(
            status_code=http_response.status_code,
            url=str(http_response.url or ""),
            headers=headers,
            rate=Rate.from_headers(headers),
        )


def build_session(user_agent: str, verify: bool) -> requests.Session:
    session = requests.Session()
    session.headers.update(
        {
            "User-Agent": user_agent,
            "Accept": "application/json",
            "Accept-Language": "en-US,en;q=0.8",
        }
    )
    session.verify = verify
    return session


class Client:
    """Builds and sends requests relative to ``config.base_url``.

    ``client.search`` exposes the search operations.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        self.session = session or build_session(self.config.user_agent, self.config.verify)
        self.search = SearchService(self)

    def new_request(self, method: str, path: str, body: Any = None) -> requests.PreparedRequest:
        """Prepare a request for ``path``, a relative path that may carry a query string."""
        method = str(method or "").upper()
        if method not in ALLOWED_METHODS:
            raise RequestBuildError(f"Unsupported HTTP method: {method!r}")
        if not path or not path.strip():
            raise RequestBuildError("Request path must not be empty")

        parts = urlsplit(path.strip())
        if parts.scheme or parts.netloc:
            raise RequestBuildError(f"Request path must be relative to the base URL: {path!r}")
        resource = parts.path.strip("/")
        if not resource:
            raise RequestBuildError(f"Request path has no resource: {path!r}")
        if not resource.endswith(".json"):
            resource += ".json"

        query = parts.query
        if self.config.raw_json:
            query = f"{query}&raw_json=1" if query else "raw_json=1"

        base = urlsplit(self.config.base_url)
        base_path = base.path.rstrip("/")
        url = urlunsplit((base.scheme, base.netloc, f"{base_path}/{resource}", query, ""))

        try:
            return self.session.prepare_request(
                requests.Request(method, url, json=body if body is not None else None)
            )
        except (requests.exceptions.RequestException, ValueError) as exc:
            raise RequestBuildError(f"Could not build {method} request for {path!r}: {exc}") from exc

    def do(
        self,
        request: requests.PreparedRequest,
        decoder: Callable[[Any], T] | None = None,
    ) -> tuple[T | Any, Response]:
        """Send ``request`` and decode the JSON body.

        Network errors and 5xx responses are retried with exponential backoff
        up to ``config.retries`` attempts. Every raised error carries the
        response metadata when a response was received.
        """
        retries = self.config.retries
        attempt = 0
        while True:
            attempt += 1
            logger.debug("%s %s (attempt %d/%d)", request.method, request.url, attempt, retries)
            try:
                http_response = self.session.send(request, timeout=self.config.timeout)
            except requests.exceptions.RequestException as exc:
                if attempt >= retries:
                    raise TransportError(f"Request to {request.url} failed: {exc}") from exc
                self._backoff(attempt, request.url, exc)
                continue

            response = Response.from_http(http_response)
            status = http_response.status_code

            if status == 429:
                raise RateLimitError(
                    f"HTTP 429 Too Many Requests from {request.url}",
                    status_code=status,
                    response=response,
                )
            if status >= 500 and attempt < retries:
                self._backoff(attempt, request.url, f"HTTP {status}")
                continue
            if status >= 400:
                raise HTTPStatusError(
                    f"HTTP {status} from {request.url}",
                    status_code=status,
                    response=response,
                )

            try:
                payload = http_response.json()
            except ValueError as exc:
                raise DecodeError(
                    f"Failed to decode JSON from {request.url}: {exc}", response=response
                ) from exc

            if decoder is None:
                return payload, response
            try:
                return decoder(payload), response
            except ValueError as exc:
                raise DecodeError(
                    f"Unexpected payload from {request.url}: {exc}", response=response
                ) from exc

    def _backoff(self, attempt: int, url: str | None, reason: Any) -> None:
        wait_time = self.config.backoff * (2 ** (attempt - 1))
        logger.warning(
            "Request error fetching %s (attempt %d/%d): %s; retrying in %.1f seconds",
            url,
            attempt,
            self.config.retries,
            reason,
            wait_time,
        )
        time.sleep(wait_time)


__all__ = [
    "BASE_URL",
    "DEFAULT_USER_AGENT",
    "Client",
    "ClientConfig",
    "Rate",
    "Response",
    "build_session",
]
