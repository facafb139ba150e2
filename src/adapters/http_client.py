"""httpx wrapper.

Why a wrapper:
- Standardizes timeouts, headers and the optional relay prefix.
- Easy to test: an `httpx.AsyncClient` with a mock transport can be injected.
"""

from __future__ import annotations

import logging

import httpx

from core.config import AppSettings
from core.domain.errors import TransportError
from core.interfaces.fetcher import FetchResponse, PageFetcher

logger = logging.getLogger(__name__)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with sane defaults.

    Why a builder:
    - Every request to the vendor behaves the same (timeouts, headers).
    - Tests can pass `transport=httpx.MockTransport(...)`.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "text/html,application/json;q=0.9,*/*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def apply_relay(url: str, relay_prefix: str | None) -> str:
    """Prefix `url` with a relay such as `https://corsproxy.io/?`."""

    if not relay_prefix:
        return url
    return relay_prefix + url


class HttpxFetcher(PageFetcher):
    """`PageFetcher` backed by httpx.

    With no `client`, a fresh client is opened per request.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client

    async def fetch(self, url: str) -> FetchResponse:
        target = apply_relay(url, self._settings.relay_prefix)
        logger.debug("GET %s", target)
        try:
            if self._client is not None:
                resp = await self._client.get(target)
            else:
                async with build_async_client(self._settings) as client:
                    resp = await client.get(target)
        except httpx.HTTPError as exc:
            raise TransportError(f"GET {url} failed: {exc}") from exc
        logger.debug("GET %s -> HTTP %d", target, resp.status_code)
        return FetchResponse(status=resp.status_code, body=resp.text)
