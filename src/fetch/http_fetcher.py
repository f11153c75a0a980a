# src/fetch/http_fetcher.py — v1
"""httpx-based page fetcher.

Returns the full document: <script type="application/ld+json"> blocks
must survive for the structured-data strategy.
"""

from __future__ import annotations

import logging

import httpx

from recipextract.core.errors import TransportFailure
from recipextract.fetch.base_fetcher import BaseFetcher

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class HttpFetcher(BaseFetcher):
    """Follows redirects; non-2xx responses raise TransportFailure."""

    def __init__(
        self,
        timeout_s: float = 20.0,
        user_agent: str = DEFAULT_USER_AGENT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=timeout_s,
            follow_redirects=True,
            headers={"User-Agent": user_agent},
        )

    async def fetch(self, url: str) -> str:
        logger.debug("Fetching HTML from URL: %s", url)
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("Failed to fetch URL (HTTP %d): %s", status, url)
            raise TransportFailure(
                f"Failed to fetch {url}: HTTP {status}", status_code=status
            ) from e
        except httpx.HTTPError as e:
            logger.warning("Failed to fetch URL %s: %s", url, e)
            raise TransportFailure(f"Failed to fetch {url}: {e!r}") from e

        html = response.text
        logger.debug("Fetched %s, length: %d chars", url, len(html))
        return html

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
