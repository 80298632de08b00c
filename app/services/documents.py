"""Fetch raw patent document pages."""

from __future__ import annotations

import logging

import httpx

from app.services.errors import UpstreamRequestError, UpstreamTimeoutError

LOGGER = logging.getLogger(__name__)


class DocumentFetcher:
    """Download patent page markup by URL."""

    def __init__(self, client: httpx.AsyncClient, timeout: float = 30.0) -> None:
        self._client = client
        self._timeout = timeout

    async def fetch(self, url: str) -> str:
        """Return the page body, or raise on timeout, transport error, bad URL or HTTP status."""

        LOGGER.debug("Fetching patent document from %s", url)
        try:
            response = await self._client.get(url, follow_redirects=True)
        except httpx.TimeoutException as exc:
            LOGGER.warning("Patent document fetch timed out for %s", url)
            raise UpstreamTimeoutError(url, self._timeout) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise UpstreamRequestError(f"Error fetching patent document: {exc}") from exc

        if response.status_code >= 400:
            raise UpstreamRequestError(
                f"Failed to fetch patent document: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )
        return response.text
