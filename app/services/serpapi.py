"""Async client for the SerpApi Google Patents engines."""

from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

from app.services.errors import UpstreamRequestError, UpstreamTimeoutError

LOGGER = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://serpapi.com"
ERROR_BODY_LIMIT = 500


class SerpApiClient:
    """Search and patent-details queries against SerpApi."""

    def __init__(
        self,
        api_key: str,
        client: httpx.AsyncClient,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client

    async def search_patents(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Run a Google Patents search; unset parameters are not sent."""

        query = params.get("q") or ""
        request_params: Dict[str, Any] = {"engine": "google_patents", "q": query}
        for key, value in params.items():
            if key == "q" or value is None:
                continue
            request_params[key] = _format_param(value)
        return await self._get(request_params, subject=f'query "{query}"')

    async def get_patent_details(self, patent_id: str) -> Dict[str, Any]:
        """Fetch the details payload for a canonical ``patent/<number>/<lang>`` key."""

        request_params = {"engine": "google_patents_details", "patent_id": patent_id}
        return await self._get(request_params, subject=f'patent "{patent_id}"')

    async def _get(self, params: Dict[str, Any], subject: str) -> Dict[str, Any]:
        url = f"{self._base_url}/search.json"
        params = {**params, "api_key": self._api_key}
        LOGGER.info("Calling SerpApi %s for %s", params["engine"], subject)

        try:
            response = await self._client.get(url, params=params)
        except httpx.TimeoutException as exc:
            LOGGER.error("SerpApi request timed out after %ss for %s", self._timeout, subject)
            raise UpstreamTimeoutError(f"SerpApi ({subject})", self._timeout) from exc
        except httpx.HTTPError as exc:
            LOGGER.error("SerpApi request failed for %s: %s", subject, self._mask(str(exc)))
            raise UpstreamRequestError(
                f"An unexpected error occurred: {self._mask(str(exc))}"
            ) from exc

        if response.status_code >= 400:
            body = response.text[:ERROR_BODY_LIMIT]
            LOGGER.error(
                "SerpApi request %s failed with status %s %s. Response body: %s",
                self._mask(str(response.request.url)),
                response.status_code,
                response.reason_phrase,
                body,
            )
            raise UpstreamRequestError(
                f"SerpApi request failed: {response.reason_phrase}. Body: {body}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamRequestError("SerpApi response was not valid JSON.") from exc

        LOGGER.info("SerpApi request successful for %s", subject)
        return data if isinstance(data, dict) else {"results": data}

    def _mask(self, text: str) -> str:
        if not self._api_key:
            return text
        return text.replace(self._api_key, "****")


def _format_param(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
