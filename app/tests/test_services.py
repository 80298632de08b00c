"""Service-layer tests against mocked upstream HTTP endpoints."""

from __future__ import annotations

import logging
from typing import Callable, List

import httpx
import pytest

from app.services import (
    DocumentFetcher,
    InclusionOptions,
    PatentContentService,
    PatentNotFoundError,
    PatentSearchService,
    PatentService,
    SerpApiClient,
    UpstreamRequestError,
    UpstreamTimeoutError,
)

API_KEY = "secret-key"
SERPAPI_HOST = "serpapi.test"
PATENTS_HOST = "patents.test"

Handler = Callable[[httpx.Request], httpx.Response]


def _services(handler: Handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    serpapi = SerpApiClient(API_KEY, base_url=f"https://{SERPAPI_HOST}", timeout=5, client=client)
    content = PatentContentService(
        DocumentFetcher(timeout=5, client=client), f"https://{PATENTS_HOST}"
    )
    return client, serpapi, content


def _router(details: dict, html: str, seen: List[httpx.Request]) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.host == SERPAPI_HOST:
            return httpx.Response(200, json=details)
        return httpx.Response(200, text=html)

    return handler


@pytest.mark.asyncio
async def test_fetch_patent_combines_metadata_and_document(sample_details, sample_html) -> None:
    seen: List[httpx.Request] = []
    client, serpapi, content = _services(_router(sample_details, sample_html, seen))
    options = InclusionOptions.from_include(["metadata", "claims", "description"])

    async with client:
        record = await PatentService(serpapi, content).fetch_patent(
            "https://patents.google.com/patent/US7654321B2/en", options
        )

    assert record.title == "Test Patent for Neural Networks"
    assert record.assignee == "Tech Corporation"
    assert record.claims[0] == "1. A method for testing comprising a step."
    assert record.description.startswith("This invention relates")
    assert record.abstract is None

    details_request = seen[0]
    assert details_request.url.params["engine"] == "google_patents_details"
    assert details_request.url.params["patent_id"] == "patent/US7654321B2/en"
    assert details_request.url.params["api_key"] == API_KEY
    assert str(seen[1].url) == "https://patents.google.com/patent/US7654321B2/en"


@pytest.mark.asyncio
async def test_fetch_patent_skips_document_when_not_needed(sample_details, sample_html) -> None:
    seen: List[httpx.Request] = []
    client, serpapi, content = _services(_router(sample_details, sample_html, seen))

    async with client:
        record = await PatentService(serpapi, content).fetch_patent(
            "US7654321B2", InclusionOptions.from_include(None)
        )

    assert [request.url.host for request in seen] == [SERPAPI_HOST]
    assert record.publication_number == "US7654321B2"


@pytest.mark.asyncio
async def test_fetch_patent_not_found_for_empty_details(sample_html) -> None:
    client, serpapi, content = _services(_router({}, sample_html, []))

    async with client:
        with pytest.raises(PatentNotFoundError) as excinfo:
            await PatentService(serpapi, content).fetch_patent(
                "US0000000A", InclusionOptions.from_include(None)
            )

    assert excinfo.value.patent_id == "patent/US0000000A/en"
    assert "No patent data found for patent ID: patent/US0000000A/en" in str(excinfo.value)


@pytest.mark.asyncio
async def test_fetch_patent_not_found_reports_upstream_error(sample_html) -> None:
    details = {"error": "Google Patents Details hasn't returned any results for this query."}
    client, serpapi, content = _services(_router(details, sample_html, []))

    async with client:
        with pytest.raises(PatentNotFoundError, match="hasn't returned any results"):
            await PatentService(serpapi, content).fetch_patent(
                "US0000000A", InclusionOptions.from_include(None)
            )


@pytest.mark.asyncio
async def test_fetch_patent_metadata_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client, serpapi, content = _services(handler)

    async with client:
        with pytest.raises(UpstreamTimeoutError):
            await PatentService(serpapi, content).fetch_patent(
                "US7654321B2", InclusionOptions.from_include(None)
            )


@pytest.mark.asyncio
async def test_fetch_patent_document_timeout_fails_request(sample_details) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == SERPAPI_HOST:
            return httpx.Response(200, json=sample_details)
        raise httpx.ReadTimeout("timed out", request=request)

    client, serpapi, content = _services(handler)

    async with client:
        with pytest.raises(UpstreamTimeoutError):
            await PatentService(serpapi, content).fetch_patent(
                "US7654321B2", InclusionOptions.from_include(["description"])
            )


@pytest.mark.asyncio
async def test_fetch_patent_document_error_degrades_to_upstream_claims(sample_details) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == SERPAPI_HOST:
            return httpx.Response(200, json=sample_details)
        return httpx.Response(404, text="missing")

    client, serpapi, content = _services(handler)

    async with client:
        record = await PatentService(serpapi, content).fetch_patent(
            "US7654321B2", InclusionOptions.from_include(["claims", "description"])
        )

    assert record.description is None
    assert record.claims == sample_details["claims"]


@pytest.mark.asyncio
async def test_search_without_content_is_passed_through() -> None:
    payload = {"organic_results": [{"patent_id": "patent/US1/en"}], "search_metadata": {"id": "x"}}
    seen: List[httpx.Request] = []
    client, serpapi, content = _services(_router(payload, "", seen))

    async with client:
        data = await PatentSearchService(serpapi, content).search(
            {"q": "widgets", "num": 10, "scholar": True, "page": None}
        )

    assert data == payload
    params = seen[0].url.params
    assert params["engine"] == "google_patents"
    assert params["q"] == "widgets"
    assert params["num"] == "10"
    assert params["scholar"] == "true"
    assert "page" not in params
    assert len(seen) == 1


@pytest.mark.asyncio
async def test_search_content_failures_are_isolated(sample_html) -> None:
    payload = {
        "organic_results": [
            {"patent_link": f"https://{PATENTS_HOST}/patent/US1A/en"},
            {"patent_link": f"https://{PATENTS_HOST}/patent/US2A/en"},
            {"patent_link": f"https://{PATENTS_HOST}/patent/US3A/en"},
            {"title": "no reference"},
        ]
    }

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == SERPAPI_HOST:
            return httpx.Response(200, json=payload)
        if "US1A" in request.url.path:
            return httpx.Response(200, text=sample_html)
        if "US2A" in request.url.path:
            return httpx.Response(500, text="boom")
        raise httpx.ReadTimeout("timed out", request=request)

    client, serpapi, content = _services(handler)

    async with client:
        data = await PatentSearchService(serpapi, content).search({"q": "widgets"}, include_content=True)

    first, second, third, fourth = data["organic_results"]
    assert first["content_included"] is True
    assert len(first["claims"]) == 2
    assert first["description"].startswith("This invention")
    assert second == {"patent_link": f"https://{PATENTS_HOST}/patent/US2A/en", "content_included": False}
    assert third["content_included"] is False
    assert fourth["content_included"] is False


@pytest.mark.asyncio
async def test_serpapi_error_status_is_raised_with_code(caplog) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="upstream exploded")

    client, serpapi, _ = _services(handler)

    async with client:
        with caplog.at_level(logging.ERROR, logger="app.services.serpapi"):
            with pytest.raises(UpstreamRequestError) as excinfo:
                await serpapi.get_patent_details("patent/US1A/en")

    assert excinfo.value.status_code == 500
    assert "upstream exploded" in str(excinfo.value)
    assert "upstream exploded" in caplog.text
    assert API_KEY not in caplog.text


@pytest.mark.asyncio
async def test_serpapi_transport_error_masks_key() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError(f"cannot reach {request.url}", request=request)

    client, serpapi, _ = _services(handler)

    async with client:
        with pytest.raises(UpstreamRequestError) as excinfo:
            await serpapi.search_patents({"q": "widgets"})

    assert excinfo.value.status_code is None
    assert API_KEY not in str(excinfo.value)
    assert "****" in str(excinfo.value)


@pytest.mark.asyncio
async def test_serpapi_invalid_json() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>not json</html>")

    client, serpapi, _ = _services(handler)

    async with client:
        with pytest.raises(UpstreamRequestError, match="not valid JSON"):
            await serpapi.get_patent_details("patent/US1A/en")


@pytest.mark.asyncio
async def test_content_service_resolves_identifier_to_page(sample_html) -> None:
    seen: List[httpx.Request] = []
    client, _, content = _services(_router({}, sample_html, seen))

    async with client:
        result = await content.fetch_content("patent/US1234567A/en", max_length=50)

    assert str(seen[0].url) == f"https://{PATENTS_HOST}/patent/US1234567A"
    assert result.claims == ["1. A method for testing comprising a step."]
    assert "[Content truncated" in result.description
    assert result.full_text.startswith("DESCRIPTION:\n")


@pytest.mark.asyncio
async def test_content_service_returns_empty_content_for_missing_page() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="not found")

    client, _, content = _services(handler)

    async with client:
        result = await content.fetch_content("US1234567A")

    assert result.model_dump(exclude_none=True) == {}


@pytest.mark.asyncio
async def test_content_service_honours_field_selection(sample_html) -> None:
    client, _, content = _services(_router({}, sample_html, []))

    async with client:
        result = await content.fetch_content(
            "US1234567A", include_claims=False, include_description=True, include_full_text=False
        )

    assert result.model_dump(exclude_none=True) == {"description": result.description}
    assert result.description.endswith("described here.")


@pytest.mark.asyncio
async def test_search_malformed_link_only_marks_that_result(sample_html) -> None:
    payload = {
        "organic_results": [
            {"patent_link": f"https://{PATENTS_HOST}/patent/US1A/en"},
            {"patent_link": f"https://{PATENTS_HOST}/patent/US2A\x00/en"},
        ]
    }
    client, serpapi, content = _services(_router(payload, sample_html, []))

    async with client:
        data = await PatentSearchService(serpapi, content).search({"q": "widgets"}, include_content=True)

    first, second = data["organic_results"]
    assert first["content_included"] is True
    assert second["content_included"] is False
    assert "claims" not in second


@pytest.mark.asyncio
async def test_document_fetcher_wraps_invalid_url() -> None:
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200)))

    async with client:
        with pytest.raises(UpstreamRequestError):
            await DocumentFetcher(client, timeout=5).fetch(f"https://{PATENTS_HOST}/patent/US2A\x00/en")
