"""Shared API dependencies for FastAPI routes."""

from collections.abc import AsyncGenerator
from typing import Annotated

import httpx
from fastapi import Depends

from app.core.config import Settings, get_settings
from app.services import (
    ConfigurationError,
    DocumentFetcher,
    PatentContentService,
    PatentSearchService,
    PatentService,
    SerpApiClient,
)

AppSettings = Annotated[Settings, Depends(get_settings)]


async def get_http_client(settings: AppSettings) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Yield an HTTP client scoped to one request and close it afterwards."""

    async with httpx.AsyncClient(timeout=settings.request_timeout_seconds) as client:
        yield client


HttpClient = Annotated[httpx.AsyncClient, Depends(get_http_client)]


def get_serpapi_client(settings: AppSettings, client: HttpClient) -> SerpApiClient:
    if not settings.serpapi_api_key:
        raise ConfigurationError("SERPAPI_API_KEY environment variable is not set.")
    return SerpApiClient(
        api_key=settings.serpapi_api_key,
        base_url=settings.serpapi_base_url,
        timeout=settings.request_timeout_seconds,
        client=client,
    )


def get_content_service(settings: AppSettings, client: HttpClient) -> PatentContentService:
    fetcher = DocumentFetcher(timeout=settings.request_timeout_seconds, client=client)
    return PatentContentService(fetcher, settings.patents_base_url)


SerpApi = Annotated[SerpApiClient, Depends(get_serpapi_client)]
ContentService = Annotated[PatentContentService, Depends(get_content_service)]


def get_patent_service(
    settings: AppSettings, serpapi: SerpApi, content: ContentService
) -> PatentService:
    return PatentService(serpapi, content, language=settings.default_language)


def get_search_service(serpapi: SerpApi, content: ContentService) -> PatentSearchService:
    return PatentSearchService(serpapi, content)


Patents = Annotated[PatentService, Depends(get_patent_service)]
Search = Annotated[PatentSearchService, Depends(get_search_service)]
