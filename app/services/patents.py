"""Patent record retrieval and search orchestration."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict

from app.schemas.patent import PatentRecord
from app.services.content import PatentContentService
from app.services.errors import PatentNotFoundError, UpstreamTimeoutError
from app.services.formatter import InclusionOptions, format_record
from app.services.identifiers import DEFAULT_LANGUAGE, resolve_patent_id
from app.services.metadata import normalise_metadata
from app.services.serpapi import SerpApiClient

LOGGER = logging.getLogger(__name__)


class PatentService:
    """Fetch metadata and document content and format a :class:`PatentRecord`."""

    def __init__(
        self,
        serpapi: SerpApiClient,
        content: PatentContentService,
        language: str = DEFAULT_LANGUAGE,
    ) -> None:
        self._serpapi = serpapi
        self._content = content
        self._language = language

    async def fetch_patent(self, url_or_id: str, options: InclusionOptions) -> PatentRecord:
        patent_id = resolve_patent_id(url_or_id, self._language)
        LOGGER.debug("Fetching patent data for: %s", patent_id)

        details = await self._serpapi.get_patent_details(patent_id)
        metadata = normalise_metadata(details)
        if metadata.error or not metadata.has_identity:
            raise PatentNotFoundError(patent_id, metadata.error)

        sections = None
        if options.needs_document:
            sections = await self._content.fetch_sections(
                url_or_id,
                need_claims=options.include_claims,
                need_description=options.include_description,
                need_full_text=options.include_full_text,
            )

        return format_record(metadata, sections, options)


class PatentSearchService:
    """Pass-through search with optional per-result content retrieval."""

    def __init__(self, serpapi: SerpApiClient, content: PatentContentService) -> None:
        self._serpapi = serpapi
        self._content = content

    async def search(self, params: Dict[str, Any], include_content: bool = False) -> Dict[str, Any]:
        data = await self._serpapi.search_patents(params)
        if not include_content:
            return data

        results = [item for item in data.get("organic_results") or [] if isinstance(item, dict)]
        LOGGER.info("Fetching content for %s search results", len(results))
        await asyncio.gather(*(self._attach_content(result) for result in results))
        return data

    async def _attach_content(self, result: Dict[str, Any]) -> None:
        """Add claims/description to one result; failures only mark this result."""

        reference = result.get("patent_link") or result.get("patent_id")
        sections = None
        if reference:
            try:
                sections = await self._content.fetch_sections(reference)
            except UpstreamTimeoutError as exc:
                LOGGER.warning("Content fetch timed out for %s: %s", reference, exc)
            except Exception as exc:
                LOGGER.warning("Content fetch failed for %s: %s", reference, exc)

        if sections is None or not (sections.claims or sections.description):
            result["content_included"] = False
            return

        result["content_included"] = True
        if sections.claims:
            result["claims"] = sections.claims
        if sections.description:
            result["description"] = sections.description
