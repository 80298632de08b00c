"""Document-only patent content retrieval."""

from __future__ import annotations

import logging
from typing import Optional

from app.schemas.patent import PatentContent
from app.services.documents import DocumentFetcher
from app.services.errors import UpstreamRequestError
from app.services.extraction import ContentSections, extract_sections
from app.services.formatter import format_content
from app.services.identifiers import resolve_document_url

LOGGER = logging.getLogger(__name__)


class PatentContentService:
    """Fetch a patent page and extract its sections."""

    def __init__(self, fetcher: DocumentFetcher, patents_base_url: str) -> None:
        self._fetcher = fetcher
        self._base_url = patents_base_url

    async def fetch_sections(
        self,
        url_or_id: str,
        need_claims: bool = True,
        need_description: bool = True,
        need_full_text: bool = False,
    ) -> Optional[ContentSections]:
        """Return extracted sections, or ``None`` when the page is unavailable.

        Timeouts propagate as :class:`UpstreamTimeoutError`.
        """

        url = resolve_document_url(url_or_id, self._base_url)
        try:
            html = await self._fetcher.fetch(url)
        except UpstreamRequestError as exc:
            LOGGER.warning("Patent content unavailable for %s: %s", url, exc)
            return None
        return extract_sections(html, need_claims, need_description, need_full_text)

    async def fetch_content(
        self,
        url_or_id: str,
        include_claims: bool = True,
        include_description: bool = True,
        include_full_text: bool = True,
        max_length: Optional[int] = None,
    ) -> PatentContent:
        sections = await self.fetch_sections(
            url_or_id, include_claims, include_description, include_full_text
        )
        if sections is None:
            return PatentContent()
        return format_content(
            sections,
            include_claims=include_claims,
            include_description=include_description,
            include_full_text=include_full_text,
            max_length=max_length,
        )
