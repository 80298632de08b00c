"""Patent search and retrieval endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Query

from app import schemas
from app.api.dependencies import ContentService, Patents, Search
from app.services import InclusionOptions

router = APIRouter(prefix="/patents", tags=["patents"])


@router.get("/search")
async def search_patents(
    search: Search,
    q: Optional[str] = Query(None, description="Search query; separate terms with ';'."),
    page: Optional[int] = Query(None, ge=1, description="Page number for pagination."),
    num: Optional[int] = Query(None, ge=10, le=100, description="Results per page (10 to 100)."),
    sort: Optional[str] = Query(None, pattern="^(relevance|new|old)$"),
    before: Optional[str] = Query(None, description="Maximum date, e.g. publication:20231231."),
    after: Optional[str] = Query(None, description="Minimum date, e.g. filing:20220601."),
    inventor: Optional[str] = Query(None, description="Comma-separated inventor names."),
    assignee: Optional[str] = Query(None, description="Comma-separated assignee names."),
    country: Optional[str] = Query(None, description="Comma-separated country codes."),
    language: Optional[str] = Query(None, description="Comma-separated languages."),
    status: Optional[str] = Query(None, pattern="^(GRANT|APPLICATION)$"),
    type: Optional[str] = Query(None, pattern="^(PATENT|DESIGN)$"),
    scholar: Optional[bool] = Query(None, description="Include Google Scholar results."),
    include_content: bool = Query(
        False, description="Fetch claims and description for every result."
    ),
) -> Dict[str, Any]:
    """Search Google Patents; the upstream response is returned as-is."""

    params = schemas.SearchPatentsParams(
        q=q,
        page=page,
        num=num,
        sort=sort,
        before=before,
        after=after,
        inventor=inventor,
        assignee=assignee,
        country=country,
        language=language,
        status=status,
        type=type,
        scholar=scholar,
    )
    return await search.search(params.model_dump(exclude_none=True), include_content=include_content)


@router.post(
    "/fetch",
    response_model=schemas.PatentRecord,
    response_model_exclude_none=True,
)
async def fetch_patent(
    payload: schemas.FetchPatentRequest,
    patents: Patents,
) -> schemas.PatentRecord:
    """Return a patent record holding only the requested sections."""

    options = InclusionOptions.from_include(payload.include, max_length=payload.max_length)
    return await patents.fetch_patent(payload.url_or_id, options)


@router.post(
    "/content",
    response_model=schemas.PatentContent,
    response_model_exclude_none=True,
)
async def fetch_patent_content(
    payload: schemas.FetchContentRequest,
    content: ContentService,
) -> schemas.PatentContent:
    """Return claims, description and full text parsed from the patent page."""

    return await content.fetch_content(
        payload.url_or_id,
        include_claims=payload.include_claims,
        include_description=payload.include_description,
        include_full_text=payload.include_full_text,
        max_length=payload.max_length,
    )
