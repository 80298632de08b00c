"""Pydantic schemas for API payloads."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator


class FamilyMemberRead(BaseModel):
    patent_id: Optional[str] = Field(None, description="Document identifier of the related filing.")
    region: str = Field(..., description="Issuing authority (US, EP, WO, JP, etc.).")
    status: str = Field(..., description="Legal status reported upstream.")


class CitationsRead(BaseModel):
    forward_citations: int
    backward_citations: int
    family_to_family_citations: Optional[int] = None


class PatentRecord(BaseModel):
    """Canonical patent record; unrequested fields stay unset and are not serialised."""

    patent_id: Optional[str] = Field(None, description="Publication number identifying the record.")
    title: Optional[str] = None
    publication_number: Optional[str] = None
    assignee: Optional[str] = None
    inventor: Optional[str] = None
    priority_date: Optional[str] = None
    filing_date: Optional[str] = None
    publication_date: Optional[str] = None
    abstract: Optional[str] = None
    description: Optional[str] = None
    claims: Optional[List[str]] = None
    family_members: Optional[List[FamilyMemberRead]] = None
    citations: Optional[CitationsRead] = None
    full_text: Optional[str] = Field(
        None, description="Labelled DESCRIPTION and CLAIMS blocks combined."
    )


class PatentContent(BaseModel):
    claims: Optional[List[str]] = None
    description: Optional[str] = None
    full_text: Optional[str] = None


class PatentReference(BaseModel):
    patent_url: Optional[str] = Field(
        None,
        description=(
            'Full patent URL (e.g. "https://patents.google.com/patent/US1234567A"). '
            "Takes precedence if both patent_url and patent_id are provided."
        ),
    )
    patent_id: Optional[str] = Field(
        None, description='Patent ID (e.g. "US1234567A" or "patent/US1234567A/en").'
    )
    max_length: Optional[int] = Field(
        None,
        ge=1,
        description=(
            "Maximum character length for returned content. Content is truncated at natural "
            "boundaries; claims are only ever dropped whole."
        ),
    )

    @model_validator(mode="after")
    def require_reference(self) -> "PatentReference":
        if not self.patent_url and not self.patent_id:
            raise ValueError("Either patent_url or patent_id must be provided")
        return self

    @property
    def url_or_id(self) -> str:
        return self.patent_url or self.patent_id or ""


class FetchPatentRequest(PatentReference):
    include: Optional[List[str]] = Field(
        None,
        description=(
            'Sections to include (case-insensitive): "claims", "description", "abstract", '
            '"family_members", "citations", "metadata", "full_text". '
            'Defaults to ["metadata", "abstract"] when omitted or empty.'
        ),
    )


class FetchContentRequest(PatentReference):
    include_claims: bool = True
    include_description: bool = True
    include_full_text: bool = True


class SearchPatentsParams(BaseModel):
    q: Optional[str] = Field(
        None, description="Search query; separate multiple terms with a semicolon."
    )
    page: Optional[int] = Field(None, ge=1, description="Page number for pagination.")
    num: Optional[int] = Field(None, ge=10, le=100, description="Results per page (10 to 100).")
    sort: Optional[Literal["relevance", "new", "old"]] = None
    before: Optional[str] = Field(None, description="Maximum date filter, e.g. publication:20231231.")
    after: Optional[str] = Field(None, description="Minimum date filter, e.g. filing:20220601.")
    inventor: Optional[str] = None
    assignee: Optional[str] = None
    country: Optional[str] = Field(None, description="Country codes, e.g. 'US' or 'WO,JP'.")
    language: Optional[str] = Field(None, description="Languages, e.g. 'ENGLISH,GERMAN'.")
    status: Optional[Literal["GRANT", "APPLICATION"]] = None
    type: Optional[Literal["PATENT", "DESIGN"]] = None
    scholar: Optional[bool] = None
