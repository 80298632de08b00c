"""Assemble client-facing patent records from fetched metadata and sections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from app.schemas.patent import CitationsRead, FamilyMemberRead, PatentContent, PatentRecord
from app.services.errors import InvalidIncludeError
from app.services.extraction import ContentSections
from app.services.metadata import PatentMetadata
from app.services.truncation import (
    CLAIM_SEPARATOR,
    CLAIMS_LABEL,
    DESCRIPTION_LABEL,
    truncate_claims,
    truncate_full_text,
    truncate_text,
)

INCLUDE_SECTIONS = (
    "claims",
    "description",
    "abstract",
    "family_members",
    "citations",
    "metadata",
    "full_text",
)
DEFAULT_INCLUDE = ("metadata", "abstract")


@dataclass(frozen=True)
class InclusionOptions:
    """Which record fields to populate, plus an optional character budget."""

    include_claims: bool = False
    include_description: bool = False
    include_abstract: bool = True
    include_family_members: bool = False
    include_citations: bool = False
    include_metadata: bool = True
    include_full_text: bool = False
    max_length: Optional[int] = None

    @classmethod
    def from_include(
        cls, include: Optional[Sequence[str]] = None, max_length: Optional[int] = None
    ) -> "InclusionOptions":
        """Build options from section names; ``None`` or ``[]`` selects the default set."""

        names = [item.strip().lower() for item in include or []] or list(DEFAULT_INCLUDE)
        for name in names:
            if name not in INCLUDE_SECTIONS:
                raise InvalidIncludeError(name, INCLUDE_SECTIONS)
        if max_length is not None and max_length < 1:
            raise ValueError(f"max_length must be a positive integer, got {max_length}")

        selected = set(names)
        return cls(
            include_claims="claims" in selected,
            include_description="description" in selected,
            include_abstract="abstract" in selected,
            include_family_members="family_members" in selected,
            include_citations="citations" in selected,
            include_metadata="metadata" in selected,
            include_full_text="full_text" in selected,
            max_length=max_length,
        )

    @property
    def needs_document(self) -> bool:
        return self.include_claims or self.include_description or self.include_full_text


def build_full_text(description: Optional[str], claims: Sequence[str]) -> Optional[str]:
    parts: List[str] = []
    if description:
        parts.append(DESCRIPTION_LABEL + description)
    if claims:
        parts.append(CLAIMS_LABEL + CLAIM_SEPARATOR.join(claims))
    if not parts:
        return None
    return "\n".join(parts)


def _bounded_text(text: str, max_length: Optional[int]) -> str:
    if max_length is None:
        return text
    return truncate_text(text, max_length)


def _bounded_claims(claims: Sequence[str], max_length: Optional[int]) -> List[str]:
    if max_length is None:
        return list(claims)
    return truncate_claims(claims, max_length)


def _bounded_full_text(text: str, max_length: Optional[int]) -> str:
    if max_length is None:
        return text
    return truncate_full_text(text, max_length)


def format_content(
    sections: ContentSections,
    include_claims: bool = True,
    include_description: bool = True,
    include_full_text: bool = True,
    max_length: Optional[int] = None,
) -> PatentContent:
    """Document-only view: claims, description and the combined full text."""

    fields: Dict[str, Any] = {}
    if include_claims and sections.claims:
        fields["claims"] = _bounded_claims(sections.claims, max_length)
    if include_description and sections.description:
        fields["description"] = _bounded_text(sections.description, max_length)
    if include_full_text:
        full_text = build_full_text(sections.description, sections.claims)
        if full_text:
            fields["full_text"] = _bounded_full_text(full_text, max_length)
    return PatentContent(**fields)


def format_record(
    metadata: PatentMetadata,
    sections: Optional[ContentSections],
    options: InclusionOptions,
) -> PatentRecord:
    """Populate a record strictly according to ``options``.

    Every field is derived from the untruncated inputs, so truncating one field
    never changes another.
    """

    max_length = options.max_length
    fields: Dict[str, Any] = {}

    if metadata.publication_number:
        fields["patent_id"] = metadata.publication_number

    if options.include_metadata:
        fields.update(
            title=metadata.title,
            publication_number=metadata.publication_number,
            assignee=metadata.assignee,
            inventor=metadata.inventor,
            priority_date=metadata.priority_date,
            filing_date=metadata.filing_date,
            publication_date=metadata.publication_date,
        )

    abstract = metadata.abstract or (sections.abstract if sections else None)
    if options.include_abstract and abstract:
        fields["abstract"] = _bounded_text(abstract, max_length)

    description = sections.description if sections else None
    claims = (sections.claims if sections else None) or metadata.claims

    if options.include_description and description:
        fields["description"] = _bounded_text(description, max_length)

    if options.include_claims and claims:
        fields["claims"] = _bounded_claims(claims, max_length)

    if options.include_family_members:
        fields["family_members"] = [
            FamilyMemberRead(patent_id=member.patent_id, region=member.region, status=member.status)
            for member in metadata.family_members
        ]

    if options.include_citations and metadata.citations:
        fields["citations"] = CitationsRead(
            forward_citations=metadata.citations.forward_citations,
            backward_citations=metadata.citations.backward_citations,
            family_to_family_citations=metadata.citations.family_to_family_citations,
        )

    if options.include_full_text:
        full_text = build_full_text(description, claims)
        if full_text:
            fields["full_text"] = _bounded_full_text(full_text, max_length)

    return PatentRecord(**fields)
