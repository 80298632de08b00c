"""Normalise upstream patent metadata into one canonical shape.

Two upstream shapes are observed. The nested shape (SerpApi patent details)
carries ``assignees``/``inventors`` arrays, a per-year
``worldwide_applications`` map and citation arrays. The flat shape (search
result style) carries scalar ``assignee``/``inventor`` fields, a
``country_status`` object and a ``citations`` object of pre-computed counts.
The shape is detected once, then a shape-specific reader fills
:class:`PatentMetadata`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

LOGGER = logging.getLogger(__name__)


class MetadataShape(str, Enum):
    FLAT = "flat"
    NESTED = "nested"


@dataclass(frozen=True)
class FamilyMember:
    """A related filing of the same invention."""

    region: str
    status: str
    patent_id: Optional[str] = None


@dataclass(frozen=True)
class PatentCitations:
    forward_citations: int
    backward_citations: int
    family_to_family_citations: Optional[int] = None


@dataclass
class PatentMetadata:
    """Canonical metadata subset of a patent record."""

    shape: MetadataShape
    title: Optional[str] = None
    publication_number: Optional[str] = None
    assignee: Optional[str] = None
    inventor: Optional[str] = None
    priority_date: Optional[str] = None
    filing_date: Optional[str] = None
    publication_date: Optional[str] = None
    abstract: Optional[str] = None
    claims: List[str] = field(default_factory=list)
    family_members: List[FamilyMember] = field(default_factory=list)
    citations: Optional[PatentCitations] = None
    error: Optional[str] = None

    @property
    def has_identity(self) -> bool:
        """True when upstream returned a title, abstract or publication number."""

        return bool(self.title or self.abstract or self.publication_number)


def detect_shape(details: Dict[str, Any]) -> MetadataShape:
    if any(key in details for key in ("worldwide_applications", "patent_citations", "cited_by")):
        return MetadataShape.NESTED
    if isinstance(details.get("assignees"), list) or isinstance(details.get("inventors"), list):
        return MetadataShape.NESTED
    if isinstance(details.get("country_status"), dict) or isinstance(details.get("citations"), dict):
        return MetadataShape.FLAT
    if isinstance(details.get("assignee"), str) or isinstance(details.get("inventor"), str):
        return MetadataShape.FLAT
    return MetadataShape.NESTED


def normalise_metadata(details: Dict[str, Any]) -> PatentMetadata:
    shape = detect_shape(details)
    if shape is MetadataShape.FLAT:
        metadata = _read_flat(details)
    else:
        metadata = _read_nested(details)
    LOGGER.debug(
        "Normalised %s metadata for %s (%s family members)",
        shape.value,
        metadata.publication_number,
        len(metadata.family_members),
    )
    return metadata


# ---------------------------------------------------------------------------
# Shape readers
# ---------------------------------------------------------------------------


def _read_common(details: Dict[str, Any], shape: MetadataShape) -> PatentMetadata:
    claims = details.get("claims")
    return PatentMetadata(
        shape=shape,
        title=_text(details.get("title")),
        publication_number=_text(details.get("publication_number")),
        priority_date=_text(details.get("priority_date")),
        filing_date=_text(details.get("filing_date")),
        publication_date=_text(details.get("publication_date")),
        abstract=_text(details.get("abstract")),
        claims=[claim for claim in claims if isinstance(claim, str)] if isinstance(claims, list) else [],
        error=_text(details.get("error")),
    )


def _read_nested(details: Dict[str, Any]) -> PatentMetadata:
    metadata = _read_common(details, MetadataShape.NESTED)
    metadata.assignee = _first_name(details.get("assignees"))
    metadata.inventor = _first_name(details.get("inventors"))
    metadata.family_members = _nested_family_members(details.get("worldwide_applications"))

    patent_citations = details.get("patent_citations") or {}
    cited_by = details.get("cited_by") or {}
    family_to_family = patent_citations.get("family_to_family")
    metadata.citations = _citations(
        forward=_length(patent_citations.get("original")),
        backward=_length(cited_by.get("original")),
        family_to_family=len(family_to_family) if isinstance(family_to_family, list) else None,
    )
    return metadata


def _read_flat(details: Dict[str, Any]) -> PatentMetadata:
    metadata = _read_common(details, MetadataShape.FLAT)
    metadata.assignee = _text(details.get("assignee"))
    metadata.inventor = _text(details.get("inventor"))
    metadata.family_members = _flat_family_members(details.get("country_status"))

    counts = details.get("citations")
    if isinstance(counts, dict):
        family_to_family = counts.get("family_to_family_citations")
        metadata.citations = _citations(
            forward=_as_int(counts.get("forward_citations")),
            backward=_as_int(counts.get("backward_citations")),
            family_to_family=_as_int(family_to_family) if family_to_family is not None else None,
        )
    return metadata


def _nested_family_members(applications_by_year: Any) -> List[FamilyMember]:
    if not isinstance(applications_by_year, dict):
        return []

    members: List[FamilyMember] = []
    for applications in applications_by_year.values():
        if not isinstance(applications, list):
            continue
        for application in applications:
            if not isinstance(application, dict) or application.get("this_app"):
                continue
            document_id = application.get("document_id")
            region = application.get("country_code")
            status = application.get("legal_status")
            if document_id and region and status:
                members.append(FamilyMember(region=region, status=status, patent_id=document_id))
    return members


def _flat_family_members(country_status: Any) -> List[FamilyMember]:
    if not isinstance(country_status, dict):
        return []

    members: List[FamilyMember] = []
    for region, entry in country_status.items():
        if isinstance(entry, dict):
            members.append(
                FamilyMember(
                    region=region,
                    status=str(entry.get("legal_status") or entry.get("status") or ""),
                    patent_id=entry.get("document_id") or entry.get("patent_id"),
                )
            )
        elif entry:
            members.append(FamilyMember(region=region, status=str(entry)))
    return members


def _citations(forward: int, backward: int, family_to_family: Optional[int]) -> Optional[PatentCitations]:
    if forward == 0 and backward == 0:
        return None
    return PatentCitations(
        forward_citations=forward,
        backward_citations=backward,
        family_to_family_citations=family_to_family,
    )


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------


def _text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _first_name(values: Any) -> Optional[str]:
    if not isinstance(values, list) or not values:
        return None
    first = values[0]
    if isinstance(first, dict):
        return _text(first.get("name"))
    return _text(first)


def _length(values: Any) -> int:
    return len(values) if isinstance(values, list) else 0


def _as_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0
