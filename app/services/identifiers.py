"""Helpers for turning free-form patent references into canonical keys."""

from __future__ import annotations

import re

PATENT_PREFIX = "patent/"
DEFAULT_LANGUAGE = "en"

_ANCHOR_PATTERN = re.compile(r"patent/([^/?#]+)")


def _is_url(value: str) -> bool:
    return value.startswith("http://") or value.startswith("https://")


def _strip_key(value: str) -> str:
    """Drop a leading ``patent/`` prefix and anything after the number."""

    if value.startswith(PATENT_PREFIX):
        value = value[len(PATENT_PREFIX):]
    return value.split("/", 1)[0]


def resolve_patent_id(url_or_id: str, language: str = DEFAULT_LANGUAGE) -> str:
    """Return ``patent/<number>/<language>`` for a URL, key or bare number.

    Never raises; unrecognisable input still yields a well-formed key.
    """

    if _is_url(url_or_id):
        match = _ANCHOR_PATTERN.search(url_or_id)
        if match:
            return f"{PATENT_PREFIX}{match.group(1)}/{language}"
        number = url_or_id.rstrip("/").split("/")[-1]
        return f"{PATENT_PREFIX}{number}/{language}"

    if url_or_id.startswith(PATENT_PREFIX) and len(url_or_id.split("/")) == 3:
        return url_or_id

    if url_or_id.startswith(PATENT_PREFIX):
        return f"{PATENT_PREFIX}{_strip_key(url_or_id)}/{language}"

    return f"{PATENT_PREFIX}{url_or_id}/{language}"


def resolve_document_url(url_or_id: str, base_url: str) -> str:
    """URLs pass through; identifiers map to ``<base_url>/patent/<number>``."""

    if _is_url(url_or_id):
        return url_or_id
    return f"{base_url.rstrip('/')}/{PATENT_PREFIX}{_strip_key(url_or_id)}"
