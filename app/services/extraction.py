"""Extract claims, description and abstract text from patent page markup."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Dict, List, Optional, Tuple

LOGGER = logging.getLogger(__name__)

SECTION_NAMES = ("claims", "description", "abstract")
SKIPPED_TAGS = {"script", "style"}
VOID_TAGS = {
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
}

# Only these references are decoded; anything else is kept verbatim.
NAMED_ENTITIES = {"nbsp": " ", "amp": "&", "lt": "<", "gt": ">", "quot": '"'}
NUMERIC_ENTITIES = {"39": "'"}

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class ContentSections:
    """Cleaned sections located in one patent document."""

    claims: List[str] = field(default_factory=list)
    description: Optional[str] = None
    abstract: Optional[str] = None


def normalise_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


class _Capture:
    """Text collected for one open element, tracking same-tag nesting."""

    __slots__ = ("tag", "depth", "parts", "number")

    def __init__(self, tag: str, number: Optional[str] = None) -> None:
        self.tag = tag
        self.depth = 1
        self.parts: List[str] = []
        self.number = number

    def text(self) -> str:
        return normalise_whitespace("".join(self.parts))


class PatentHTMLParser(HTMLParser):
    """Collect section and claim text from Google Patents style markup.

    Regions are elements carrying ``itemprop="claims"``, ``"description"`` or
    ``"abstract"``; the first occurrence of each wins. Claim units are
    ``itemprop="claim"`` elements with a numeric ``num`` attribute inside the
    claims region. Every tag contributes a single space so adjacent words never
    run together, and script/style content is dropped.
    """

    def __init__(self, capture_document: bool = False) -> None:
        super().__init__(convert_charrefs=False)
        self._open: List[_Capture] = []
        self._skipping: Optional[str] = None
        self.sections: Dict[str, _Capture] = {}
        self.claim_units: List[_Capture] = []
        self.document: Optional[_Capture] = None
        if capture_document:
            # An empty tag name never matches an end tag, so this stays open.
            self.document = _Capture("")
            self._open.append(self.document)

    def section_text(self, name: str) -> Optional[str]:
        capture = self.sections.get(name)
        if capture is None:
            return None
        return capture.text() or None

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        if self._skipping:
            return
        if tag in SKIPPED_TAGS:
            self._skipping = tag
            return

        for capture in self._open:
            if capture.tag == tag:
                capture.depth += 1
            capture.parts.append(" ")

        if tag in VOID_TAGS:
            return

        attrs_dict = dict(attrs)
        itemprop = attrs_dict.get("itemprop")
        if itemprop in SECTION_NAMES and itemprop not in self.sections:
            capture = _Capture(tag)
            self.sections[itemprop] = capture
            self._open.append(capture)
        elif itemprop == "claim" and self._is_open("claims") and not self._in_claim():
            num = (attrs_dict.get("num") or "").strip()
            if num.isdecimal():
                capture = _Capture(tag, number=str(int(num)))
                self.claim_units.append(capture)
                self._open.append(capture)

    def handle_endtag(self, tag: str) -> None:
        if self._skipping:
            if tag == self._skipping:
                self._skipping = None
            return

        for capture in list(self._open):
            if capture.tag == tag:
                capture.depth -= 1
                if capture.depth == 0:
                    self._open.remove(capture)
                    continue
            capture.parts.append(" ")

    def handle_data(self, data: str) -> None:
        if self._skipping:
            return
        self._append(data)

    def handle_entityref(self, name: str) -> None:
        if self._skipping:
            return
        self._append(NAMED_ENTITIES.get(name, f"&{name};"))

    def handle_charref(self, name: str) -> None:
        if self._skipping:
            return
        self._append(NUMERIC_ENTITIES.get(name, f"&#{name};"))

    def _append(self, text: str) -> None:
        for capture in self._open:
            capture.parts.append(text)

    def _is_open(self, name: str) -> bool:
        capture = self.sections.get(name)
        return capture is not None and capture in self._open

    def _in_claim(self) -> bool:
        # Nested claim units belong to the enclosing claim.
        return any(capture.number is not None for capture in self._open)


def clean_html_text(html: str) -> str:
    """Strip markup from ``html`` and return single-spaced plain text."""

    parser = PatentHTMLParser(capture_document=True)
    parser.feed(html)
    parser.close()
    return parser.document.text() if parser.document else ""


def extract_sections(
    html: str,
    need_claims: bool = True,
    need_description: bool = True,
    need_full_text: bool = False,
) -> ContentSections:
    """Locate the requested sections in ``html``.

    ``need_full_text`` implies both claims and description. When the document
    has no usable description, the abstract is substituted with an
    ``"Abstract: "`` prefix. Parse failures are logged and yield an empty
    result rather than propagating.
    """

    want_claims = need_claims or need_full_text
    want_description = need_description or need_full_text

    parser = PatentHTMLParser()
    try:
        parser.feed(html)
        parser.close()
    except Exception as exc:
        LOGGER.warning("Failed to parse patent HTML: %s", exc)
        return ContentSections()

    claims: List[str] = []
    if want_claims:
        for unit in parser.claim_units:
            text = unit.text()
            if text:
                claims.append(f"{unit.number}. {text}")

    abstract = parser.section_text("abstract")
    description: Optional[str] = None
    if want_description:
        description = parser.section_text("description")
        if not description and abstract:
            description = f"Abstract: {abstract}"

    return ContentSections(claims=claims, description=description, abstract=abstract)
