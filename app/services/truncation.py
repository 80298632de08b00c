"""Budget-bounded truncation of patent text at natural boundaries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

# A boundary earlier than this share of the budget is ignored in favour of a hard cut.
TRUNCATE_THRESHOLD = 0.8

# Claims are rendered separated by a blank line.
CLAIM_SEPARATOR = "\n\n"

DESCRIPTION_LABEL = "DESCRIPTION:\n"
CLAIMS_LABEL = "\n\nCLAIMS:\n"

_BOUNDARIES = ("\n\n", "\n", " ")


@dataclass(frozen=True)
class TruncationResult:
    content: str
    truncated: bool


def truncation_indicator(shown: int, total: int) -> str:
    return f"\n\n[Content truncated - {shown} of {total} characters shown]"


def _find_cut(text: str, max_length: int) -> int:
    """Index to cut ``text`` at: paragraph, then line, then word break."""

    index = -1
    for boundary in _BOUNDARIES:
        # The boundary may start exactly at ``max_length``.
        index = text.rfind(boundary, 0, max_length + len(boundary))
        if index != -1:
            break

    if index == -1 or index < max_length * TRUNCATE_THRESHOLD:
        return max_length
    return index


def shorten_text(text: str, max_length: int) -> TruncationResult:
    """Cut ``text`` to at most ``max_length`` characters without an indicator."""

    if len(text) <= max_length:
        return TruncationResult(content=text, truncated=False)
    kept = text[: _find_cut(text, max_length)].rstrip()
    return TruncationResult(content=kept, truncated=True)


def truncate_text(text: str, max_length: int) -> str:
    """Truncate ``text`` and append an indicator when anything was dropped."""

    result = shorten_text(text, max_length)
    if not result.truncated:
        return text
    return result.content + truncation_indicator(len(result.content), len(text))


def truncate_claims(claims: Sequence[str], max_length: int) -> List[str]:
    """Return the longest prefix of whole claims that fits ``max_length``.

    Each claim costs its length plus the blank-line separator.
    """

    total = 0
    included: List[str] = []
    for claim in claims:
        cost = len(claim) + len(CLAIM_SEPARATOR)
        if total + cost > max_length:
            break
        included.append(claim)
        total += cost
    return included


def truncate_full_text(text: str, max_length: int) -> str:
    """Truncate the combined description and claims view.

    The description block is kept whole when it fits, otherwise it is cut with
    the text rule and the claims are dropped. Leftover budget goes to the
    claims block, which is cut after the last claim that fits entirely.
    """

    if len(text) <= max_length:
        return text

    label_at = text.find(CLAIMS_LABEL)
    if label_at == -1:
        return truncate_text(text, max_length)

    description_block = text[:label_at]
    if len(description_block) > max_length:
        shortened = shorten_text(description_block, max_length)
        return shortened.content + truncation_indicator(len(shortened.content), len(text))

    remaining = max_length - len(description_block)
    claims = text[label_at + len(CLAIMS_LABEL):].split(CLAIM_SEPARATOR)

    used = len(CLAIMS_LABEL)
    included: List[str] = []
    for claim in claims:
        cost = len(claim) + (len(CLAIM_SEPARATOR) if included else 0)
        if used + cost > remaining:
            break
        included.append(claim)
        used += cost

    kept = description_block
    if included:
        kept += CLAIMS_LABEL + CLAIM_SEPARATOR.join(included)
    kept = kept.rstrip()
    return kept + truncation_indicator(len(kept), len(text))
