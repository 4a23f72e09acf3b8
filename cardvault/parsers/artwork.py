"""
Artwork detection for card list entries.

A printing with a new or alternate artwork is flagged in one of three ways,
checked in this order (first match wins):

1. An annotation in the English name: "Dark Magician (Alternate Artwork)"
2. A hint in an auxiliary cell: "New artwork"
3. A suffix on the card code: "BLMM-FR001-NEW"

Only the name annotation changes the cleaned name.
"""

import re
from dataclasses import dataclass

from cardvault.models.card import ArtworkKind
from cardvault.parsers.names import collapse_whitespace, normalize_card_name

# Ordered: "(new artwork)" must be tried before the bare "(new)"
NAME_ARTWORK_PATTERNS: tuple[tuple[re.Pattern[str], ArtworkKind], ...] = (
    (re.compile(r"\(new artwork\)", re.IGNORECASE), ArtworkKind.NEW),
    (re.compile(r"\(nouvel(?:le)? artwork\)", re.IGNORECASE), ArtworkKind.NEW),
    (re.compile(r"\(alternate artwork\)", re.IGNORECASE), ArtworkKind.ALTERNATIVE),
    (re.compile(r"\(alternative artwork\)", re.IGNORECASE), ArtworkKind.ALTERNATIVE),
    (re.compile(r"\(alt artwork\)", re.IGNORECASE), ArtworkKind.ALTERNATIVE),
    (re.compile(r"\(alt\)", re.IGNORECASE), ArtworkKind.ALTERNATIVE),
    (re.compile(r"\(alternative\)", re.IGNORECASE), ArtworkKind.ALTERNATIVE),
    (re.compile(r"\(alternate\)", re.IGNORECASE), ArtworkKind.ALTERNATIVE),
    (re.compile(r"\(new\)", re.IGNORECASE), ArtworkKind.NEW),
)

EXTRA_CELL_PATTERNS: tuple[tuple[re.Pattern[str], ArtworkKind], ...] = (
    (re.compile(r"\bnew artwork\b", re.IGNORECASE), ArtworkKind.NEW),
    (re.compile(r"\bnouvel(?:le)? artwork\b", re.IGNORECASE), ArtworkKind.NEW),
    (re.compile(r"\bnew\b", re.IGNORECASE), ArtworkKind.NEW),
    (re.compile(r"\balternate artwork\b", re.IGNORECASE), ArtworkKind.ALTERNATIVE),
    (re.compile(r"\balternative artwork\b", re.IGNORECASE), ArtworkKind.ALTERNATIVE),
    (re.compile(r"\balt(?:ernate)?\b", re.IGNORECASE), ArtworkKind.ALTERNATIVE),
)

CODE_ARTWORK_PATTERNS: tuple[tuple[re.Pattern[str], ArtworkKind], ...] = (
    (re.compile(r"-new$", re.IGNORECASE), ArtworkKind.NEW),
    (re.compile(r"-(?:aa|alt|alternative)$", re.IGNORECASE), ArtworkKind.ALTERNATIVE),
    (re.compile(r"-a$", re.IGNORECASE), ArtworkKind.ALTERNATIVE),
)


@dataclass(frozen=True, slots=True)
class ArtworkDetection:
    """Result of artwork detection."""

    artwork: ArtworkKind
    cleaned_english_name: str


def _first_match(
    text: str, patterns: tuple[tuple[re.Pattern[str], ArtworkKind], ...]
) -> tuple[re.Pattern[str], ArtworkKind] | None:
    for pattern, kind in patterns:
        if pattern.search(text):
            return pattern, kind
    return None


def detect_artwork(
    code: str,
    english_name: str | None = None,
    extra_text: str | None = None,
) -> ArtworkDetection:
    """
    Detect the artwork kind of a card entry.

    Args:
        code: Raw card code (e.g., "BLMM-FR001-NEW")
        english_name: Raw English name, possibly annotated
        extra_text: Text of the auxiliary artwork-hint cell, if any

    Returns:
        ArtworkDetection with the kind and the English name with any
        artwork annotation removed
    """
    cleaned = normalize_card_name(english_name) if english_name else ""

    if cleaned:
        found = _first_match(cleaned, NAME_ARTWORK_PATTERNS)
        if found:
            pattern, kind = found
            return ArtworkDetection(kind, collapse_whitespace(pattern.sub("", cleaned)))

    if extra_text:
        found = _first_match(extra_text, EXTRA_CELL_PATTERNS)
        if found:
            return ArtworkDetection(found[1], cleaned)

    if code:
        found = _first_match(code.strip(), CODE_ARTWORK_PATTERNS)
        if found:
            return ArtworkDetection(found[1], cleaned)

    return ArtworkDetection(ArtworkKind.NONE, cleaned)
