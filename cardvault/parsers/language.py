"""
Language detection from card codes.

Card codes carry their print language as a two or three letter marker:
    BLMM-FR001   -> FR
    RA01-EN-001  -> EN
    LOB-E001     -> no marker
A batch of codes is reduced to its dominant language with a confidence
score, so a single mis-typed code does not change the series language.
"""

import re
from decimal import ROUND_HALF_UP, Decimal

from cardvault.models.language import (
    LanguageCode,
    LanguageDefinition,
    LanguageDetectionResult,
)

LANGUAGE_DEFINITIONS: tuple[LanguageDefinition, ...] = (
    LanguageDefinition(LanguageCode.EN, "Anglais", ("US", "UK")),
    LanguageDefinition(LanguageCode.FR, "Francais"),
    LanguageDefinition(LanguageCode.DE, "Allemand"),
    LanguageDefinition(LanguageCode.SP, "Espagnol", ("ES",)),
    LanguageDefinition(LanguageCode.IT, "Italien"),
    LanguageDefinition(LanguageCode.PT, "Portugais"),
    LanguageDefinition(LanguageCode.JP, "Japonais"),
    LanguageDefinition(LanguageCode.KR, "Coreen"),
    LanguageDefinition(LanguageCode.ZH, "Chinois", ("CN",)),
    LanguageDefinition(LanguageCode.RU, "Russe"),
)

ALIAS_TO_CODE: dict[str, LanguageCode] = {}
for _definition in LANGUAGE_DEFINITIONS:
    ALIAS_TO_CODE[_definition.code.value] = _definition.code
    for _alias in _definition.aliases:
        ALIAS_TO_CODE[_alias] = _definition.code

DEFAULT_LANGUAGE_CODE = LanguageCode.EN

LANGUAGE_OPTIONS: list[dict[str, str]] = [
    {"code": d.code.value, "label": d.label} for d in LANGUAGE_DEFINITIONS
]

# "...FR001": letters directly followed by the card number
SUFFIX_PATTERN = re.compile(r"([A-Z]{2,3})(\d{2,})$")
SEGMENT_SEPARATOR = re.compile(r"[-_/\s]+")
SEGMENT_PREFIX_PATTERN = re.compile(r"^([A-Z]{2,3})\d+")


def resolve_language_code(raw_code: str | None) -> LanguageCode | None:
    """
    Resolve a language code or alias ("es", " CN ") to its canonical code.

    Returns None for empty or unknown input.
    """
    if not raw_code:
        return None
    return ALIAS_TO_CODE.get(raw_code.strip().upper())


def get_language_label(code: LanguageCode) -> str:
    """Display label of a language, the code itself if unregistered."""
    for definition in LANGUAGE_DEFINITIONS:
        if definition.code == code:
            return definition.label
    return code.value


def detect_language_from_code(raw_code: str | None) -> LanguageCode | None:
    """
    Detect the print language marker of a single card code.

    Tries the letters right before the trailing card number first, then each
    separator-delimited segment from right to left.
    """
    normalized = raw_code.strip().upper() if raw_code else ""
    if not normalized:
        return None

    suffix = SUFFIX_PATTERN.search(normalized)
    if suffix:
        resolved = resolve_language_code(suffix.group(1))
        if resolved:
            return resolved

    segments = [s for s in SEGMENT_SEPARATOR.split(normalized) if s]
    for segment in reversed(segments):
        resolved = resolve_language_code(segment)
        if resolved:
            return resolved

        prefix = SEGMENT_PREFIX_PATTERN.match(segment)
        if prefix:
            resolved = resolve_language_code(prefix.group(1))
            if resolved:
                return resolved

    return None


def _round_share(count: int, total: int) -> float:
    """Share rounded to two decimals, exact halves rounded up (0.625 -> 0.63)."""
    return float(Decimal(count / total).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def detect_dominant_language(codes: list[str]) -> LanguageDetectionResult:
    """
    Detect the dominant language of a batch of card codes.

    Ties go to the language detected first in input order.

    Args:
        codes: Card codes of one batch

    Returns:
        LanguageDetectionResult; code is None if no code carries a marker
    """
    # dict preserves first-detection order, which makes max() tie-break on it
    tally: dict[LanguageCode, int] = {}
    matches = 0

    for code in codes:
        detected = detect_language_from_code(code)
        if detected:
            matches += 1
            tally[detected] = tally.get(detected, 0) + 1

    if not tally:
        return LanguageDetectionResult(code=None, matches=0, total=len(codes), confidence=0.0)

    winner = max(tally, key=lambda language: tally[language])
    return LanguageDetectionResult(
        code=winner,
        matches=matches,
        total=len(codes),
        confidence=_round_share(tally[winner], matches),
    )
