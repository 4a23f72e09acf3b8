"""
Card list ingestion pipeline.

    HTML -> raw rows -> card entries -> (groups, statistics, language)

Everything here is synchronous and free of I/O; fetching the page and
saving the result are done by the callers (API routes, import job).
"""

import logging
from dataclasses import dataclass, field

from cardvault.config import settings
from cardvault.models.card import BatchStatistics, CardEntry, CardGroup
from cardvault.models.failure import IncompleteCardError, NothingExtractedError
from cardvault.models.language import LanguageCode, LanguageDetectionResult
from cardvault.parsers.card_table import HtmlTableDocument, extract_raw_rows, parse_rows
from cardvault.parsers.language import (
    DEFAULT_LANGUAGE_CODE,
    detect_dominant_language,
    resolve_language_code,
)
from cardvault.services.aggregator import aggregate, compute_batch_statistics
from cardvault.services.series_naming import derive_series_code

logger = logging.getLogger(__name__)

# Number of duplicated codes shown in the log
DUPLICATE_LOG_SAMPLE = 5


@dataclass
class IngestionResult:
    """
    Everything derived from one batch of card entries.

    Attributes:
        entries: Flat (card x rarity) entries in table order
        groups: Unique (code, artwork) cards keyed by card_key()
        statistics: Informational batch statistics
        language: Dominant language of the card codes
        series_code: Series code derived from the first entry
    """

    entries: list[CardEntry]
    groups: dict[str, CardGroup] = field(default_factory=dict)
    statistics: BatchStatistics = field(default_factory=BatchStatistics)
    language: LanguageDetectionResult = field(
        default_factory=lambda: LanguageDetectionResult(None, 0, 0, 0.0)
    )
    series_code: str = ""


def summarize_entries(entries: list[CardEntry]) -> IngestionResult:
    """Group entries and compute statistics and language for a batch."""
    statistics = compute_batch_statistics(entries)
    _log_duplicates(statistics)

    return IngestionResult(
        entries=entries,
        groups=aggregate(entries),
        statistics=statistics,
        language=detect_dominant_language([entry.code for entry in entries]),
        series_code=derive_series_code(entries[0].code) if entries else "",
    )


def ingest_html(html: str) -> IngestionResult:
    """
    Parse card table markup and summarize the extracted entries.

    Raises:
        NothingExtractedError: If no card entry could be extracted
    """
    raw_rows = extract_raw_rows(HtmlTableDocument(html)) if html and html.strip() else []
    entries = parse_rows(raw_rows)

    if not entries:
        raise NothingExtractedError(rows_seen=len(raw_rows))

    result = summarize_entries(entries)
    logger.info(
        "Extracted %d entries (%d unique cards) from %d rows, language %s (%.0f%%)",
        len(entries),
        len(result.groups),
        len(raw_rows),
        result.language.code.value if result.language.code else "unknown",
        result.language.confidence * 100,
    )
    return result


def validate_submission(entries: list[CardEntry]) -> None:
    """
    Check that a batch can be saved.

    Raises:
        NothingExtractedError: If the batch is empty
        IncompleteCardError: For the first entry missing its code,
            English name or rarity
    """
    if not entries:
        raise NothingExtractedError()

    for index, entry in enumerate(entries):
        if not entry.is_complete:
            raise IncompleteCardError(index=index, code=entry.code)


def resolve_series_language(
    requested: str | None,
    detection: LanguageDetectionResult,
) -> LanguageCode:
    """
    Language to store a series under.

    An explicitly requested language wins, then the detected one, then the
    configured default.
    """
    resolved = resolve_language_code(requested)
    if resolved:
        return resolved
    if detection.code:
        return detection.code
    return resolve_language_code(settings.default_language) or DEFAULT_LANGUAGE_CODE


def _log_duplicates(statistics: BatchStatistics) -> None:
    if not statistics.has_duplicates:
        return

    sample = [d.code for d in statistics.duplicate_entries[:DUPLICATE_LOG_SAMPLE]]
    remaining = len(statistics.duplicate_entries) - len(sample)
    logger.info(
        "Duplicate codes: %d extra entries over %d total, e.g. %s%s",
        statistics.duplicates,
        statistics.total_entries,
        ", ".join(sample),
        f" and {remaining} more" if remaining > 0 else "",
    )
