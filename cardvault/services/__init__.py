"""Ingestion services: grouping, statistics, series naming, pipeline."""

from cardvault.services.aggregator import (
    aggregate,
    artwork_distribution,
    card_key,
    compute_batch_statistics,
)
from cardvault.services.ingestion import (
    IngestionResult,
    ingest_html,
    resolve_series_language,
    summarize_entries,
    validate_submission,
)
from cardvault.services.series_naming import derive_series_code, extract_series_name_from_url

__all__ = [
    "IngestionResult",
    "aggregate",
    "artwork_distribution",
    "card_key",
    "compute_batch_statistics",
    "derive_series_code",
    "extract_series_name_from_url",
    "ingest_html",
    "resolve_series_language",
    "summarize_entries",
    "validate_submission",
]
