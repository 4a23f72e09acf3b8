from cardvault.models.card import (
    ArtworkKind,
    BatchStatistics,
    CardEntry,
    CardGroup,
    DuplicateCode,
    RawTableRow,
)
from cardvault.models.failure import (
    CardRarityNotFoundError,
    DisallowedHostError,
    FailureDetail,
    FailureKind,
    FetchTimeoutError,
    IncompleteCardError,
    InvalidSourceUrlError,
    KnownError,
    NothingExtractedError,
    SeriesConflictError,
    SeriesNotFoundError,
    TableNotFoundError,
    TooManyRedirectsError,
    UpstreamStatusError,
)
from cardvault.models.language import (
    LanguageCode,
    LanguageDefinition,
    LanguageDetectionResult,
)

__all__ = [
    "ArtworkKind",
    "BatchStatistics",
    "CardEntry",
    "CardGroup",
    "CardRarityNotFoundError",
    "DisallowedHostError",
    "DuplicateCode",
    "FailureDetail",
    "FailureKind",
    "FetchTimeoutError",
    "IncompleteCardError",
    "InvalidSourceUrlError",
    "KnownError",
    "LanguageCode",
    "LanguageDefinition",
    "LanguageDetectionResult",
    "NothingExtractedError",
    "RawTableRow",
    "SeriesConflictError",
    "SeriesNotFoundError",
    "TableNotFoundError",
    "TooManyRedirectsError",
    "UpstreamStatusError",
]
