"""
Failure classification for ingestion and persistence.

Every failure a caller can see is a KnownError subclass carrying a
FailureKind, a user-appropriate message, and the HTTP status the API layer
should answer with. Anything that is not a KnownError is a programming error
and propagates unchanged.

Soft failures (rows with too few cells, no code, no rarities) are NOT
errors: the row parser skips them and carries on.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    INCOMPLETE_CARD = "incomplete_card"

    # Source page failures
    INVALID_URL = "invalid_url"
    DISALLOWED_HOST = "disallowed_host"
    UPSTREAM_STATUS = "upstream_status"
    FETCH_TIMEOUT = "fetch_timeout"
    TOO_MANY_REDIRECTS = "too_many_redirects"
    TABLE_NOT_FOUND = "table_not_found"

    # Resource failures
    NOTHING_EXTRACTED = "nothing_extracted"
    NOT_FOUND = "not_found"

    # Persistence
    SERIES_CONFLICT = "series_conflict"

    # Unknown
    UNKNOWN = "unknown"


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a FailureDetail for API responses."""
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


# --- Source page fetch ---


class InvalidSourceUrlError(KnownError):
    """The source URL is malformed or does not use HTTPS."""

    def __init__(self, url: str, reason: str):
        self.url = url
        super().__init__(
            kind=FailureKind.INVALID_URL,
            message="The source URL is not valid.",
            detail=f"{reason}: {url!r}",
            suggestion="Paste the full https:// address of a set card list page.",
            status_code=400,
        )


class DisallowedHostError(KnownError):
    """The source URL (or a redirect target) points outside the allow-list."""

    def __init__(self, url: str, host: str):
        self.url = url
        self.host = host
        super().__init__(
            kind=FailureKind.DISALLOWED_HOST,
            message="Only Yugipedia pages can be imported.",
            detail=f"Host {host!r} is not allowed",
            status_code=400,
        )


class UpstreamStatusError(KnownError):
    """The source page answered with a non-2xx status."""

    def __init__(self, url: str, upstream_status: int):
        self.url = url
        self.upstream_status = upstream_status
        super().__init__(
            kind=FailureKind.UPSTREAM_STATUS,
            message="The source page could not be retrieved.",
            detail=f"HTTP {upstream_status} from {url}",
            suggestion="Check that the page exists and try again later.",
            status_code=502,
        )


class FetchTimeoutError(KnownError):
    """The source page did not answer in time."""

    def __init__(self, url: str, timeout: float):
        self.url = url
        self.timeout = timeout
        super().__init__(
            kind=FailureKind.FETCH_TIMEOUT,
            message="The source page took too long to respond.",
            detail=f"No response from {url} within {timeout:g}s",
            suggestion="Try again later.",
            status_code=504,
        )


class TooManyRedirectsError(KnownError):
    """The source page redirected more times than allowed."""

    def __init__(self, url: str, limit: int):
        self.url = url
        super().__init__(
            kind=FailureKind.TOO_MANY_REDIRECTS,
            message="The source page redirected too many times.",
            detail=f"More than {limit} redirects starting at {url}",
            status_code=502,
        )


class TableNotFoundError(KnownError):
    """The source page has no card table."""

    def __init__(self, url: str | None = None):
        super().__init__(
            kind=FailureKind.TABLE_NOT_FOUND,
            message="No card table was found on this page.",
            detail=f"No <table><tbody> in {url}" if url else None,
            suggestion="Use a 'Set Card Lists' page.",
            status_code=404,
        )


# --- Parsing and persistence ---


class NothingExtractedError(KnownError):
    """Parsing finished but produced no card entries."""

    def __init__(self, rows_seen: int = 0):
        self.rows_seen = rows_seen
        super().__init__(
            kind=FailureKind.NOTHING_EXTRACTED,
            message="No cards could be extracted from the table.",
            detail=f"{rows_seen} rows examined",
            suggestion="Check that the table has code, name and rarity columns.",
            status_code=422,
        )


class IncompleteCardError(KnownError):
    """A submitted card is missing its code, English name or rarity."""

    def __init__(self, index: int, code: str):
        self.index = index
        self.code = code
        super().__init__(
            kind=FailureKind.INCOMPLETE_CARD,
            message=f"Incomplete card on line {index + 1}.",
            detail=f"Card {code!r} needs a code, an English name and a rarity",
            suggestion="Fix the highlighted line before saving.",
            status_code=400,
        )


class SeriesConflictError(KnownError):
    """A series with the same code and language is already stored."""

    def __init__(self, series_code: str, language: str):
        self.series_code = series_code
        self.language = language
        super().__init__(
            kind=FailureKind.SERIES_CONFLICT,
            message="This series already exists in the database.",
            detail=f"Series {series_code!r} ({language}) already stored",
            suggestion="Delete the existing series first to re-import it.",
            status_code=409,
        )


class SeriesNotFoundError(KnownError):
    """No series with the requested id."""

    def __init__(self, series_id: int):
        self.series_id = series_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message="Series not found.",
            detail=f"No series with id {series_id}",
            status_code=404,
        )


class CardRarityNotFoundError(KnownError):
    """No card-rarity link with the requested id."""

    def __init__(self, card_rarity_id: int):
        self.card_rarity_id = card_rarity_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message="Card version not found.",
            detail=f"No card-rarity link with id {card_rarity_id}",
            status_code=404,
        )
