from dataclasses import dataclass, field
from enum import Enum


class ArtworkKind(str, Enum):
    """Which artwork a printing uses."""

    NONE = "None"
    NEW = "New"
    ALTERNATIVE = "Alternative"


@dataclass(frozen=True, slots=True)
class RawTableRow:
    """
    One data row of a set card list, as scraped.

    Attributes:
        code: Card code cell text (e.g., "BLMM-FR001")
        english_name_raw: English name cell text, possibly quoted or annotated
        localized_name_raw: Localized name cell text
        rarity_labels: Link labels found in the rarity cell
        type_raw: Card type cell text
        extra_hint_raw: Optional trailing cell that may carry an artwork hint
    """

    code: str
    english_name_raw: str
    localized_name_raw: str
    rarity_labels: tuple[str, ...] = ()
    type_raw: str = ""
    extra_hint_raw: str | None = None


@dataclass(frozen=True, slots=True)
class CardEntry:
    """
    One (card x rarity) observation extracted from a table row.

    Attributes:
        code: Card code, trimmed, case preserved
        name_english: Cleaned English name with artwork annotation removed
        name_localized: Cleaned localized name
        rarity: Rarity label (never empty)
        type: Card type, may be empty
        artwork: Detected artwork kind
    """

    code: str
    name_english: str
    name_localized: str
    rarity: str
    type: str = ""
    artwork: ArtworkKind = ArtworkKind.NONE

    @property
    def is_complete(self) -> bool:
        """True if the entry can be submitted for persistence."""
        return bool(self.code.strip() and self.name_english.strip() and self.rarity.strip())


@dataclass
class CardGroup:
    """
    All rarities seen for one (code, artwork) pair within a batch.

    Names are the first values seen for the pair.
    """

    code: str
    name_english: str
    name_localized: str
    artwork: ArtworkKind
    rarities: set[str] = field(default_factory=set)

    @property
    def display_name(self) -> str:
        """Localized name first, English name as fallback."""
        return self.name_localized or self.name_english


@dataclass(frozen=True, slots=True)
class DuplicateCode:
    """A card code that appears on more than one entry."""

    code: str
    count: int


@dataclass
class BatchStatistics:
    """
    Informational statistics over a flat list of card entries.

    A non-zero duplicate count is advisory; it never blocks ingestion.
    """

    total_entries: int = 0
    unique_codes: int = 0
    duplicates: int = 0
    rarity_counts: dict[str, int] = field(default_factory=dict)
    artwork_counts: dict[ArtworkKind, int] = field(
        default_factory=lambda: {kind: 0 for kind in ArtworkKind}
    )
    duplicate_entries: list[DuplicateCode] = field(default_factory=list)

    @property
    def has_duplicates(self) -> bool:
        return self.duplicates > 0
