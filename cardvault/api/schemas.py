"""
Request and response models shared by the API routers.
"""

from pydantic import BaseModel, Field

from cardvault.models.card import ArtworkKind, BatchStatistics, CardEntry, CardGroup
from cardvault.models.language import LanguageDetectionResult
from cardvault.parsers.artwork import detect_artwork


class CardEntryModel(BaseModel):
    """One (card x rarity) entry, as previewed and submitted."""

    code: str
    name_english: str = ""
    name_localized: str = ""
    rarity: str = ""
    type: str = ""
    artwork: ArtworkKind | None = Field(
        default=None, description="Detected from the code suffix when omitted"
    )

    @classmethod
    def from_entry(cls, entry: CardEntry) -> "CardEntryModel":
        return cls(
            code=entry.code,
            name_english=entry.name_english,
            name_localized=entry.name_localized,
            rarity=entry.rarity,
            type=entry.type,
            artwork=entry.artwork,
        )

    def to_entry(self) -> CardEntry:
        code = self.code.strip()
        return CardEntry(
            code=code,
            name_english=self.name_english.strip(),
            name_localized=self.name_localized.strip(),
            rarity=self.rarity.strip(),
            type=self.type.strip(),
            artwork=self.artwork if self.artwork is not None else detect_artwork(code).artwork,
        )


class CardGroupModel(BaseModel):
    """A unique (code, artwork) card with all its rarities."""

    code: str
    name_english: str
    name_localized: str
    artwork: ArtworkKind
    rarities: list[str]

    @classmethod
    def from_group(cls, group: CardGroup) -> "CardGroupModel":
        return cls(
            code=group.code,
            name_english=group.name_english,
            name_localized=group.name_localized,
            artwork=group.artwork,
            rarities=sorted(group.rarities),
        )


class DuplicateCodeModel(BaseModel):
    code: str
    count: int


class StatisticsModel(BaseModel):
    """Batch statistics over the flat entry list."""

    total_entries: int
    unique_codes: int
    duplicates: int
    rarity_counts: dict[str, int] = Field(default_factory=dict)
    artwork_counts: dict[str, int] = Field(default_factory=dict)
    duplicate_entries: list[DuplicateCodeModel] = Field(default_factory=list)

    @classmethod
    def from_statistics(cls, stats: BatchStatistics) -> "StatisticsModel":
        return cls(
            total_entries=stats.total_entries,
            unique_codes=stats.unique_codes,
            duplicates=stats.duplicates,
            rarity_counts=dict(stats.rarity_counts),
            artwork_counts={kind.value: count for kind, count in stats.artwork_counts.items()},
            duplicate_entries=[
                DuplicateCodeModel(code=d.code, count=d.count) for d in stats.duplicate_entries
            ],
        )


class LanguageDetectionModel(BaseModel):
    code: str | None
    matches: int
    total: int
    confidence: float

    @classmethod
    def from_result(cls, result: LanguageDetectionResult) -> "LanguageDetectionModel":
        return cls(
            code=result.code.value if result.code else None,
            matches=result.matches,
            total=result.total,
            confidence=result.confidence,
        )
