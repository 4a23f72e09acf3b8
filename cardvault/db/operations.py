"""
Database CRUD operations.

Provides async functions for storing imported series and their cards,
and for tracking ownership of individual printings. Every function takes
the session explicitly; callers own the transaction.
"""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from cardvault.models.card import ArtworkKind, CardGroup
from cardvault.models.db import CardDB, CardRarityDB, LanguageDB, RarityDB, SeriesDB
from cardvault.models.failure import CardRarityNotFoundError, SeriesConflictError
from cardvault.models.language import LanguageCode
from cardvault.parsers.language import LANGUAGE_DEFINITIONS, get_language_label
from cardvault.services.aggregator import artwork_distribution

logger = logging.getLogger(__name__)

# --- Language Operations ---


async def get_or_create_language(session: AsyncSession, code: LanguageCode) -> LanguageDB:
    """Get the language row for a code, creating it on first use."""
    result = await session.execute(select(LanguageDB).where(LanguageDB.code == code.value))
    language = result.scalar_one_or_none()
    if language:
        return language

    language = LanguageDB(code=code.value, label=get_language_label(code))
    session.add(language)
    await session.flush()
    return language


async def seed_languages(session: AsyncSession) -> int:
    """
    Register every supported print language.

    Returns the number of languages added; 0 once all are present.
    """
    result = await session.execute(select(LanguageDB.code))
    existing = set(result.scalars().all())

    added = 0
    for definition in LANGUAGE_DEFINITIONS:
        if definition.code.value not in existing:
            session.add(LanguageDB(code=definition.code.value, label=definition.label))
            added += 1

    if added:
        await session.flush()
        logger.info("Registered %d languages", added)
    return added


# --- Series Operations ---


async def get_series_by_code(
    session: AsyncSession, code: str, language: LanguageCode
) -> SeriesDB | None:
    """Get a series by code and language. Returns None if not stored."""
    result = await session.execute(
        select(SeriesDB)
        .join(LanguageDB)
        .where(SeriesDB.code == code, LanguageDB.code == language.value)
    )
    return result.scalar_one_or_none()


async def get_series(session: AsyncSession, series_id: int) -> SeriesDB | None:
    """
    Get a series with its language, cards and printings loaded.

    Returns None if no series has this id.
    """
    result = await session.execute(
        select(SeriesDB)
        .where(SeriesDB.id == series_id)
        .options(
            selectinload(SeriesDB.language),
            selectinload(SeriesDB.cards)
            .selectinload(CardDB.rarities)
            .selectinload(CardRarityDB.rarity),
        )
    )
    return result.scalar_one_or_none()


async def list_series(session: AsyncSession) -> list[SeriesDB]:
    """All series ordered by name, with cards and printings loaded."""
    result = await session.execute(
        select(SeriesDB)
        .order_by(SeriesDB.name)
        .options(
            selectinload(SeriesDB.language),
            selectinload(SeriesDB.cards).selectinload(CardDB.rarities),
        )
    )
    return list(result.scalars().all())


async def delete_series(session: AsyncSession, series_id: int) -> bool:
    """
    Delete a series with its cards and printings.

    Returns True if deleted, False if not found.
    """
    series = await get_series(session, series_id)
    if not series:
        return False

    await session.delete(series)
    await session.flush()
    return True


# --- Card Operations ---


async def get_or_create_rarity(session: AsyncSession, name: str) -> RarityDB:
    """Get a rarity reference record by name, creating it if missing."""
    result = await session.execute(select(RarityDB).where(RarityDB.name == name))
    rarity = result.scalar_one_or_none()
    if rarity:
        return rarity

    rarity = RarityDB(name=name, sort_order=0)
    session.add(rarity)
    await session.flush()
    logger.info("Created rarity %s", name)
    return rarity


async def get_card(
    session: AsyncSession, series_id: int, code: str, artwork: ArtworkKind
) -> CardDB | None:
    """Get a card of a series by code and artwork."""
    result = await session.execute(
        select(CardDB).where(
            CardDB.series_id == series_id,
            CardDB.code == code,
            CardDB.artwork == artwork.value,
        )
    )
    return result.scalar_one_or_none()


async def upsert_card(session: AsyncSession, series: SeriesDB, group: CardGroup) -> CardDB:
    """
    Insert or update the card of a group.

    Cards are unique per (series, code, artwork).
    """
    existing = await get_card(session, series.id, group.code, group.artwork)

    if existing:
        existing.name = group.display_name
        existing.name_english = group.name_english
        existing.name_localized = group.name_localized
        await session.flush()
        return existing

    card = CardDB(
        series_id=series.id,
        code=group.code,
        name=group.display_name,
        name_english=group.name_english,
        name_localized=group.name_localized,
        artwork=group.artwork.value,
    )
    session.add(card)
    await session.flush()
    return card


async def link_card_rarity(session: AsyncSession, card: CardDB, rarity: RarityDB) -> bool:
    """
    Link a card to a rarity unless the link exists.

    Returns True if a link was created.
    """
    result = await session.execute(
        select(CardRarityDB).where(
            CardRarityDB.card_id == card.id,
            CardRarityDB.rarity_id == rarity.id,
        )
    )
    if result.scalar_one_or_none():
        return False

    session.add(CardRarityDB(card_id=card.id, rarity_id=rarity.id, owned=False, condition="NM"))
    await session.flush()
    return True


async def store_card_group(
    session: AsyncSession,
    series: SeriesDB,
    group: CardGroup,
    rarities: dict[str, RarityDB] | None = None,
) -> int:
    """
    Store one card group: its card and a link per rarity.

    Idempotent: storing the same group twice creates no new links.
    Returns the number of links created.
    """
    card = await upsert_card(session, series, group)

    created = 0
    for rarity_name in sorted(group.rarities):
        rarity = (rarities or {}).get(rarity_name) or await get_or_create_rarity(
            session, rarity_name
        )
        if await link_card_rarity(session, card, rarity):
            created += 1

    return created


@dataclass
class SaveSeriesResult:
    """Outcome of saving an imported series."""

    series_id: int
    series_code: str
    language: LanguageCode
    cards_added: int
    rarities_processed: int
    relations_created: int
    original_entry_count: int


async def save_series(
    session: AsyncSession,
    *,
    series_code: str,
    series_name: str,
    source_url: str | None,
    language: LanguageCode,
    groups: list[CardGroup],
    entry_count: int,
) -> SaveSeriesResult:
    """
    Create a series with its cards, rarities and card-rarity links.

    Args:
        session: Database session (caller commits)
        series_code: Series code (e.g., "BLMM")
        series_name: Display name
        source_url: Page the cards were imported from
        language: Print language of the series
        groups: Unique (code, artwork) cards
        entry_count: Number of (card x rarity) entries before grouping

    Raises:
        SeriesConflictError: If the series already exists in this language
    """
    if await get_series_by_code(session, series_code, language):
        raise SeriesConflictError(series_code, language.value)

    language_row = await get_or_create_language(session, language)
    series = SeriesDB(
        code=series_code,
        name=series_name,
        source_url=source_url,
        total_cards=entry_count,
        language_id=language_row.id,
    )
    session.add(series)
    await session.flush()
    logger.info("Created series %s (%s) id=%d", series_code, language.value, series.id)

    rarity_names = sorted({name for group in groups for name in group.rarities})
    rarities = {name: await get_or_create_rarity(session, name) for name in rarity_names}

    relations = 0
    for group in groups:
        relations += await store_card_group(session, series, group, rarities)

    distribution = artwork_distribution(groups)
    logger.info(
        "Stored %d unique cards from %d entries, %d rarities, %d links; artworks %s",
        len(groups),
        entry_count,
        len(rarity_names),
        relations,
        {kind.value: count for kind, count in distribution.items()},
    )

    return SaveSeriesResult(
        series_id=series.id,
        series_code=series_code,
        language=language,
        cards_added=len(groups),
        rarities_processed=len(rarity_names),
        relations_created=relations,
        original_entry_count=entry_count,
    )


# --- Ownership Operations ---


async def update_card_rarity_ownership(
    session: AsyncSession,
    card_rarity_id: int,
    *,
    owned: bool,
    condition: str | None = None,
    purchase_price: float | None = None,
    notes: str | None = None,
) -> CardRarityDB:
    """
    Mark a printing as owned or not owned.

    The acquisition date is set when owned and cleared otherwise.

    Raises:
        CardRarityNotFoundError: If no printing has this id
    """
    result = await session.execute(
        select(CardRarityDB)
        .where(CardRarityDB.id == card_rarity_id)
        .options(selectinload(CardRarityDB.card), selectinload(CardRarityDB.rarity))
    )
    link = result.scalar_one_or_none()
    if link is None:
        raise CardRarityNotFoundError(card_rarity_id)

    link.owned = owned
    link.acquired_at = datetime.now(UTC) if owned else None
    link.condition = condition or "NM"
    link.purchase_price = purchase_price
    link.notes = notes or None
    await session.flush()

    logger.info(
        "Card %s (%s) %s collection",
        link.card.code,
        link.rarity.name,
        "added to" if owned else "removed from",
    )
    return link


@dataclass
class SeriesStats:
    """Collection progress of a series."""

    card_count: int = 0
    total_versions: int = 0
    owned_versions: int = 0
    artwork_counts: dict[str, int] = field(default_factory=dict)

    @property
    def completion_rate(self) -> float:
        """Owned share of printings, in percent with one decimal."""
        if self.total_versions == 0:
            return 0.0
        return round(self.owned_versions / self.total_versions * 100, 1)


def series_stats(series: SeriesDB) -> SeriesStats:
    """Compute progress stats of a series loaded with cards and printings."""
    stats = SeriesStats(card_count=len(series.cards))
    for card in series.cards:
        stats.artwork_counts[card.artwork] = stats.artwork_counts.get(card.artwork, 0) + 1
        stats.total_versions += len(card.rarities)
        stats.owned_versions += sum(1 for link in card.rarities if link.owned)
    return stats


# --- Collection Statistics ---

# Number of best-completed series reported
TOP_SERIES_LIMIT = 5


@dataclass
class SeriesProgress:
    series_id: int
    code: str
    name: str
    owned: int
    total: int

    @property
    def completion(self) -> float:
        """Owned share of printings (0.0-1.0)."""
        return self.owned / self.total if self.total else 0.0


@dataclass
class CollectionStats:
    """Totals across every stored series."""

    total_series: int = 0
    total_cards: int = 0
    total_versions: int = 0
    owned_versions: int = 0
    rarity_counts: dict[str, int] = field(default_factory=dict)
    artwork_counts: dict[str, int] = field(default_factory=dict)
    language_counts: dict[str, int] = field(default_factory=dict)
    top_series: list[SeriesProgress] = field(default_factory=list)

    @property
    def missing_versions(self) -> int:
        return max(self.total_versions - self.owned_versions, 0)

    @property
    def completion_rate(self) -> float:
        """Owned share of printings, in percent with one decimal."""
        if self.total_versions == 0:
            return 0.0
        return round(self.owned_versions / self.total_versions * 100, 1)


async def _count(session: AsyncSession, statement: Select) -> int:
    result = await session.execute(statement)
    return result.scalar_one()


async def _grouped_counts(session: AsyncSession, statement: Select) -> dict[str, int]:
    """Label -> count rows, largest count first."""
    result = await session.execute(statement)
    rows = sorted(result.all(), key=lambda row: (-row[1], row[0]))
    return {label: count for label, count in rows}


async def collection_statistics(session: AsyncSession) -> CollectionStats:
    """
    Compute collection-wide statistics.

    Rarity counts are printings per rarity, artwork counts are cards per
    artwork kind (all kinds present), language counts are series per language.
    Top series are the five best-completed series that have printings.
    """
    stats = CollectionStats(
        total_series=await _count(session, select(func.count()).select_from(SeriesDB)),
        total_cards=await _count(session, select(func.count()).select_from(CardDB)),
        total_versions=await _count(session, select(func.count()).select_from(CardRarityDB)),
        owned_versions=await _count(
            session,
            select(func.count()).select_from(CardRarityDB).where(CardRarityDB.owned.is_(True)),
        ),
    )

    stats.rarity_counts = await _grouped_counts(
        session,
        select(RarityDB.name, func.count(CardRarityDB.id))
        .join(CardRarityDB, CardRarityDB.rarity_id == RarityDB.id)
        .group_by(RarityDB.name),
    )
    artworks = await _grouped_counts(
        session, select(CardDB.artwork, func.count(CardDB.id)).group_by(CardDB.artwork)
    )
    stats.artwork_counts = {kind.value: artworks.get(kind.value, 0) for kind in ArtworkKind}
    stats.language_counts = await _grouped_counts(
        session,
        select(LanguageDB.code, func.count(SeriesDB.id))
        .join(SeriesDB, SeriesDB.language_id == LanguageDB.id)
        .group_by(LanguageDB.code),
    )

    progress = []
    for series in await list_series(session):
        series_progress = series_stats(series)
        if series_progress.total_versions:
            progress.append(
                SeriesProgress(
                    series_id=series.id,
                    code=series.code,
                    name=series.name,
                    owned=series_progress.owned_versions,
                    total=series_progress.total_versions,
                )
            )
    progress.sort(key=lambda p: p.completion, reverse=True)
    stats.top_series = progress[:TOP_SERIES_LIMIT]

    return stats
