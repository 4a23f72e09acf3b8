"""
Series API endpoints.

Save a reviewed card list as a series, list and inspect stored series,
delete a series, and track ownership of individual printings.
"""

import logging
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from cardvault.api.schemas import CardEntryModel
from cardvault.db import (
    delete_series,
    get_series,
    list_series,
    save_series,
    series_stats,
    update_card_rarity_ownership,
)
from cardvault.db.database import get_session
from cardvault.models.failure import SeriesNotFoundError
from cardvault.services.ingestion import (
    resolve_series_language,
    summarize_entries,
    validate_submission,
)
from cardvault.services.series_naming import extract_series_name_from_url

logger = logging.getLogger(__name__)

router = APIRouter(tags=["series"])


class SaveSeriesRequest(BaseModel):
    """Request model for saving a reviewed card list."""

    cards: list[CardEntryModel]
    source_url: str | None = None
    series_code: str | None = Field(
        default=None, description="Derived from the first card code when omitted"
    )
    series_name: str | None = Field(
        default=None, description="Derived from the source URL when omitted"
    )
    language: str | None = Field(
        default=None, description="Language code or alias; detected from card codes when omitted"
    )


class SaveSeriesResponse(BaseModel):
    series_id: int
    series_code: str
    series_name: str
    language: str
    cards_added: int
    rarities_processed: int
    relations_created: int
    original_data_count: int


class SeriesSummary(BaseModel):
    id: int
    code: str
    name: str
    language: str
    source_url: str | None = None
    created_at: datetime | None = None
    total_cards: int
    card_count: int
    total_versions: int
    owned_versions: int
    completion_rate: float
    artwork_counts: dict[str, int] = Field(default_factory=dict)


class PrintingModel(BaseModel):
    id: int
    rarity: str
    owned: bool
    condition: str
    purchase_price: float | None = None
    notes: str | None = None
    acquired_at: datetime | None = None


class CardModel(BaseModel):
    id: int
    code: str
    name: str
    name_english: str
    name_localized: str
    artwork: str
    printings: list[PrintingModel]


class SeriesDetail(SeriesSummary):
    cards: list[CardModel]


class OwnershipUpdateRequest(BaseModel):
    owned: bool
    condition: str | None = None
    purchase_price: float | None = Field(default=None, ge=0)
    notes: str | None = None


def _validate_series_id(series_id: int) -> None:
    if series_id <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid series id.",
        )


@router.post("/series", response_model=SaveSeriesResponse, status_code=status.HTTP_201_CREATED)
async def create_series(
    request: SaveSeriesRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> SaveSeriesResponse:
    """
    Save a reviewed card list as a new series.

    Cards are grouped by (code, artwork) and linked to every rarity seen.
    Fails with 400 for incomplete cards and 409 if the series already
    exists in this language.
    """
    entries = [card.to_entry() for card in request.cards]
    validate_submission(entries)

    result = summarize_entries(entries)
    language = resolve_series_language(request.language, result.language)
    series_code = (request.series_code or "").strip().upper() or result.series_code
    series_name = (
        (request.series_name or "").strip()
        or extract_series_name_from_url(request.source_url or "")
        or f"Series {series_code}"
    )

    saved = await save_series(
        session,
        series_code=series_code,
        series_name=series_name,
        source_url=request.source_url,
        language=language,
        groups=list(result.groups.values()),
        entry_count=len(entries),
    )

    return SaveSeriesResponse(
        series_id=saved.series_id,
        series_code=saved.series_code,
        series_name=series_name,
        language=saved.language.value,
        cards_added=saved.cards_added,
        rarities_processed=saved.rarities_processed,
        relations_created=saved.relations_created,
        original_data_count=saved.original_entry_count,
    )


@router.get("/series", response_model=list[SeriesSummary])
async def get_all_series(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> list[SeriesSummary]:
    """List stored series with collection progress, ordered by name."""
    summaries: list[SeriesSummary] = []
    for series in await list_series(session):
        stats = series_stats(series)
        summaries.append(
            SeriesSummary(
                id=series.id,
                code=series.code,
                name=series.name,
                language=series.language.code,
                source_url=series.source_url,
                created_at=series.created_at,
                total_cards=series.total_cards,
                card_count=stats.card_count,
                total_versions=stats.total_versions,
                owned_versions=stats.owned_versions,
                completion_rate=stats.completion_rate,
                artwork_counts=stats.artwork_counts,
            )
        )
    return summaries


@router.get("/series/{series_id}", response_model=SeriesDetail)
async def get_series_detail(
    series_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> SeriesDetail:
    """
    Get a series with its cards and printings.

    Returns 404 if series not found.
    """
    _validate_series_id(series_id)
    series = await get_series(session, series_id)
    if series is None:
        raise SeriesNotFoundError(series_id)

    stats = series_stats(series)
    cards = [
        CardModel(
            id=card.id,
            code=card.code,
            name=card.name,
            name_english=card.name_english,
            name_localized=card.name_localized,
            artwork=card.artwork,
            printings=[
                PrintingModel(
                    id=link.id,
                    rarity=link.rarity.name,
                    owned=link.owned,
                    condition=link.condition,
                    purchase_price=link.purchase_price,
                    notes=link.notes,
                    acquired_at=link.acquired_at,
                )
                for link in card.rarities
            ],
        )
        for card in sorted(series.cards, key=lambda c: (c.code, c.artwork))
    ]

    return SeriesDetail(
        id=series.id,
        code=series.code,
        name=series.name,
        language=series.language.code,
        source_url=series.source_url,
        created_at=series.created_at,
        total_cards=series.total_cards,
        card_count=stats.card_count,
        total_versions=stats.total_versions,
        owned_versions=stats.owned_versions,
        completion_rate=stats.completion_rate,
        artwork_counts=stats.artwork_counts,
        cards=cards,
    )


@router.delete("/series/{series_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_series(
    series_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> None:
    """
    Delete a series with its cards and printings.

    Returns 400 for a non-positive id, 404 if series not found.
    """
    _validate_series_id(series_id)
    if not await delete_series(session, series_id):
        raise SeriesNotFoundError(series_id)
    logger.info("Deleted series %d", series_id)


@router.patch("/card-rarities/{card_rarity_id}", response_model=PrintingModel)
async def update_ownership(
    card_rarity_id: int,
    request: OwnershipUpdateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PrintingModel:
    """
    Mark a printing as owned or not owned.

    Returns 404 if the printing does not exist.
    """
    link = await update_card_rarity_ownership(
        session,
        card_rarity_id,
        owned=request.owned,
        condition=request.condition,
        purchase_price=request.purchase_price,
        notes=request.notes,
    )
    return PrintingModel(
        id=link.id,
        rarity=link.rarity.name,
        owned=link.owned,
        condition=link.condition,
        purchase_price=link.purchase_price,
        notes=link.notes,
        acquired_at=link.acquired_at,
    )
