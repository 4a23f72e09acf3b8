"""
Collection statistics endpoint.

Totals over every stored series: printings owned and missing, printings per
rarity, cards per artwork kind, series per language, and the best-completed
series.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from cardvault.db import collection_statistics
from cardvault.db.database import get_session

router = APIRouter(tags=["statistics"])


class SeriesProgressModel(BaseModel):
    id: int
    code: str
    name: str
    owned: int
    total: int
    completion: float


class CollectionStatisticsResponse(BaseModel):
    total_series: int
    total_cards: int
    total_versions: int
    owned_versions: int
    missing_versions: int
    completion_rate: float = Field(..., description="Owned share of printings, in percent")
    rarity_counts: dict[str, int]
    artwork_counts: dict[str, int]
    language_counts: dict[str, int]
    top_series: list[SeriesProgressModel]


@router.get("/statistics", response_model=CollectionStatisticsResponse)
async def get_statistics(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CollectionStatisticsResponse:
    """Collection-wide totals and breakdowns."""
    stats = await collection_statistics(session)
    return CollectionStatisticsResponse(
        total_series=stats.total_series,
        total_cards=stats.total_cards,
        total_versions=stats.total_versions,
        owned_versions=stats.owned_versions,
        missing_versions=stats.missing_versions,
        completion_rate=stats.completion_rate,
        rarity_counts=stats.rarity_counts,
        artwork_counts=stats.artwork_counts,
        language_counts=stats.language_counts,
        top_series=[
            SeriesProgressModel(
                id=p.series_id,
                code=p.code,
                name=p.name,
                owned=p.owned,
                total=p.total,
                completion=round(p.completion, 4),
            )
            for p in stats.top_series
        ],
    )
