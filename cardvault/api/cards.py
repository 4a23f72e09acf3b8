"""
Card list preview endpoints.

Fetch a Yugipedia set card list (or take pasted table markup), extract the
card entries and return them with grouping, statistics and the detected
language so they can be reviewed and corrected before saving.
"""

import logging

import httpx
from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from cardvault.api.schemas import (
    CardEntryModel,
    CardGroupModel,
    LanguageDetectionModel,
    StatisticsModel,
)
from cardvault.parsers.language import LANGUAGE_OPTIONS
from cardvault.scrapers.yugipedia import fetch_card_table
from cardvault.services.ingestion import IngestionResult, ingest_html
from cardvault.services.series_naming import extract_series_name_from_url

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cards", tags=["cards"])


class FetchCardsRequest(BaseModel):
    """Request model for fetching a card list page."""

    url: str = Field(
        ...,
        description="Yugipedia set card list URL",
        examples=["https://yugipedia.com/wiki/Set_Card_Lists:Battles_of_Legend:_Monster_Mayhem_(TCG-FR)"],
    )


class ParseCardsRequest(BaseModel):
    """Request model for parsing pasted table markup."""

    html: str = Field(..., description="Card table markup (<table> or <tbody>)")


class CardListPreview(BaseModel):
    """Extracted card list, ready for review."""

    url: str | None = None
    series_code: str
    series_name: str
    cards: list[CardEntryModel]
    groups: list[CardGroupModel]
    cards_count: int
    unique_codes: int
    statistics: StatisticsModel
    language: LanguageDetectionModel


class LanguageOption(BaseModel):
    code: str
    label: str


def _preview(result: IngestionResult, url: str | None) -> CardListPreview:
    series_name = extract_series_name_from_url(url or "") or f"Series {result.series_code}"
    return CardListPreview(
        url=url,
        series_code=result.series_code,
        series_name=series_name,
        cards=[CardEntryModel.from_entry(e) for e in result.entries],
        groups=[CardGroupModel.from_group(g) for g in result.groups.values()],
        cards_count=result.statistics.total_entries,
        unique_codes=result.statistics.unique_codes,
        statistics=StatisticsModel.from_statistics(result.statistics),
        language=LanguageDetectionModel.from_result(result.language),
    )


@router.post("/fetch", response_model=CardListPreview)
async def fetch_cards(request: FetchCardsRequest) -> CardListPreview:
    """
    Fetch a set card list page and extract its cards.

    Fails with 400 for URLs outside Yugipedia, 404 if the page has no table,
    422 if no card could be extracted, 502/504 if the page cannot be fetched.
    """
    try:
        table_html = await fetch_card_table(request.url)
    except httpx.HTTPError as e:
        logger.error("Network error fetching %s: %s", request.url, e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Unable to retrieve data from this URL.",
        ) from e

    return _preview(ingest_html(table_html), request.url.strip())


@router.post("/parse", response_model=CardListPreview)
async def parse_cards(request: ParseCardsRequest) -> CardListPreview:
    """
    Extract cards from pasted table markup.

    Fails with 422 if no card could be extracted.
    """
    return _preview(ingest_html(request.html), None)


@router.get("/languages", response_model=list[LanguageOption])
async def get_languages() -> list[LanguageOption]:
    """Languages a series can be stored under."""
    return [LanguageOption(**option) for option in LANGUAGE_OPTIONS]
