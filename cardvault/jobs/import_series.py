"""
Import a set card list from the command line.

Fetches a Yugipedia "Set_Card_Lists" page, extracts the cards and saves
them as a new series:

    cardvault-import "https://yugipedia.com/wiki/Set_Card_Lists:..._(TCG-FR)"
    cardvault-import URL --language FR --dry-run
"""

import argparse
import asyncio
import logging

from cardvault.db.database import async_session_factory, init_db
from cardvault.db.operations import SaveSeriesResult, save_series
from cardvault.models.failure import KnownError
from cardvault.scrapers.yugipedia import fetch_card_table
from cardvault.services.ingestion import IngestionResult, ingest_html, resolve_series_language
from cardvault.services.series_naming import extract_series_name_from_url

logger = logging.getLogger(__name__)


def log_summary(result: IngestionResult) -> None:
    """Log batch statistics of an extracted card list."""
    stats = result.statistics
    logger.info(
        "%d entries, %d unique codes, %d unique cards, %d duplicate entries",
        stats.total_entries,
        stats.unique_codes,
        len(result.groups),
        stats.duplicates,
    )
    logger.info("Rarities: %s", stats.rarity_counts)
    logger.info("Artworks: %s", {kind.value: count for kind, count in stats.artwork_counts.items()})
    logger.info(
        "Language: %s (%d/%d codes, confidence %.2f)",
        result.language.code.value if result.language.code else "unknown",
        result.language.matches,
        result.language.total,
        result.language.confidence,
    )


async def import_series(
    url: str,
    series_code: str | None = None,
    series_name: str | None = None,
    language: str | None = None,
    dry_run: bool = False,
) -> SaveSeriesResult | None:
    """
    Fetch, parse and save one series.

    Args:
        url: Yugipedia set card list URL
        series_code: Overrides the code derived from the first card
        series_name: Overrides the name derived from the URL
        language: Overrides the language detected from the card codes
        dry_run: Parse and report only, do not touch the database

    Returns:
        SaveSeriesResult, or None on a dry run

    Raises:
        KnownError: On fetch, parse or conflict failures
    """
    table_html = await fetch_card_table(url)
    result = ingest_html(table_html)
    log_summary(result)

    code = (series_code or "").strip().upper() or result.series_code
    name = series_name or extract_series_name_from_url(url) or f"Series {code}"
    series_language = resolve_series_language(language, result.language)

    if dry_run:
        logger.info("Dry run: would save %s '%s' (%s)", code, name, series_language.value)
        return None

    await init_db()
    async with async_session_factory() as session:
        saved = await save_series(
            session,
            series_code=code,
            series_name=name,
            source_url=url,
            language=series_language,
            groups=list(result.groups.values()),
            entry_count=len(result.entries),
        )
        await session.commit()

    logger.info(
        "Saved series %s '%s': %d cards, %d links",
        saved.series_code,
        name,
        saved.cards_added,
        saved.relations_created,
    )
    return saved


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Import a Yugipedia set card list")
    parser.add_argument("url", help="Set_Card_Lists page URL")
    parser.add_argument("--series-code", help="Series code (default: derived from card codes)")
    parser.add_argument("--series-name", help="Series name (default: derived from URL)")
    parser.add_argument("--language", help="Language code (default: detected from card codes)")
    parser.add_argument("--dry-run", action="store_true", help="Parse only, do not save")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for importing a series."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = build_parser().parse_args(argv)

    try:
        asyncio.run(
            import_series(
                args.url,
                series_code=args.series_code,
                series_name=args.series_name,
                language=args.language,
                dry_run=args.dry_run,
            )
        )
    except KnownError as e:
        logger.error("%s %s", e.message, e.detail or "")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
