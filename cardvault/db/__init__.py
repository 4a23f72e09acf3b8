from cardvault.db.database import get_session, init_db
from cardvault.db.operations import (
    CollectionStats,
    SaveSeriesResult,
    SeriesProgress,
    SeriesStats,
    collection_statistics,
    delete_series,
    get_card,
    get_or_create_language,
    get_or_create_rarity,
    get_series,
    get_series_by_code,
    link_card_rarity,
    list_series,
    save_series,
    seed_languages,
    series_stats,
    store_card_group,
    update_card_rarity_ownership,
    upsert_card,
)

__all__ = [
    "CollectionStats",
    "SaveSeriesResult",
    "SeriesProgress",
    "SeriesStats",
    "collection_statistics",
    "delete_series",
    "get_card",
    "get_or_create_language",
    "get_or_create_rarity",
    "get_series",
    "get_series_by_code",
    "get_session",
    "init_db",
    "link_card_rarity",
    "list_series",
    "save_series",
    "seed_languages",
    "series_stats",
    "store_card_group",
    "update_card_rarity_ownership",
    "upsert_card",
]
