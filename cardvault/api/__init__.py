from cardvault.api.cards import router as cards_router
from cardvault.api.series import router as series_router
from cardvault.api.statistics import router as statistics_router

__all__ = [
    "cards_router",
    "series_router",
    "statistics_router",
]
