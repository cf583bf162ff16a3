from domain.watchlist.category import ALL_CATEGORIES, Category
from domain.watchlist.entities import Series, SeriesStateEntry, User, WatchList
from domain.watchlist.errors import (
    DuplicateSeriesError,
    InvalidCategoryError,
    InvalidSeriesError,
    NotFoundError,
    WatchlistError,
    to_error_payload,
)
from domain.watchlist.views import DenormalizedWatchList, PopulatedSeriesState

__all__ = [
    "ALL_CATEGORIES",
    "Category",
    "DenormalizedWatchList",
    "DuplicateSeriesError",
    "InvalidCategoryError",
    "InvalidSeriesError",
    "NotFoundError",
    "PopulatedSeriesState",
    "Series",
    "SeriesStateEntry",
    "User",
    "WatchList",
    "WatchlistError",
    "to_error_payload",
]
