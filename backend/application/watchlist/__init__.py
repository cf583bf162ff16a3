from application.watchlist.schemas import SeriesStatePayload
from application.watchlist.service import WatchlistAggregateService

__all__ = ["SeriesStatePayload", "WatchlistAggregateService"]
