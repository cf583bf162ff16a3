from __future__ import annotations

import logging

from application.ports.series_catalog_port import SeriesCatalogPort
from application.ports.series_state_store_port import SeriesStateStorePort
from domain.watchlist import (
    ALL_CATEGORIES,
    DenormalizedWatchList,
    PopulatedSeriesState,
    WatchList,
)

logger = logging.getLogger(__name__)


async def build_denormalized_watch_list(
    *,
    user_id: str,
    watch_list: WatchList,
    entries: SeriesStateStorePort,
    catalog: SeriesCatalogPort,
) -> DenormalizedWatchList:
    """Expand every reference of `watch_list` into entry + series, keeping stored order."""
    ids = watch_list.all_entry_ids()
    records = await entries.find_many(entry_ids=ids) if ids else []
    by_id = {r.id: r for r in records}

    series_ids = sorted({r.series_id for r in records})
    series_by_id = await catalog.find_many(series_ids=series_ids) if series_ids else {}

    sequences = {}
    for category in ALL_CATEGORIES:
        items = []
        for entry_id in watch_list.sequence_for(category):
            record = by_id.get(entry_id)
            if record is None:
                logger.warning(
                    "Skipping dangling series state %s in %s of watchlist %s",
                    entry_id,
                    category.value,
                    watch_list.id,
                )
                continue
            items.append(PopulatedSeriesState(entry=record, series=series_by_id.get(record.series_id)))
        sequences[category] = tuple(items)

    return DenormalizedWatchList(watch_list_id=watch_list.id, user_id=str(user_id), sequences=sequences)
