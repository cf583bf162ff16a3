from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Optional

from application.ports.series_catalog_port import SeriesCatalogPort
from application.ports.series_state_store_port import SeriesStateStorePort
from application.ports.user_store_port import UserStorePort
from application.ports.watch_list_store_port import WatchListStorePort
from application.users import UserDirectoryService
from application.watchlist import WatchlistAggregateService
from application.watchlist.locks import UserLockRegistry
from config.settings import (
    SERIES_CATALOG_TABLE,
    WATCHLIST_PURGE_REMOVED_ENTRIES,
    WATCHLIST_SERIALIZE_PER_USER,
    WATCHLIST_STRICT_UPDATE,
)

if TYPE_CHECKING:
    from infrastructure.persistence.postgres.pool import PostgresPool

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WatchlistStores:
    users: UserStorePort
    watch_lists: WatchListStorePort
    entries: SeriesStateStorePort
    catalog: SeriesCatalogPort
    # Shared by the Postgres stores; None for in-memory stores.
    pool: Optional["PostgresPool"] = None

    async def close(self) -> None:
        for store in (self.users, self.watch_lists, self.entries, self.catalog):
            await store.close()
        if self.pool is not None:
            await self.pool.close()


def build_stores(*, dsn: Optional[str] = None) -> WatchlistStores:
    """Postgres stores sharing one pool when `dsn` is set, in-memory stores otherwise."""
    if dsn:
        from config.database import POSTGRES_POOL_MAX_SIZE, POSTGRES_POOL_MIN_SIZE
        from infrastructure.persistence.postgres.pool import PostgresPool
        from infrastructure.persistence.postgres.series_catalog_store import PostgresSeriesCatalog
        from infrastructure.persistence.postgres.series_state_store import PostgresSeriesStateStore
        from infrastructure.persistence.postgres.user_store import PostgresUserStore
        from infrastructure.persistence.postgres.watch_list_store import PostgresWatchListStore

        pool = PostgresPool(dsn=dsn, min_size=POSTGRES_POOL_MIN_SIZE, max_size=POSTGRES_POOL_MAX_SIZE)
        return WatchlistStores(
            users=PostgresUserStore(pool=pool),
            watch_lists=PostgresWatchListStore(pool=pool),
            entries=PostgresSeriesStateStore(pool=pool),
            catalog=PostgresSeriesCatalog(pool=pool, table=SERIES_CATALOG_TABLE),
            pool=pool,
        )

    from infrastructure.persistence.postgres.series_catalog_store import InMemorySeriesCatalog
    from infrastructure.persistence.postgres.series_state_store import InMemorySeriesStateStore
    from infrastructure.persistence.postgres.user_store import InMemoryUserStore
    from infrastructure.persistence.postgres.watch_list_store import InMemoryWatchListStore

    logger.info("POSTGRES_DSN not configured; using in-memory watchlist stores")
    return WatchlistStores(
        users=InMemoryUserStore(),
        watch_lists=InMemoryWatchListStore(),
        entries=InMemorySeriesStateStore(),
        catalog=InMemorySeriesCatalog(),
    )


def build_watchlist_service(stores: WatchlistStores) -> WatchlistAggregateService:
    return WatchlistAggregateService(
        users=stores.users,
        watch_lists=stores.watch_lists,
        entries=stores.entries,
        catalog=stores.catalog,
        locks=UserLockRegistry(enabled=WATCHLIST_SERIALIZE_PER_USER),
        strict_update=WATCHLIST_STRICT_UPDATE,
        purge_removed_entries=WATCHLIST_PURGE_REMOVED_ENTRIES,
    )


@lru_cache(maxsize=1)
def get_stores() -> WatchlistStores:
    from config.database import get_postgres_dsn

    return build_stores(dsn=get_postgres_dsn())


@lru_cache(maxsize=1)
def get_watchlist_service() -> WatchlistAggregateService:
    return build_watchlist_service(get_stores())


@lru_cache(maxsize=1)
def get_user_directory_service() -> UserDirectoryService:
    return UserDirectoryService(users=get_stores().users)
