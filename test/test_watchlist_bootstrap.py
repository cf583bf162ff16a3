import os
import sys
import unittest
from pathlib import Path
from unittest.mock import AsyncMock, patch

_BACKEND_ROOT = Path(__file__).resolve().parents[1] / "backend"
if str(_BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(_BACKEND_ROOT))

from application.watchlist import WatchlistAggregateService
from config.database import get_postgres_dsn
from config.settings import _get_env_bool, _get_env_int
from domain.watchlist import Category, Series, User
from infrastructure.bootstrap import WatchlistStores, build_stores, build_watchlist_service
from infrastructure.persistence.postgres.series_catalog_store import (
    InMemorySeriesCatalog,
    PostgresSeriesCatalog,
)
from infrastructure.persistence.postgres.watch_list_store import PostgresWatchListStore


class TestEnvHelpers(unittest.TestCase):
    def test_int(self) -> None:
        with patch.dict(os.environ, {"WL_TEST_INT": "7"}):
            self.assertEqual(_get_env_int("WL_TEST_INT", 1), 7)
        with patch.dict(os.environ, {"WL_TEST_INT": ""}):
            self.assertEqual(_get_env_int("WL_TEST_INT", 1), 1)
        with patch.dict(os.environ, {"WL_TEST_INT": "seven"}):
            with self.assertRaises(ValueError):
                _get_env_int("WL_TEST_INT", 1)

    def test_bool(self) -> None:
        with patch.dict(os.environ, {"WL_TEST_BOOL": "Yes"}):
            self.assertTrue(_get_env_bool("WL_TEST_BOOL", False))
        with patch.dict(os.environ, {"WL_TEST_BOOL": "off"}):
            self.assertFalse(_get_env_bool("WL_TEST_BOOL", True))

    def test_dsn_from_parts(self) -> None:
        env = {"POSTGRES_DSN": "", "POSTGRES_HOST": "db", "POSTGRES_PORT": "6543", "POSTGRES_DB": "wl"}
        with patch.dict(os.environ, env):
            dsn = get_postgres_dsn()
        self.assertTrue(dsn.startswith("postgresql://"))
        self.assertTrue(dsn.endswith("@db:6543/wl"))

    def test_dsn_absent(self) -> None:
        with patch.dict(os.environ, {"POSTGRES_DSN": "", "POSTGRES_HOST": ""}):
            self.assertIsNone(get_postgres_dsn())


class TestBuildStores(unittest.IsolatedAsyncioTestCase):
    async def test_postgres_stores_share_one_lazy_pool(self):
        stores = build_stores(dsn="postgresql://u:p@localhost:5432/wl")
        self.assertIsInstance(stores.watch_lists, PostgresWatchListStore)
        self.assertIsInstance(stores.catalog, PostgresSeriesCatalog)
        self.assertIs(stores.watch_lists._shared, stores.entries._shared)
        self.assertIs(stores.pool, stores.entries._shared)
        # Nothing connected yet, so closing is a no-op.
        await stores.close()

    async def test_close_shuts_shared_pool_once(self):
        pool = AsyncMock()
        stores = build_stores(dsn=None)
        stores = WatchlistStores(
            users=stores.users,
            watch_lists=stores.watch_lists,
            entries=stores.entries,
            catalog=stores.catalog,
            pool=pool,
        )
        await stores.close()
        pool.close.assert_awaited_once()

    async def test_in_memory_service_end_to_end(self):
        stores = build_stores(dsn=None)
        self.assertIsInstance(stores.catalog, InMemorySeriesCatalog)
        wl = await stores.watch_lists.create()
        stores.users.add_user(User(id="u1", watch_list_id=wl.id))
        stores.catalog.add_series(Series(id="series-42"))

        service = build_watchlist_service(stores)
        self.assertIsInstance(service, WatchlistAggregateService)
        entry = await service.add_to_category(user_id="u1", category="watching", series_id="series-42")
        view = await service.get_watch_list(user_id="u1")
        self.assertEqual([i.id for i in view.sequence_for(Category.WATCHING)], [entry.id])
        await stores.close()


if __name__ == "__main__":
    unittest.main()
