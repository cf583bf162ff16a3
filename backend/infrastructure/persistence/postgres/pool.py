from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


class PostgresPool:
    """Lazily created asyncpg pool shared by the watchlist stores."""

    def __init__(self, *, dsn: str, min_size: int = 1, max_size: int = 5) -> None:
        self._dsn = dsn
        self._min_size = min_size
        self._max_size = max_size
        self._pool: Optional[Any] = None
        self._pool_lock = asyncio.Lock()

    async def get(self):
        if self._pool is not None:
            return self._pool
        async with self._pool_lock:
            if self._pool is not None:
                return self._pool
            import asyncpg  # type: ignore

            self._pool = await asyncpg.create_pool(
                self._dsn,
                min_size=self._min_size,
                max_size=self._max_size,
                ssl=False,
            )
            logger.info("PostgreSQL watchlist pool initialized")
            return self._pool

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
        self._pool = None


class PostgresStoreBase:
    """Acquires the shared pool and runs `_ensure_schema` once per store."""

    def __init__(self, *, pool: PostgresPool) -> None:
        self._shared = pool
        self._schema_ready = False
        self._schema_lock = asyncio.Lock()

    async def _get_pool(self):
        pool = await self._shared.get()
        if self._schema_ready:
            return pool
        async with self._schema_lock:
            if not self._schema_ready:
                async with pool.acquire() as conn:
                    await self._ensure_schema(conn)
                self._schema_ready = True
        return pool

    async def _ensure_schema(self, conn) -> None:
        return None

    async def close(self) -> None:
        # The shared pool is closed by its owner, not by individual stores.
        return None
