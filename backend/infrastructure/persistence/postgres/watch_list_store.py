from __future__ import annotations

import logging
from typing import Dict, Optional
from uuid import UUID, uuid4

from application.ports.watch_list_store_port import WatchListStorePort
from domain.watchlist import ALL_CATEGORIES, Category, WatchList
from infrastructure.persistence.postgres.pool import PostgresStoreBase

logger = logging.getLogger(__name__)

_COLUMNS = ", ".join(c.column for c in ALL_CATEGORIES)


class InMemoryWatchListStore(WatchListStorePort):
    """In-memory watchlist store for dev/tests when Postgres is not configured."""

    def __init__(self) -> None:
        self._lists: Dict[UUID, WatchList] = {}

    async def create(self, *, watch_list_id: Optional[UUID] = None) -> WatchList:
        wl = WatchList(id=watch_list_id or uuid4())
        self._lists[wl.id] = wl
        return wl

    async def find_by_id(self, *, watch_list_id: UUID) -> Optional[WatchList]:
        return self._lists.get(watch_list_id)

    async def contains(self, *, watch_list_id: UUID, category: Category, entry_id: UUID) -> bool:
        wl = self._lists.get(watch_list_id)
        return bool(wl and wl.contains(category, entry_id))

    async def append(self, *, watch_list_id: UUID, category: Category, entry_id: UUID) -> None:
        wl = self._lists.get(watch_list_id)
        if wl is None:
            return None
        self._lists[watch_list_id] = wl.with_sequence(category, wl.sequence_for(category) + (entry_id,))

    async def remove(self, *, watch_list_id: UUID, category: Category, entry_id: UUID) -> bool:
        wl = self._lists.get(watch_list_id)
        if wl is None or not wl.contains(category, entry_id):
            return False
        refs = tuple(r for r in wl.sequence_for(category) if r != entry_id)
        self._lists[watch_list_id] = wl.with_sequence(category, refs)
        return True

    async def move(
        self,
        *,
        watch_list_id: UUID,
        source: Category,
        target: Category,
        entry_id: UUID,
    ) -> bool:
        wl = self._lists.get(watch_list_id)
        if wl is None or not wl.contains(source, entry_id):
            return False
        wl = wl.with_sequence(source, tuple(r for r in wl.sequence_for(source) if r != entry_id))
        wl = wl.with_sequence(target, wl.sequence_for(target) + (entry_id,))
        self._lists[watch_list_id] = wl
        return True

    async def close(self) -> None:
        return None


class PostgresWatchListStore(PostgresStoreBase, WatchListStorePort):
    """Postgres-backed watchlists (asyncpg); one uuid[] column per category."""

    async def _ensure_schema(self, conn) -> None:
        cols = ",\n".join(f"    {c.column} uuid[] NOT NULL DEFAULT '{{}}'" for c in ALL_CATEGORIES)
        await conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS watchlists (
                id uuid PRIMARY KEY,
            {cols},
                updated_at timestamptz NOT NULL DEFAULT NOW()
            );
            """
        )

    @staticmethod
    def _row_to_watch_list(row: dict) -> WatchList:
        seqs = {c.column: tuple(UUID(str(x)) for x in (row.get(c.column) or [])) for c in ALL_CATEGORIES}
        return WatchList(id=UUID(str(row["id"])), **seqs)

    async def create(self, *, watch_list_id: Optional[UUID] = None) -> WatchList:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                f"INSERT INTO watchlists (id) VALUES ($1) RETURNING id, {_COLUMNS}",
                watch_list_id or uuid4(),
            )
        assert row is not None
        return self._row_to_watch_list(dict(row))

    async def find_by_id(self, *, watch_list_id: UUID) -> Optional[WatchList]:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(f"SELECT id, {_COLUMNS} FROM watchlists WHERE id = $1", watch_list_id)
        return self._row_to_watch_list(dict(row)) if row else None

    async def contains(self, *, watch_list_id: UUID, category: Category, entry_id: UUID) -> bool:
        col = category.column
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                f"SELECT 1 AS hit FROM watchlists WHERE id = $1 AND $2 = ANY({col})",
                watch_list_id,
                entry_id,
            )
        return row is not None

    async def append(self, *, watch_list_id: UUID, category: Category, entry_id: UUID) -> None:
        col = category.column
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            await conn.execute(
                f"UPDATE watchlists SET {col} = array_append({col}, $2), updated_at = NOW() WHERE id = $1",
                watch_list_id,
                entry_id,
            )

    async def remove(self, *, watch_list_id: UUID, category: Category, entry_id: UUID) -> bool:
        col = category.column
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                UPDATE watchlists
                SET {col} = array_remove({col}, $2),
                    updated_at = NOW()
                WHERE id = $1
                  AND $2 = ANY({col})
                RETURNING id;
                """,
                watch_list_id,
                entry_id,
            )
        return bool(row)

    async def move(
        self,
        *,
        watch_list_id: UUID,
        source: Category,
        target: Category,
        entry_id: UUID,
    ) -> bool:
        src, dst = source.column, target.column
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                UPDATE watchlists
                SET {src} = array_remove({src}, $2),
                    {dst} = array_append({dst}, $2),
                    updated_at = NOW()
                WHERE id = $1
                  AND $2 = ANY({src})
                RETURNING id;
                """,
                watch_list_id,
                entry_id,
            )
        if row:
            logger.debug("Moved %s from %s to %s in watchlist %s", entry_id, src, dst, watch_list_id)
        return bool(row)
