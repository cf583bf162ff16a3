from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence
from uuid import UUID, uuid4

from application.ports.series_state_store_port import SeriesStateStorePort
from domain.watchlist import SeriesStateEntry
from infrastructure.persistence.postgres.pool import PostgresStoreBase

_RETURNING = "id, series_id, season_number, episode_number, created_at, updated_at"


class InMemorySeriesStateStore(SeriesStateStorePort):
    """In-memory series state store for dev/tests when Postgres is not configured."""

    def __init__(self) -> None:
        self._entries: Dict[UUID, SeriesStateEntry] = {}

    async def create(
        self,
        *,
        series_id: str,
        season_number: Optional[int] = None,
        episode_number: Optional[int] = None,
    ) -> SeriesStateEntry:
        now = datetime.now(timezone.utc)
        entry = SeriesStateEntry(
            id=uuid4(),
            series_id=str(series_id),
            season_number=season_number,
            episode_number=episode_number,
            created_at=now,
            updated_at=now,
        )
        self._entries[entry.id] = entry
        return entry

    async def find_many(self, *, entry_ids: Sequence[UUID]) -> List[SeriesStateEntry]:
        return [self._entries[i] for i in dict.fromkeys(entry_ids) if i in self._entries]

    async def update(
        self,
        *,
        entry_id: UUID,
        series_id: str,
        season_number: Optional[int] = None,
        episode_number: Optional[int] = None,
    ) -> Optional[SeriesStateEntry]:
        current = self._entries.get(entry_id)
        if current is None:
            return None
        updated = replace(
            current,
            series_id=str(series_id),
            season_number=season_number,
            episode_number=episode_number,
            updated_at=datetime.now(timezone.utc),
        )
        self._entries[entry_id] = updated
        return updated

    async def delete(self, *, entry_id: UUID) -> bool:
        return self._entries.pop(entry_id, None) is not None

    def count(self) -> int:
        return len(self._entries)

    async def close(self) -> None:
        return None


class PostgresSeriesStateStore(PostgresStoreBase, SeriesStateStorePort):
    """Postgres-backed series state entries (asyncpg)."""

    async def _ensure_schema(self, conn) -> None:
        await conn.execute(
            """
            CREATE TABLE IF NOT EXISTS series_state_entries (
                id uuid PRIMARY KEY,
                series_id text NOT NULL,
                season_number int CHECK (season_number IS NULL OR season_number >= 1),
                episode_number int CHECK (episode_number IS NULL OR episode_number >= 0),
                created_at timestamptz NOT NULL DEFAULT NOW(),
                updated_at timestamptz NOT NULL DEFAULT NOW()
            );
            """
        )
        await conn.execute(
            "CREATE INDEX IF NOT EXISTS series_state_entries_series_id_idx ON series_state_entries(series_id);"
        )

    @staticmethod
    def _row_to_entry(row: dict) -> SeriesStateEntry:
        return SeriesStateEntry(
            id=UUID(str(row["id"])),
            series_id=str(row.get("series_id") or ""),
            season_number=row.get("season_number"),
            episode_number=row.get("episode_number"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )

    async def create(
        self,
        *,
        series_id: str,
        season_number: Optional[int] = None,
        episode_number: Optional[int] = None,
    ) -> SeriesStateEntry:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                INSERT INTO series_state_entries (id, series_id, season_number, episode_number)
                VALUES ($1, $2, $3, $4)
                RETURNING {_RETURNING};
                """,
                uuid4(),
                str(series_id),
                season_number,
                episode_number,
            )
        assert row is not None
        return self._row_to_entry(dict(row))

    async def find_many(self, *, entry_ids: Sequence[UUID]) -> List[SeriesStateEntry]:
        ids = list(dict.fromkeys(entry_ids))
        if not ids:
            return []
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            rows = await conn.fetch(
                f"SELECT {_RETURNING} FROM series_state_entries WHERE id = ANY($1::uuid[])",
                ids,
            )
        return [self._row_to_entry(dict(r)) for r in rows]

    async def update(
        self,
        *,
        entry_id: UUID,
        series_id: str,
        season_number: Optional[int] = None,
        episode_number: Optional[int] = None,
    ) -> Optional[SeriesStateEntry]:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                UPDATE series_state_entries
                SET series_id = $2,
                    season_number = $3,
                    episode_number = $4,
                    updated_at = NOW()
                WHERE id = $1
                RETURNING {_RETURNING};
                """,
                entry_id,
                str(series_id),
                season_number,
                episode_number,
            )
        return self._row_to_entry(dict(row)) if row else None

    async def delete(self, *, entry_id: UUID) -> bool:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow("DELETE FROM series_state_entries WHERE id = $1 RETURNING id;", entry_id)
        return bool(row)
