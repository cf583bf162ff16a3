from __future__ import annotations

import json
import logging
import re
from typing import Dict, Iterable, Optional, Sequence

from application.ports.series_catalog_port import SeriesCatalogPort
from domain.watchlist import Series
from infrastructure.persistence.postgres.pool import PostgresPool, PostgresStoreBase

logger = logging.getLogger(__name__)

_IDENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


class InMemorySeriesCatalog(SeriesCatalogPort):
    def __init__(self, series: Optional[Iterable[Series]] = None) -> None:
        self._series: Dict[str, Series] = {}
        for s in series or ():
            self.add_series(s)

    def add_series(self, series: Series) -> Series:
        self._series[str(series.id)] = series
        return series

    async def exists(self, *, series_id: str) -> bool:
        return str(series_id) in self._series

    async def find_many(self, *, series_ids: Sequence[str]) -> Dict[str, Series]:
        return {sid: self._series[sid] for sid in series_ids if sid in self._series}

    async def close(self) -> None:
        return None


class PostgresSeriesCatalog(PostgresStoreBase, SeriesCatalogPort):
    """Read-only lookups against the series catalogue table (asyncpg).

    The table is owned by the catalogue service; no schema is created here.
    """

    def __init__(self, *, pool: PostgresPool, table: str = "series") -> None:
        super().__init__(pool=pool)
        if not _IDENT_RE.match(table or ""):
            raise ValueError(f"invalid catalogue table name: {table!r}")
        self._table = table

    @staticmethod
    def _row_to_series(row: dict) -> Series:
        meta = row.get("metadata") or {}
        if isinstance(meta, str):
            try:
                meta = json.loads(meta)
            except ValueError:
                logger.warning("Ignoring malformed metadata for series %s", row.get("id"))
                meta = {}
        if not isinstance(meta, dict):
            meta = {}
        return Series(id=str(row["id"]), title=str(row.get("title") or ""), metadata=dict(meta))

    async def exists(self, *, series_id: str) -> bool:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(f"SELECT 1 AS hit FROM {self._table} WHERE id = $1 LIMIT 1", str(series_id))
        return row is not None

    async def find_many(self, *, series_ids: Sequence[str]) -> Dict[str, Series]:
        ids = [str(s) for s in dict.fromkeys(series_ids)]
        if not ids:
            return {}
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            rows = await conn.fetch(
                f"SELECT id, title, metadata FROM {self._table} WHERE id = ANY($1::text[])",
                ids,
            )
        out: Dict[str, Series] = {}
        for r in rows:
            s = self._row_to_series(dict(r))
            out[s.id] = s
        return out
