from __future__ import annotations

from typing import Dict, Protocol, Sequence

from domain.watchlist import Series


class SeriesCatalogPort(Protocol):
    """Read-only view of the series catalogue."""

    async def exists(self, *, series_id: str) -> bool:
        ...

    async def find_many(self, *, series_ids: Sequence[str]) -> Dict[str, Series]:
        ...

    async def close(self) -> None:
        ...
