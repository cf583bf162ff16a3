from __future__ import annotations

from typing import List, Optional, Protocol, Sequence
from uuid import UUID

from domain.watchlist import SeriesStateEntry


class SeriesStateStorePort(Protocol):
    async def create(
        self,
        *,
        series_id: str,
        season_number: Optional[int] = None,
        episode_number: Optional[int] = None,
    ) -> SeriesStateEntry:
        ...

    async def find_many(self, *, entry_ids: Sequence[UUID]) -> List[SeriesStateEntry]:
        """Return the records that exist, in no particular order."""
        ...

    async def update(
        self,
        *,
        entry_id: UUID,
        series_id: str,
        season_number: Optional[int] = None,
        episode_number: Optional[int] = None,
    ) -> Optional[SeriesStateEntry]:
        """Overwrite all progress fields; None if the record does not exist."""
        ...

    async def delete(self, *, entry_id: UUID) -> bool:
        ...

    async def close(self) -> None:
        ...
