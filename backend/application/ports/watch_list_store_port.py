from __future__ import annotations

from typing import Optional, Protocol
from uuid import UUID

from domain.watchlist import Category, WatchList


class WatchListStorePort(Protocol):
    """Per-user category sequences.

    Every mutation is atomic at the single-watchlist level; nothing spans
    more than one watchlist or touches entry records.
    """

    async def find_by_id(self, *, watch_list_id: UUID) -> Optional[WatchList]:
        ...

    async def contains(self, *, watch_list_id: UUID, category: Category, entry_id: UUID) -> bool:
        ...

    async def append(self, *, watch_list_id: UUID, category: Category, entry_id: UUID) -> None:
        ...

    async def remove(self, *, watch_list_id: UUID, category: Category, entry_id: UUID) -> bool:
        ...

    async def move(
        self,
        *,
        watch_list_id: UUID,
        source: Category,
        target: Category,
        entry_id: UUID,
    ) -> bool:
        """Detach from `source` and append to `target` in one step. False if not in `source`."""
        ...

    async def close(self) -> None:
        ...
