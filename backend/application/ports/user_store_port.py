from __future__ import annotations

from typing import List, Optional, Protocol

from domain.watchlist import User


class UserStorePort(Protocol):
    async def find_by_id(self, *, user_id: str) -> Optional[User]:
        ...

    async def list_users(self) -> List[User]:
        ...

    async def close(self) -> None:
        ...
