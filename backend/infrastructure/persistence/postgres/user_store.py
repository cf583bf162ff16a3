from __future__ import annotations

from typing import Dict, Iterable, List, Optional
from uuid import UUID

from application.ports.user_store_port import UserStorePort
from domain.watchlist import User
from infrastructure.persistence.postgres.pool import PostgresStoreBase


class InMemoryUserStore(UserStorePort):
    """In-memory user store for dev/tests when Postgres is not configured."""

    def __init__(self, users: Optional[Iterable[User]] = None) -> None:
        self._users: Dict[str, User] = {}
        for user in users or ():
            self.add_user(user)

    def add_user(self, user: User) -> User:
        self._users[str(user.id)] = user
        return user

    async def find_by_id(self, *, user_id: str) -> Optional[User]:
        return self._users.get(str(user_id))

    async def list_users(self) -> List[User]:
        return list(self._users.values())

    async def close(self) -> None:
        return None


class PostgresUserStore(PostgresStoreBase, UserStorePort):
    """Postgres-backed user lookup (asyncpg). Accounts are provisioned elsewhere."""

    async def _ensure_schema(self, conn) -> None:
        await conn.execute(
            """
            CREATE TABLE IF NOT EXISTS watchlist_users (
                id text PRIMARY KEY,
                username text NOT NULL DEFAULT '',
                avatar text,
                watch_list_id uuid UNIQUE,
                created_at timestamptz NOT NULL DEFAULT NOW()
            );
            """
        )

    @staticmethod
    def _row_to_user(row: dict) -> User:
        wl = row.get("watch_list_id")
        return User(
            id=str(row["id"]),
            watch_list_id=UUID(str(wl)) if wl is not None else None,
            username=str(row.get("username") or ""),
            avatar=row.get("avatar"),
            created_at=row.get("created_at"),
        )

    async def find_by_id(self, *, user_id: str) -> Optional[User]:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT id, username, avatar, watch_list_id, created_at FROM watchlist_users WHERE id = $1",
                str(user_id),
            )
        return self._row_to_user(dict(row)) if row else None

    async def list_users(self) -> List[User]:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            rows = await conn.fetch(
                "SELECT id, username, avatar, watch_list_id, created_at FROM watchlist_users ORDER BY created_at, id"
            )
        return [self._row_to_user(dict(r)) for r in rows]
