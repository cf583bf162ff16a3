from __future__ import annotations

from typing import Any

from application.ports.user_store_port import UserStorePort
from domain.watchlist import User
from domain.watchlist.errors import user_not_found


class UserDirectoryService:
    """Public, read-only projection of user accounts."""

    def __init__(self, *, users: UserStorePort) -> None:
        self._users = users

    @staticmethod
    def _public(user: User) -> dict[str, Any]:
        return {
            "id": user.id,
            "username": user.username,
            "created_at": user.created_at,
            "avatar": user.avatar,
            "watch_list_id": str(user.watch_list_id) if user.watch_list_id else None,
        }

    async def list_users(self) -> list[dict[str, Any]]:
        users = await self._users.list_users()
        return [self._public(u) for u in users]

    async def get_user(self, *, user_id: str) -> dict[str, Any]:
        user = await self._users.find_by_id(user_id=str(user_id))
        if user is None:
            raise user_not_found(user_id)
        return self._public(user)
