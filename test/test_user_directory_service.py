import sys
import unittest
from pathlib import Path
from uuid import uuid4

_BACKEND_ROOT = Path(__file__).resolve().parents[1] / "backend"
if str(_BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(_BACKEND_ROOT))

from application.users import UserDirectoryService
from domain.watchlist import NotFoundError, User
from infrastructure.persistence.postgres.user_store import InMemoryUserStore


class TestUserDirectoryService(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.wl = uuid4()
        self.service = UserDirectoryService(
            users=InMemoryUserStore(
                [
                    User(id="u1", watch_list_id=self.wl, username="alice", avatar="a.png"),
                    User(id="u2", watch_list_id=None, username="bob"),
                ]
            )
        )

    async def test_list_users(self):
        users = await self.service.list_users()
        self.assertEqual([u["username"] for u in users], ["alice", "bob"])
        self.assertEqual(users[0]["watch_list_id"], str(self.wl))
        self.assertIsNone(users[1]["watch_list_id"])
        self.assertEqual(set(users[0]), {"id", "username", "created_at", "avatar", "watch_list_id"})

    async def test_get_user(self):
        user = await self.service.get_user(user_id="u1")
        self.assertEqual(user["avatar"], "a.png")
        with self.assertRaises(NotFoundError):
            await self.service.get_user(user_id="ghost")


if __name__ == "__main__":
    unittest.main()
