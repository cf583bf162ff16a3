from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator
from weakref import WeakValueDictionary


class UserLockRegistry:
    """Process-local mutual exclusion per user id.

    Locks are held weakly, so idle users do not accumulate entries.
    """

    def __init__(self, *, enabled: bool = True) -> None:
        self._enabled = bool(enabled)
        self._locks: "WeakValueDictionary[str, asyncio.Lock]" = WeakValueDictionary()

    @property
    def enabled(self) -> bool:
        return self._enabled

    def _lock_for(self, user_id: str) -> asyncio.Lock:
        lock = self._locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[user_id] = lock
        return lock

    @asynccontextmanager
    async def hold(self, user_id: str) -> AsyncIterator[None]:
        if not self._enabled:
            yield
            return
        lock = self._lock_for(str(user_id))
        async with lock:
            yield
