from __future__ import annotations

import logging
from typing import Any, Optional
from uuid import UUID

from application.ports.series_catalog_port import SeriesCatalogPort
from application.ports.series_state_store_port import SeriesStateStorePort
from application.ports.user_store_port import UserStorePort
from application.ports.watch_list_store_port import WatchListStorePort
from application.watchlist.locks import UserLockRegistry
from application.watchlist.read_model import build_denormalized_watch_list
from application.watchlist.schemas import SeriesStatePayload
from domain.watchlist import (
    Category,
    DenormalizedWatchList,
    DuplicateSeriesError,
    InvalidSeriesError,
    NotFoundError,
    SeriesStateEntry,
    User,
    WatchList,
)
from domain.watchlist.errors import entry_not_in_category, user_not_found, watch_list_not_found

logger = logging.getLogger(__name__)


def _as_entry_id(raw: Any) -> Optional[UUID]:
    if isinstance(raw, UUID):
        return raw
    try:
        return UUID(str(raw))
    except (TypeError, ValueError):
        return None


class WatchlistAggregateService:
    """Read/mutate a user's watchlist while keeping each series in at most one category.

    Category and payload values are validated before any store is touched.
    Mutations for the same user are serialised through `locks` when it is
    enabled; without it, two concurrent adds of one series can both pass the
    duplicate scan.
    """

    def __init__(
        self,
        *,
        users: UserStorePort,
        watch_lists: WatchListStorePort,
        entries: SeriesStateStorePort,
        catalog: SeriesCatalogPort,
        locks: Optional[UserLockRegistry] = None,
        strict_update: bool = True,
        purge_removed_entries: bool = True,
    ) -> None:
        self._users = users
        self._watch_lists = watch_lists
        self._entries = entries
        self._catalog = catalog
        self._locks = locks or UserLockRegistry()
        self._strict_update = bool(strict_update)
        self._purge_removed_entries = bool(purge_removed_entries)

    async def _resolve_user(self, user_id: str) -> User:
        user = await self._users.find_by_id(user_id=str(user_id))
        if user is None:
            raise user_not_found(user_id)
        return user

    @staticmethod
    def _watch_list_id(user: User) -> UUID:
        if user.watch_list_id is None:
            raise watch_list_not_found(user.id)
        return user.watch_list_id

    async def _load_watch_list(self, user: User) -> WatchList:
        watch_list = await self._watch_lists.find_by_id(watch_list_id=self._watch_list_id(user))
        if watch_list is None:
            raise watch_list_not_found(user.id)
        return watch_list

    async def _find_tracking_category(
        self,
        watch_list: WatchList,
        series_id: str,
        *,
        exclude: Optional[UUID] = None,
    ) -> Optional[Category]:
        """Category holding an entry for `series_id`, scanning all five sequences."""
        ids = [eid for eid in watch_list.all_entry_ids() if eid != exclude]
        if not ids:
            return None
        records = await self._entries.find_many(entry_ids=ids)
        tracked = {r.id for r in records if r.series_id == series_id}
        for entry_id in ids:
            if entry_id in tracked:
                return watch_list.category_of(entry_id)
        return None

    async def _require_membership(self, user: User, category: Category, entry_id: Optional[UUID], raw_id: Any) -> UUID:
        watch_list_id = self._watch_list_id(user)
        if entry_id is None or not await self._watch_lists.contains(
            watch_list_id=watch_list_id, category=category, entry_id=entry_id
        ):
            raise entry_not_in_category(raw_id, category)
        return entry_id

    async def get_watch_list(self, *, user_id: str) -> DenormalizedWatchList:
        user = await self._resolve_user(user_id)
        watch_list = await self._load_watch_list(user)
        return await build_denormalized_watch_list(
            user_id=user.id,
            watch_list=watch_list,
            entries=self._entries,
            catalog=self._catalog,
        )

    async def add_to_category(
        self,
        *,
        user_id: str,
        category: Any,
        series_id: str,
        season_number: Optional[int] = None,
        episode_number: Optional[int] = None,
    ) -> SeriesStateEntry:
        target = Category.parse(category)
        payload = SeriesStatePayload(
            series=series_id,
            season_number=season_number,
            episode_number=episode_number,
        )

        async with self._locks.hold(str(user_id)):
            user = await self._resolve_user(user_id)
            if not await self._catalog.exists(series_id=payload.series):
                raise InvalidSeriesError(payload.series)

            watch_list = await self._load_watch_list(user)
            existing = await self._find_tracking_category(watch_list, payload.series)
            if existing is not None:
                logger.debug("Rejected add of %s for user %s: already in %s", payload.series, user.id, existing.value)
                raise DuplicateSeriesError(payload.series, category=existing)

            # Record is created only once the duplicate scan has passed.
            entry = await self._entries.create(
                series_id=payload.series,
                season_number=payload.season_number,
                episode_number=payload.episode_number,
            )
            try:
                await self._watch_lists.append(watch_list_id=watch_list.id, category=target, entry_id=entry.id)
            except BaseException:
                # Unreferenced record; drop it before re-raising.
                await self._entries.delete(entry_id=entry.id)
                raise
            logger.info("Added series %s to %s for user %s (entry %s)", payload.series, target.value, user.id, entry.id)
            return entry

    async def remove_from_category(self, *, user_id: str, category: Any, entry_id: Any) -> None:
        source = Category.parse(category)
        wanted = _as_entry_id(entry_id)

        async with self._locks.hold(str(user_id)):
            user = await self._resolve_user(user_id)
            wanted = await self._require_membership(user, source, wanted, entry_id)
            removed = await self._watch_lists.remove(
                watch_list_id=self._watch_list_id(user),
                category=source,
                entry_id=wanted,
            )
            if not removed:
                raise entry_not_in_category(entry_id, source)
            if self._purge_removed_entries:
                await self._entries.delete(entry_id=wanted)
            logger.info("Removed entry %s from %s for user %s", wanted, source.value, user.id)

    async def update_in_category(
        self,
        *,
        user_id: str,
        category: Any,
        entry_id: Any,
        series_id: str,
        season_number: Optional[int] = None,
        episode_number: Optional[int] = None,
    ) -> SeriesStateEntry:
        source = Category.parse(category)
        payload = SeriesStatePayload(
            series=series_id,
            season_number=season_number,
            episode_number=episode_number,
        )
        wanted = _as_entry_id(entry_id)

        async with self._locks.hold(str(user_id)):
            user = await self._resolve_user(user_id)
            wanted = await self._require_membership(user, source, wanted, entry_id)

            if self._strict_update:
                watch_list = await self._load_watch_list(user)
                existing = await self._find_tracking_category(watch_list, payload.series, exclude=wanted)
                if existing is not None:
                    raise DuplicateSeriesError(payload.series, category=existing)

            # The category sequence keeps the same entry id; only the record changes.
            updated = await self._entries.update(
                entry_id=wanted,
                series_id=payload.series,
                season_number=payload.season_number,
                episode_number=payload.episode_number,
            )
            if updated is None:
                raise NotFoundError(f"Could not find series state {entry_id}")
            return updated

    async def move_to_category(
        self,
        *,
        user_id: str,
        source: Any,
        target: Any,
        entry_id: Any,
    ) -> SeriesStateEntry:
        """Move an entry between categories as one watchlist write.

        Entry identity is kept, so the series stays tracked exactly once.
        """
        src = Category.parse(source)
        dst = Category.parse(target)
        wanted = _as_entry_id(entry_id)

        async with self._locks.hold(str(user_id)):
            user = await self._resolve_user(user_id)
            wanted = await self._require_membership(user, src, wanted, entry_id)
            if src is not dst:
                moved = await self._watch_lists.move(
                    watch_list_id=self._watch_list_id(user),
                    source=src,
                    target=dst,
                    entry_id=wanted,
                )
                if not moved:
                    raise entry_not_in_category(entry_id, src)
                logger.info("Moved entry %s from %s to %s for user %s", wanted, src.value, dst.value, user.id)

            records = await self._entries.find_many(entry_ids=[wanted])
            if not records:
                raise NotFoundError(f"Could not find series state {entry_id}")
            return records[0]
