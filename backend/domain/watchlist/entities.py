from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Iterator, Optional
from uuid import UUID

from domain.watchlist.category import ALL_CATEGORIES, Category


@dataclass(frozen=True)
class Series:
    """Catalogue record; only `id` is interpreted by the watchlist core."""

    id: str
    title: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SeriesStateEntry:
    """A user's progress on one series."""

    id: UUID
    series_id: str
    # >= 1 when set
    season_number: Optional[int] = None
    # >= 0 when set
    episode_number: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class User:
    id: str
    watch_list_id: Optional[UUID]
    username: str = ""
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class WatchList:
    """Five ordered sequences of SeriesStateEntry ids, one per category."""

    id: UUID
    watching: tuple[UUID, ...] = ()
    completed: tuple[UUID, ...] = ()
    on_hold: tuple[UUID, ...] = ()
    dropped: tuple[UUID, ...] = ()
    plan_to_watch: tuple[UUID, ...] = ()

    def sequence_for(self, category: Category) -> tuple[UUID, ...]:
        return getattr(self, category.column)

    def contains(self, category: Category, entry_id: UUID) -> bool:
        return entry_id in self.sequence_for(category)

    def category_of(self, entry_id: UUID) -> Optional[Category]:
        for category in ALL_CATEGORIES:
            if entry_id in self.sequence_for(category):
                return category
        return None

    def iter_refs(self) -> Iterator[tuple[Category, UUID]]:
        for category in ALL_CATEGORIES:
            for entry_id in self.sequence_for(category):
                yield category, entry_id

    def all_entry_ids(self) -> list[UUID]:
        return [entry_id for _, entry_id in self.iter_refs()]

    def with_sequence(self, category: Category, refs: tuple[UUID, ...]) -> "WatchList":
        return replace(self, **{category.column: tuple(refs)})
