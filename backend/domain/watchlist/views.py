from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional
from uuid import UUID

from domain.watchlist.category import ALL_CATEGORIES, Category
from domain.watchlist.entities import Series, SeriesStateEntry


@dataclass(frozen=True)
class PopulatedSeriesState:
    """A SeriesStateEntry with its series reference expanded.

    `series` is None when the catalogue no longer knows the id.
    """

    entry: SeriesStateEntry
    series: Optional[Series] = None

    @property
    def id(self) -> UUID:
        return self.entry.id

    @property
    def series_id(self) -> str:
        return self.entry.series_id

    def to_dict(self) -> dict[str, Any]:
        series: Any = self.entry.series_id
        if self.series is not None:
            series = {
                "id": self.series.id,
                "title": self.series.title,
                "metadata": dict(self.series.metadata or {}),
            }
        return {
            "id": str(self.entry.id),
            "series": series,
            "season_number": self.entry.season_number,
            "episode_number": self.entry.episode_number,
        }


@dataclass(frozen=True)
class DenormalizedWatchList:
    watch_list_id: UUID
    user_id: str
    sequences: dict[Category, tuple[PopulatedSeriesState, ...]] = field(default_factory=dict)

    def sequence_for(self, category: Category) -> tuple[PopulatedSeriesState, ...]:
        return self.sequences.get(category, ())

    @property
    def watching(self) -> tuple[PopulatedSeriesState, ...]:
        return self.sequence_for(Category.WATCHING)

    @property
    def completed(self) -> tuple[PopulatedSeriesState, ...]:
        return self.sequence_for(Category.COMPLETED)

    @property
    def on_hold(self) -> tuple[PopulatedSeriesState, ...]:
        return self.sequence_for(Category.ON_HOLD)

    @property
    def dropped(self) -> tuple[PopulatedSeriesState, ...]:
        return self.sequence_for(Category.DROPPED)

    @property
    def plan_to_watch(self) -> tuple[PopulatedSeriesState, ...]:
        return self.sequence_for(Category.PLAN_TO_WATCH)

    def counts(self) -> dict[str, int]:
        return {c.value: len(self.sequence_for(c)) for c in ALL_CATEGORIES}

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": str(self.watch_list_id), "user_id": self.user_id}
        for c in ALL_CATEGORIES:
            out[c.value] = [item.to_dict() for item in self.sequence_for(c)]
        return out
