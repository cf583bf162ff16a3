from __future__ import annotations

from enum import Enum
from typing import Any

from domain.watchlist.errors import InvalidCategoryError


class Category(str, Enum):
    """Viewing category a tracked series sits in."""

    WATCHING = "watching"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"
    DROPPED = "dropped"
    PLAN_TO_WATCH = "plan_to_watch"

    @property
    def column(self) -> str:
        # Storage column / attribute name on WatchList.
        return self.value

    @classmethod
    def parse(cls, raw: Any) -> "Category":
        """Resolve a category from an enum member, value, member name or camelCase alias.

        Anything else (including ints and bools) raises InvalidCategoryError.
        """
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            raise InvalidCategoryError(raw)
        key = raw.strip()
        if not key:
            raise InvalidCategoryError(raw)
        hit = _ALIASES.get(key) or _ALIASES.get(key.lower())
        if hit is None:
            raise InvalidCategoryError(raw)
        return hit


_ALIASES: dict[str, Category] = {}
for _c in Category:
    _ALIASES[_c.value] = _c
    _ALIASES[_c.name] = _c
    _ALIASES[_c.name.lower()] = _c
# camelCase names used by older clients.
_ALIASES.update(
    {
        "onHold": Category.ON_HOLD,
        "onhold": Category.ON_HOLD,
        "planToWatch": Category.PLAN_TO_WATCH,
        "plantowatch": Category.PLAN_TO_WATCH,
    }
)

ALL_CATEGORIES: tuple[Category, ...] = tuple(Category)
