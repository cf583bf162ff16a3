from __future__ import annotations

from typing import Any, Optional


class WatchlistError(Exception):
    """Base class for failures detected by the watchlist core."""

    kind = "watchlist_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(WatchlistError, LookupError):
    kind = "not_found"


class InvalidSeriesError(WatchlistError):
    kind = "invalid_series"

    def __init__(self, series_id: str) -> None:
        super().__init__(f"Series does not exist: {series_id}")
        self.series_id = series_id


class DuplicateSeriesError(WatchlistError):
    kind = "duplicate_series"

    def __init__(self, series_id: str, *, category: Optional[Any] = None) -> None:
        where = f" (in {getattr(category, 'value', category)})" if category is not None else ""
        super().__init__(f"Series already on the watchlist{where}: {series_id}")
        self.series_id = series_id
        self.category = category


class InvalidCategoryError(WatchlistError, ValueError):
    kind = "invalid_category"

    def __init__(self, raw: Any) -> None:
        super().__init__(f"Unknown category: {raw!r}")
        self.raw = raw


def user_not_found(user_id: str) -> NotFoundError:
    return NotFoundError(f"Could not find user: {user_id}")


def watch_list_not_found(user_id: str) -> NotFoundError:
    return NotFoundError(f"Could not find watchlist for user: {user_id}")


def entry_not_in_category(entry_id: Any, category: Any) -> NotFoundError:
    return NotFoundError(
        f"Could not find series state {entry_id} in {getattr(category, 'value', category)}"
    )


def to_error_payload(exc: BaseException, *, empty: Any = None) -> dict[str, Any]:
    """Build the `{data, error}` envelope list/detail endpoints respond with."""
    return {
        "data": [] if empty is None else empty,
        "error": getattr(exc, "message", None) or str(exc),
        "kind": getattr(exc, "kind", "internal_error"),
    }
