import sys
import unittest
from pathlib import Path
from uuid import uuid4

_BACKEND_ROOT = Path(__file__).resolve().parents[1] / "backend"
if str(_BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(_BACKEND_ROOT))

from domain.watchlist import (
    ALL_CATEGORIES,
    Category,
    DenormalizedWatchList,
    DuplicateSeriesError,
    InvalidCategoryError,
    NotFoundError,
    PopulatedSeriesState,
    Series,
    SeriesStateEntry,
    WatchList,
    to_error_payload,
)


class TestCategory(unittest.TestCase):
    def test_five_categories(self) -> None:
        self.assertEqual(
            [c.value for c in ALL_CATEGORIES],
            ["watching", "completed", "on_hold", "dropped", "plan_to_watch"],
        )

    def test_parse_accepts_values_names_and_camel_case(self) -> None:
        self.assertIs(Category.parse("on_hold"), Category.ON_HOLD)
        self.assertIs(Category.parse("ON_HOLD"), Category.ON_HOLD)
        self.assertIs(Category.parse("onHold"), Category.ON_HOLD)
        self.assertIs(Category.parse(" planToWatch "), Category.PLAN_TO_WATCH)
        self.assertIs(Category.parse(Category.DROPPED), Category.DROPPED)

    def test_parse_rejects_everything_else(self) -> None:
        for raw in ("paused", "", "   ", 0, 1, True, None, object()):
            with self.subTest(raw=raw):
                with self.assertRaises(InvalidCategoryError):
                    Category.parse(raw)

    def test_invalid_category_is_value_error(self) -> None:
        with self.assertRaises(ValueError):
            Category.parse("paused")


class TestWatchList(unittest.TestCase):
    def setUp(self) -> None:
        self.a, self.b, self.c = uuid4(), uuid4(), uuid4()
        self.wl = WatchList(id=uuid4(), watching=(self.a, self.b), dropped=(self.c,))

    def test_sequence_accessor(self) -> None:
        self.assertEqual(self.wl.sequence_for(Category.WATCHING), (self.a, self.b))
        self.assertEqual(self.wl.sequence_for(Category.COMPLETED), ())

    def test_category_of(self) -> None:
        self.assertIs(self.wl.category_of(self.c), Category.DROPPED)
        self.assertIsNone(self.wl.category_of(uuid4()))

    def test_all_entry_ids_flattens_in_category_order(self) -> None:
        self.assertEqual(self.wl.all_entry_ids(), [self.a, self.b, self.c])

    def test_with_sequence_returns_copy(self) -> None:
        updated = self.wl.with_sequence(Category.ON_HOLD, (self.a,))
        self.assertEqual(updated.on_hold, (self.a,))
        self.assertEqual(self.wl.on_hold, ())


class TestDenormalizedWatchList(unittest.TestCase):
    def test_to_dict_and_counts(self) -> None:
        entry = SeriesStateEntry(id=uuid4(), series_id="s1", season_number=2, episode_number=4)
        view = DenormalizedWatchList(
            watch_list_id=uuid4(),
            user_id="u1",
            sequences={Category.WATCHING: (PopulatedSeriesState(entry=entry, series=Series(id="s1", title="X")),)},
        )
        out = view.to_dict()
        self.assertEqual(out["watching"][0]["series"]["title"], "X")
        self.assertEqual(out["watching"][0]["season_number"], 2)
        self.assertEqual(out["completed"], [])
        self.assertEqual(view.counts()["watching"], 1)
        self.assertEqual(sum(view.counts().values()), 1)


class TestErrors(unittest.TestCase):
    def test_kinds(self) -> None:
        self.assertEqual(NotFoundError("x").kind, "not_found")
        self.assertEqual(DuplicateSeriesError("s1").kind, "duplicate_series")
        self.assertTrue(issubclass(NotFoundError, LookupError))

    def test_error_payload(self) -> None:
        payload = to_error_payload(DuplicateSeriesError("s1", category=Category.WATCHING))
        self.assertEqual(payload["data"], [])
        self.assertIn("watching", payload["error"])
        self.assertEqual(payload["kind"], "duplicate_series")
        self.assertEqual(to_error_payload(RuntimeError("boom"), empty={})["data"], {})


if __name__ == "__main__":
    unittest.main()
