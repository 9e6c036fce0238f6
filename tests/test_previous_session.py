"""Tests for previous-session lookup."""

from datetime import date, datetime, timedelta

import pytest

from liftlog.db import ExerciseRepository, SetLogRepository
from liftlog.models.set_log import SetLog
from liftlog.models.units import WeightUnit
from liftlog.services.previous_session import (
    PreviousSessionResolver,
    PreviousSet,
    SessionWindow,
    build_set_entries,
    resolve_previous,
)


def make_log(exercise_id, set_number, weight, reps, when):
    return SetLog(
        set_number=set_number,
        reps=reps,
        weight=weight,
        exercise_id=exercise_id,
        date=when,
    )


class TestResolvePrevious:
    """Tests for resolve_previous."""

    def test_no_history(self):
        assert resolve_previous([], "bench") == {}

    def test_bench_press_example(self, bench_press, monday_session):
        result = resolve_previous(monday_session, bench_press.id)
        assert result == {
            1: PreviousSet(weight=135.0, reps=12),
            2: PreviousSet(weight=135.0, reps=10),
            3: PreviousSet(weight=135.0, reps=8),
        }

    def test_only_most_recent_day(self):
        monday = datetime(2024, 3, 4, 18, 0)
        thursday = datetime(2024, 3, 7, 7, 0)
        logs = [
            make_log("bench", 1, 135.0, 10, monday),
            make_log("bench", 2, 135.0, 9, monday),
            make_log("bench", 3, 135.0, 8, monday),
            make_log("bench", 1, 140.0, 8, thursday),
        ]
        result = resolve_previous(logs, "bench")
        assert result == {1: PreviousSet(weight=140.0, reps=8)}

    def test_input_order_does_not_matter(self):
        monday = datetime(2024, 3, 4, 18, 0)
        thursday = datetime(2024, 3, 7, 7, 0)
        logs = [
            make_log("bench", 1, 140.0, 8, thursday),
            make_log("bench", 1, 135.0, 10, monday),
        ]
        assert resolve_previous(logs, "bench") == resolve_previous(list(reversed(logs)), "bench")

    def test_exercises_are_isolated(self):
        when = datetime(2024, 3, 4, 18, 0)
        later = datetime(2024, 3, 5, 18, 0)
        logs = [
            make_log("bench", 1, 135.0, 10, when),
            make_log("squat", 1, 225.0, 5, later),
        ]
        assert resolve_previous(logs, "bench") == {1: PreviousSet(135.0, 10)}
        assert resolve_previous(logs, "squat") == {1: PreviousSet(225.0, 5)}

    def test_keys_are_one_based_set_numbers(self, bench_press, monday_session):
        assert set(resolve_previous(monday_session, bench_press.id)) == {1, 2, 3}

    def test_duplicate_position_keeps_latest(self):
        """A set re-logged later the same day replaces the earlier values."""
        morning = datetime(2024, 3, 4, 9, 0)
        evening = datetime(2024, 3, 4, 19, 0)
        logs = [
            make_log("bench", 1, 135.0, 10, morning),
            make_log("bench", 2, 135.0, 9, morning),
            make_log("bench", 1, 145.0, 6, evening),
        ]
        result = resolve_previous(logs, "bench")
        assert result[1] == PreviousSet(weight=145.0, reps=6)
        assert result[2] == PreviousSet(weight=135.0, reps=9)

    def test_zero_weight_and_reps_are_kept(self):
        when = datetime(2024, 3, 4, 18, 0)
        logs = [make_log("pullup", 1, 0.0, 0, when)]
        assert resolve_previous(logs, "pullup") == {1: PreviousSet(weight=0.0, reps=0)}

    def test_same_day_spans_whole_day(self):
        early = datetime(2024, 3, 4, 6, 0)
        late = datetime(2024, 3, 4, 22, 0)
        logs = [
            make_log("bench", 1, 135.0, 10, early),
            make_log("bench", 2, 135.0, 8, late),
        ]
        assert set(resolve_previous(logs, "bench", window=SessionWindow.SAME_DAY)) == {1, 2}

    def test_sliding_window_excludes_earlier_sets_same_day(self):
        early = datetime(2024, 3, 4, 6, 0)
        late = datetime(2024, 3, 4, 22, 0)
        logs = [
            make_log("bench", 1, 135.0, 10, early),
            make_log("bench", 2, 135.0, 8, late),
        ]
        result = resolve_previous(logs, "bench", window=SessionWindow.SLIDING)
        assert result == {2: PreviousSet(135.0, 8)}

    def test_sliding_window_crosses_midnight(self):
        """A session straddling midnight stays together with the sliding window."""
        before_midnight = datetime(2024, 3, 4, 23, 58)
        after_midnight = datetime(2024, 3, 5, 0, 1)
        logs = [
            make_log("bench", 1, 135.0, 10, before_midnight),
            make_log("bench", 2, 135.0, 8, after_midnight),
        ]
        sliding = resolve_previous(logs, "bench", window=SessionWindow.SLIDING)
        same_day = resolve_previous(logs, "bench", window=SessionWindow.SAME_DAY)
        assert set(sliding) == {1, 2}
        assert set(same_day) == {2}

    def test_sliding_window_boundary(self):
        anchor = datetime(2024, 3, 4, 18, 0)
        logs = [
            make_log("bench", 1, 135.0, 10, anchor - timedelta(minutes=5)),
            make_log("bench", 2, 135.0, 9, anchor - timedelta(minutes=5, seconds=1)),
            make_log("bench", 3, 135.0, 8, anchor),
        ]
        result = resolve_previous(logs, "bench", window=SessionWindow.SLIDING)
        assert set(result) == {1, 3}

    def test_before_excludes_that_day(self):
        yesterday = datetime(2024, 3, 4, 18, 0)
        today = datetime(2024, 3, 5, 7, 0)
        logs = [
            make_log("bench", 1, 135.0, 10, yesterday),
            make_log("bench", 1, 150.0, 3, today),
        ]
        result = resolve_previous(logs, "bench", before=date(2024, 3, 5))
        assert result == {1: PreviousSet(135.0, 10)}

    def test_before_with_only_today(self):
        today = datetime(2024, 3, 5, 7, 0)
        logs = [make_log("bench", 1, 150.0, 3, today)]
        assert resolve_previous(logs, "bench", before=date(2024, 3, 5)) == {}


class TestBuildSetEntries:
    """Tests for build_set_entries."""

    def test_empty_history(self):
        entries = build_set_entries({}, WeightUnit.POUNDS)
        assert len(entries) == 1
        assert entries[0].weight == 0.0
        assert entries[0].reps == 0

    def test_empty_history_custom_count(self):
        assert len(build_set_entries({}, WeightUnit.POUNDS, empty_count=3)) == 3

    def test_sorted_keys(self):
        previous = {3: PreviousSet(135.0, 8), 1: PreviousSet(135.0, 12)}
        entries = build_set_entries(previous, WeightUnit.POUNDS)
        assert [(e.weight, e.reps) for e in entries] == [(135.0, 12), (135.0, 8)]
        assert not any(e.is_completed for e in entries)

    def test_fill_gaps(self):
        previous = {1: PreviousSet(135.0, 12), 3: PreviousSet(135.0, 8)}
        entries = build_set_entries(previous, WeightUnit.POUNDS, fill_gaps=True)
        assert [(e.weight, e.reps) for e in entries] == [(135.0, 12), (0.0, 0), (135.0, 8)]

    def test_converts_to_display_unit(self):
        previous = {1: PreviousSet(132.27735731092652, 5)}
        entries = build_set_entries(previous, WeightUnit.KILOGRAMS)
        assert entries[0].weight == pytest.approx(60.0, abs=1e-4)
        assert entries[0].reps == 5


class TestPreviousSessionResolver:
    """Tests for the store-backed resolver."""

    async def test_resolve_for(self, db_path, bench_press, monday_session):
        await ExerciseRepository(db_path).create(bench_press)
        repo = SetLogRepository(db_path)
        await repo.add_many(monday_session)

        resolver = PreviousSessionResolver(repo)
        result = await resolver.resolve_for(bench_press.id)
        assert result == {
            1: PreviousSet(135.0, 12),
            2: PreviousSet(135.0, 10),
            3: PreviousSet(135.0, 8),
        }

    async def test_resolve_for_sees_new_logs(self, db_path, bench_press, monday_session):
        await ExerciseRepository(db_path).create(bench_press)
        repo = SetLogRepository(db_path)
        resolver = PreviousSessionResolver(repo, window=SessionWindow.SLIDING)

        assert await resolver.resolve_for(bench_press.id) == {}
        await repo.add_many(monday_session)
        assert len(await resolver.resolve_for(bench_press.id)) == 3
