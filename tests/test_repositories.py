"""Tests for the SQLite repositories."""

from datetime import datetime

import aiosqlite
import pytest

from liftlog.db import (
    ExerciseRepository,
    PreferencesRepository,
    RoutineRepository,
    SetLogRepository,
    init_db,
)
from liftlog.db.engine import connect, get_data_dir, get_db_path
from liftlog.models.exercise import Exercise
from liftlog.models.preferences import UserPreferences
from liftlog.models.set_log import SetLog
from liftlog.models.units import WeightUnit


class TestEngine:
    """Tests for database setup."""

    def test_data_dir_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LIFTLOG_DATA_DIR", str(tmp_path / "data"))
        assert get_data_dir() == tmp_path / "data"
        db_path = get_db_path()
        assert db_path == tmp_path / "data" / "liftlog.db"
        assert db_path.parent.is_dir()

    async def test_init_db_is_idempotent(self, db_path):
        await init_db(db_path)
        async with connect(db_path) as db:
            cursor = await db.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name"
            )
            tables = {row[0] for row in await cursor.fetchall()}
        assert {
            "exercises",
            "set_logs",
            "routines",
            "routine_exercises",
            "user_preferences",
        } <= tables

    async def test_preference_flags_not_null(self, db_path):
        async with connect(db_path) as db:
            cursor = await db.execute("PRAGMA table_info(user_preferences)")
            not_null = {row["name"]: row["notnull"] for row in await cursor.fetchall()}
        assert not_null["enable_rest_timer"] == 1
        assert not_null["health_sync_enabled"] == 1

        async with connect(db_path) as db:
            with pytest.raises(aiosqlite.IntegrityError):
                await db.execute(
                    "INSERT INTO user_preferences (id, health_sync_enabled) VALUES ('singleton', NULL)"
                )


class TestExerciseRepository:
    """Tests for ExerciseRepository."""

    async def test_create_and_get(self, db_path, bench_press):
        repo = ExerciseRepository(db_path)
        await repo.create(bench_press)
        assert await repo.get(bench_press.id) == bench_press
        assert await repo.get("missing") is None

    async def test_get_by_name_is_case_insensitive(self, db_path, stored_exercises):
        bench_press, _ = stored_exercises
        found = await ExerciseRepository(db_path).get_by_name("bench press")
        assert found.id == bench_press.id

    async def test_list_and_groups(self, db_path, stored_exercises):
        repo = ExerciseRepository(db_path)
        assert [ex.name for ex in await repo.list_all()] == ["Bench Press", "Squat"]
        assert [ex.name for ex in await repo.list_by_muscle_group("Legs")] == ["Squat"]
        assert await repo.muscle_groups() == ["Chest", "Legs"]
        assert await repo.count() == 2

    async def test_update(self, db_path, stored_exercises):
        bench_press, _ = stored_exercises
        repo = ExerciseRepository(db_path)
        bench_press.form_cues = "Retract shoulder blades"
        await repo.update(bench_press)
        assert (await repo.get(bench_press.id)).form_cue_list == ["Retract shoulder blades"]

    async def test_update_missing(self, db_path):
        with pytest.raises(ValueError):
            await ExerciseRepository(db_path).update(
                Exercise(name="Ghost", target_muscle_group="None")
            )

    async def test_delete_removes_logs(self, db_path, stored_exercises, monday_session):
        """Deleting an exercise leaves no set logs pointing at it."""
        bench_press, squat = stored_exercises
        logs = SetLogRepository(db_path)
        await logs.add_many(monday_session)
        await logs.add(SetLog(set_number=1, reps=5, weight=225.0, exercise_id=squat.id))

        removed = await ExerciseRepository(db_path).delete(bench_press.id)

        assert removed == 3
        assert await ExerciseRepository(db_path).get(bench_press.id) is None
        assert await logs.list_for_exercise(bench_press.id) == []
        assert len(await logs.list_all()) == 1

    async def test_delete_removes_routine_membership(self, db_path, stored_exercises):
        bench_press, squat = stored_exercises
        routines = RoutineRepository(db_path)
        await routines.toggle_exercise("Monday", bench_press.id)
        await routines.toggle_exercise("Monday", squat.id)

        await ExerciseRepository(db_path).delete(bench_press.id)

        assert (await routines.get_by_day("Monday")).exercise_ids == [squat.id]


class TestSetLogRepository:
    """Tests for SetLogRepository."""

    async def test_add_and_list(self, db_path, stored_exercises, monday_session):
        bench_press, _ = stored_exercises
        repo = SetLogRepository(db_path)
        assert await repo.add_many(monday_session) == 3

        stored = await repo.list_for_exercise(bench_press.id)
        assert sorted((s.set_number, s.reps, s.weight) for s in stored) == [
            (1, 12, 135.0),
            (2, 10, 135.0),
            (3, 8, 135.0),
        ]
        assert stored[0].date == datetime(2024, 3, 4, 18, 30)

    async def test_add_many_empty(self, db_path):
        assert await SetLogRepository(db_path).add_many([]) == 0

    async def test_add_many_is_atomic(self, db_path, stored_exercises):
        bench_press, _ = stored_exercises
        repo = SetLogRepository(db_path)
        good = SetLog(set_number=1, reps=5, weight=100.0, exercise_id=bench_press.id)
        orphan = SetLog(set_number=2, reps=5, weight=100.0, exercise_id="no-such-exercise")

        with pytest.raises(aiosqlite.Error):
            await repo.add_many([good, orphan])
        assert await repo.list_all() == []

    async def test_list_between(self, db_path, stored_exercises):
        bench_press, _ = stored_exercises
        repo = SetLogRepository(db_path)
        for day in (3, 4, 5):
            await repo.add(
                SetLog(
                    set_number=1,
                    reps=5,
                    weight=100.0,
                    exercise_id=bench_press.id,
                    date=datetime(2024, 3, day, 12, 0),
                )
            )
        found = await repo.list_between(datetime(2024, 3, 4), datetime(2024, 3, 5))
        assert [s.date.day for s in found] == [4]

    async def test_delete(self, db_path, stored_exercises, monday_session):
        repo = SetLogRepository(db_path)
        await repo.add_many(monday_session)
        await repo.delete(monday_session[0].id)
        assert await repo.get(monday_session[0].id) is None
        assert len(await repo.list_all()) == 2


class TestRoutineRepository:
    """Tests for RoutineRepository."""

    async def test_missing_day(self, db_path):
        assert await RoutineRepository(db_path).get_by_day("Friday") is None

    async def test_toggle(self, db_path, stored_exercises):
        bench_press, squat = stored_exercises
        repo = RoutineRepository(db_path)

        assert await repo.toggle_exercise("mon", bench_press.id) is True
        assert await repo.toggle_exercise("Monday", squat.id) is True
        assert (await repo.get_by_day("Monday")).exercise_ids == [bench_press.id, squat.id]

        assert await repo.toggle_exercise("Monday", bench_press.id) is False
        assert (await repo.get_by_day("Monday")).exercise_ids == [squat.id]

    async def test_one_routine_per_day(self, db_path, stored_exercises):
        bench_press, _ = stored_exercises
        repo = RoutineRepository(db_path)
        await repo.ensure("Tuesday")
        await repo.ensure("tue")
        await repo.toggle_exercise("Tuesday", bench_press.id)

        routines = await repo.list_all()
        assert [r.day_of_week for r in routines] == ["Tuesday"]

    async def test_list_all_in_weekday_order(self, db_path, stored_exercises):
        bench_press, _ = stored_exercises
        repo = RoutineRepository(db_path)
        await repo.toggle_exercise("Friday", bench_press.id)
        await repo.toggle_exercise("Monday", bench_press.id)
        assert [r.day_of_week for r in await repo.list_all()] == ["Monday", "Friday"]


class TestPreferencesRepository:
    """Tests for the singleton preferences record."""

    async def test_defaults_created_once(self, db_path):
        repo = PreferencesRepository(db_path)
        first = await repo.get_or_create()
        second = await repo.get_or_create()
        assert first == second == UserPreferences()

        async with connect(db_path) as db:
            cursor = await db.execute("SELECT COUNT(*) FROM user_preferences")
            assert (await cursor.fetchone())[0] == 1

    async def test_save(self, db_path):
        repo = PreferencesRepository(db_path)
        prefs = await repo.get_or_create()
        prefs.preferred_weight_unit = WeightUnit.KILOGRAMS
        prefs.health_sync_enabled = True
        prefs.set_rest_duration(120)
        await repo.save(prefs)
        await repo.save(prefs)

        stored = await repo.get_or_create()
        assert stored.preferred_weight_unit is WeightUnit.KILOGRAMS
        assert stored.health_sync_enabled is True
        assert stored.default_rest_duration == 120

    async def test_second_identity_rejected(self, db_path):
        async with connect(db_path) as db:
            with pytest.raises(aiosqlite.IntegrityError):
                await db.execute("INSERT INTO user_preferences (id) VALUES ('other')")
