"""Integration tests for a full training week.

These run the storage, session and export layers together against a real
SQLite file, the way the CLI wires them.
"""

import json
from datetime import datetime

from liftlog.clients.jsonl_store import JsonlHealthStore
from liftlog.db import (
    ExerciseRepository,
    PreferencesRepository,
    RoutineRepository,
    SetLogRepository,
)
from liftlog.models.units import WeightUnit
from liftlog.services import metrics as m
from liftlog.services.health_sync import HealthSyncService
from liftlog.services.previous_session import PreviousSessionResolver, PreviousSet
from liftlog.services.workout_session import WorkoutSession


class TestTrainingWeek:
    """Two Mondays of the same routine."""

    async def run_monday(self, db_path, started_at, weights, health_sync=None):
        exercises = ExerciseRepository(db_path)
        logs = SetLogRepository(db_path)
        prefs = await PreferencesRepository(db_path).get_or_create()
        routine = await RoutineRepository(db_path).get_by_day("Monday")

        session = WorkoutSession.start(
            routine.exercise_ids,
            await logs.list_all(),
            prefs.preferred_weight_unit,
            started_at=started_at,
        )
        for exercise_id in routine.exercise_ids:
            name = (await exercises.get(exercise_id)).name
            for index, reps in enumerate((10, 8, 6)):
                session.complete_set(exercise_id, index, weight=weights[name], reps=reps)

        finished = started_at.replace(hour=started_at.hour + 1)
        result = await session.finish(logs, prefs, health_sync=health_sync, now=finished)
        return session, result

    async def test_routine_prefill_and_metrics(self, seeded_db, data_dir):
        exercises = ExerciseRepository(seeded_db)
        routines = RoutineRepository(seeded_db)
        bench = await exercises.get_by_name("Bench Press")
        squat = await exercises.get_by_name("Squat")
        await routines.toggle_exercise("Monday", bench.id)
        await routines.toggle_exercise("Monday", squat.id)

        prefs_repo = PreferencesRepository(seeded_db)
        prefs = await prefs_repo.get_or_create()
        prefs.health_sync_enabled = True
        await prefs_repo.save(prefs)

        sync = HealthSyncService(JsonlHealthStore())
        week_one = datetime(2024, 3, 4, 18, 0)
        first, result = await self.run_monday(
            seeded_db, week_one, {"Bench Press": 135.0, "Squat": 225.0}, health_sync=sync
        )
        assert first.entries[bench.id][0].weight == 0.0
        assert result.saved and result.set_count == 6
        assert result.health_synced

        resolver = PreviousSessionResolver(SetLogRepository(seeded_db))
        assert await resolver.resolve_for(bench.id) == {
            1: PreviousSet(135.0, 10),
            2: PreviousSet(135.0, 8),
            3: PreviousSet(135.0, 6),
        }

        week_two = datetime(2024, 3, 11, 18, 0)
        second, result = await self.run_monday(
            seeded_db, week_two, {"Bench Press": 140.0, "Squat": 235.0}, health_sync=sync
        )
        assert [(e.weight, e.reps) for e in second.entries[squat.id]] == [
            (225.0, 10),
            (225.0, 8),
            (225.0, 6),
        ]
        assert result.saved

        export = (data_dir / "health_export.jsonl").read_text(encoding="utf-8").splitlines()
        assert len(export) == 2
        assert json.loads(export[0])["calories"] == 450.0

        all_logs = await SetLogRepository(seeded_db).list_all()
        bench_logs = [log for log in all_logs if log.exercise_id == bench.id]
        assert m.volume_over_time(bench_logs) == [
            (week_one.date(), 3240.0),
            (week_two.date(), 3360.0),
        ]
        assert [start for start, _ in m.weekly_volume(all_logs)] == [
            week_one.date(),
            week_two.date(),
        ]
        groups = dict(m.muscle_group_volume(all_logs, await exercises.list_all()))
        assert groups["Legs"] > groups["Chest"]

    async def test_kilogram_user(self, seeded_db):
        exercises = ExerciseRepository(seeded_db)
        squat = await exercises.get_by_name("Squat")
        await RoutineRepository(seeded_db).toggle_exercise("Monday", squat.id)

        prefs_repo = PreferencesRepository(seeded_db)
        prefs = await prefs_repo.get_or_create()
        prefs.preferred_weight_unit = WeightUnit.KILOGRAMS
        await prefs_repo.save(prefs)

        await self.run_monday(seeded_db, datetime(2024, 3, 4, 18, 0), {"Squat": 100.0})
        second, _ = await self.run_monday(seeded_db, datetime(2024, 3, 11, 18, 0), {"Squat": 105.0})

        assert abs(second.entries[squat.id][0].weight - 100.0) < 1e-4
        stored = await SetLogRepository(seeded_db).list_for_exercise(squat.id)
        assert abs(stored[0].weight - 220.462262) < 1e-4

    async def test_deleting_exercise_clears_history(self, seeded_db):
        exercises = ExerciseRepository(seeded_db)
        bench = await exercises.get_by_name("Bench Press")
        await RoutineRepository(seeded_db).toggle_exercise("Monday", bench.id)
        await self.run_monday(seeded_db, datetime(2024, 3, 4, 18, 0), {"Bench Press": 135.0})

        assert await exercises.delete(bench.id) == 3
        assert await SetLogRepository(seeded_db).list_all() == []
        assert (await RoutineRepository(seeded_db).get_by_day("Monday")).exercise_ids == []
