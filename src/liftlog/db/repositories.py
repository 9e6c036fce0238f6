"""Data access layer for liftlog."""

import logging
from datetime import datetime
from pathlib import Path

import aiosqlite

from ..models.exercise import Exercise
from ..models.preferences import PREFERENCES_ID, UserPreferences
from ..models.routine import DAYS_OF_WEEK, Routine, normalize_day
from ..models.set_log import SetLog
from ..models.units import WeightUnit
from .engine import connect, get_db_path

logger = logging.getLogger(__name__)


class ExerciseRepository:
    """Repository for the exercise library."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, exercise: Exercise) -> str:
        """Add a new exercise."""
        async with connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO exercises
                (id, name, target_muscle_group, instructions, form_cues, video_url)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    exercise.id,
                    exercise.name,
                    exercise.target_muscle_group,
                    exercise.instructions,
                    exercise.form_cues,
                    exercise.video_url,
                ),
            )
            await db.commit()
            return exercise.id

    async def get(self, exercise_id: str) -> Exercise | None:
        """Get an exercise by ID."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM exercises WHERE id = ?", (exercise_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_exercise(row)

    async def get_by_name(self, name: str) -> Exercise | None:
        """Get an exercise by name (case-insensitive)."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM exercises WHERE LOWER(name) = LOWER(?) ORDER BY name LIMIT 1",
                (name.strip(),),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_exercise(row)

    async def list_all(self) -> list[Exercise]:
        """List all exercises."""
        async with connect(self.db_path) as db:
            cursor = await db.execute("SELECT * FROM exercises ORDER BY name")
            rows = await cursor.fetchall()
            return [self._row_to_exercise(row) for row in rows]

    async def list_by_muscle_group(self, muscle_group: str) -> list[Exercise]:
        """Get exercises targeting a muscle group."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM exercises WHERE target_muscle_group = ? ORDER BY name",
                (muscle_group,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_exercise(row) for row in rows]

    async def muscle_groups(self) -> list[str]:
        """Distinct muscle groups in the library."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT DISTINCT target_muscle_group FROM exercises ORDER BY target_muscle_group"
            )
            rows = await cursor.fetchall()
            return [row[0] for row in rows]

    async def count(self) -> int:
        async with connect(self.db_path) as db:
            cursor = await db.execute("SELECT COUNT(*) FROM exercises")
            row = await cursor.fetchone()
            return row[0]

    async def update(self, exercise: Exercise) -> None:
        """Update an existing exercise."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                UPDATE exercises SET
                    name = ?, target_muscle_group = ?,
                    instructions = ?, form_cues = ?, video_url = ?
                WHERE id = ?
                """,
                (
                    exercise.name,
                    exercise.target_muscle_group,
                    exercise.instructions,
                    exercise.form_cues,
                    exercise.video_url,
                    exercise.id,
                ),
            )
            await db.commit()
            if cursor.rowcount == 0:
                raise ValueError(f"Exercise {exercise.id} does not exist")

    async def delete(self, exercise_id: str) -> int:
        """Delete an exercise together with all of its set logs.

        Set logs and routine memberships are removed in the same transaction
        as the exercise, so either everything goes or nothing does.

        Returns:
            Number of set logs removed
        """
        async with connect(self.db_path) as db:
            try:
                cursor = await db.execute(
                    "DELETE FROM set_logs WHERE exercise_id = ?", (exercise_id,)
                )
                removed_logs = cursor.rowcount
                await db.execute(
                    "DELETE FROM routine_exercises WHERE exercise_id = ?", (exercise_id,)
                )
                await db.execute("DELETE FROM exercises WHERE id = ?", (exercise_id,))
                await db.commit()
            except aiosqlite.Error:
                await db.rollback()
                logger.exception("Failed to delete exercise %s, rolled back", exercise_id)
                raise

        logger.debug("Deleted exercise %s and %d set logs", exercise_id, removed_logs)
        return removed_logs

    def _row_to_exercise(self, row: aiosqlite.Row) -> Exercise:
        """Convert a database row to an Exercise."""
        return Exercise(
            id=row["id"],
            name=row["name"],
            target_muscle_group=row["target_muscle_group"],
            instructions=row["instructions"],
            form_cues=row["form_cues"],
            video_url=row["video_url"],
        )


class SetLogRepository:
    """Repository for logged sets."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def add(self, set_log: SetLog) -> str:
        """Store a single set log."""
        await self.add_many([set_log])
        return set_log.id

    async def add_many(self, set_logs: list[SetLog]) -> int:
        """Store several set logs in one transaction.

        Returns:
            Number of set logs stored
        """
        if not set_logs:
            return 0

        async with connect(self.db_path) as db:
            try:
                await db.executemany(
                    """
                    INSERT INTO set_logs
                    (id, exercise_id, set_number, reps, weight, notes, date)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (
                            log.id,
                            log.exercise_id,
                            log.set_number,
                            log.reps,
                            log.weight,
                            log.notes,
                            log.date.isoformat(),
                        )
                        for log in set_logs
                    ],
                )
                await db.commit()
            except aiosqlite.Error:
                await db.rollback()
                raise
        return len(set_logs)

    async def get(self, set_log_id: str) -> SetLog | None:
        async with connect(self.db_path) as db:
            cursor = await db.execute("SELECT * FROM set_logs WHERE id = ?", (set_log_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_set_log(row)

    async def list_all(self) -> list[SetLog]:
        """List every set log, oldest first."""
        async with connect(self.db_path) as db:
            cursor = await db.execute("SELECT * FROM set_logs ORDER BY date")
            rows = await cursor.fetchall()
            return [self._row_to_set_log(row) for row in rows]

    async def list_for_exercise(self, exercise_id: str) -> list[SetLog]:
        """List the set logs of one exercise, oldest first."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM set_logs WHERE exercise_id = ? ORDER BY date",
                (exercise_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_set_log(row) for row in rows]

    async def list_between(self, start: datetime, end: datetime) -> list[SetLog]:
        """List set logs with start <= date < end."""
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT * FROM set_logs WHERE date >= ? AND date < ? ORDER BY date",
                (start.isoformat(), end.isoformat()),
            )
            rows = await cursor.fetchall()
            return [self._row_to_set_log(row) for row in rows]

    async def delete(self, set_log_id: str) -> None:
        async with connect(self.db_path) as db:
            await db.execute("DELETE FROM set_logs WHERE id = ?", (set_log_id,))
            await db.commit()

    def _row_to_set_log(self, row: aiosqlite.Row) -> SetLog:
        """Convert a database row to a SetLog."""
        return SetLog(
            id=row["id"],
            exercise_id=row["exercise_id"],
            set_number=row["set_number"],
            reps=row["reps"],
            weight=row["weight"],
            notes=row["notes"],
            date=datetime.fromisoformat(row["date"]),
        )


class RoutineRepository:
    """Repository for weekday routines."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get_by_day(self, day_of_week: str) -> Routine | None:
        """Get the routine for a weekday."""
        day = normalize_day(day_of_week)
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT id FROM routines WHERE day_of_week = ?", (day,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            cursor = await db.execute(
                """
                SELECT exercise_id FROM routine_exercises
                WHERE routine_id = ? ORDER BY position
                """,
                (row["id"],),
            )
            members = await cursor.fetchall()
            return Routine(day_of_week=day, exercise_ids=[m["exercise_id"] for m in members])

    async def ensure(self, day_of_week: str) -> Routine:
        """Fetch the routine for a day, creating an empty one if needed."""
        existing = await self.get_by_day(day_of_week)
        if existing:
            return existing

        routine = Routine(day_of_week=day_of_week)
        async with connect(self.db_path) as db:
            await db.execute(
                "INSERT OR IGNORE INTO routines (day_of_week) VALUES (?)",
                (routine.day_of_week,),
            )
            await db.commit()
        return routine

    async def save(self, routine: Routine) -> None:
        """Replace the stored membership of a routine."""
        async with connect(self.db_path) as db:
            try:
                await db.execute(
                    "INSERT OR IGNORE INTO routines (day_of_week) VALUES (?)",
                    (routine.day_of_week,),
                )
                cursor = await db.execute(
                    "SELECT id FROM routines WHERE day_of_week = ?",
                    (routine.day_of_week,),
                )
                routine_id = (await cursor.fetchone())["id"]
                await db.execute(
                    "DELETE FROM routine_exercises WHERE routine_id = ?", (routine_id,)
                )
                await db.executemany(
                    """
                    INSERT INTO routine_exercises (routine_id, exercise_id, position)
                    VALUES (?, ?, ?)
                    """,
                    [
                        (routine_id, exercise_id, position)
                        for position, exercise_id in enumerate(routine.exercise_ids)
                    ],
                )
                await db.commit()
            except aiosqlite.Error:
                await db.rollback()
                raise

    async def toggle_exercise(self, day_of_week: str, exercise_id: str) -> bool:
        """Add or remove an exercise from a day's routine.

        Returns:
            True if the exercise is now in the routine
        """
        routine = await self.ensure(day_of_week)
        included = routine.toggle(exercise_id)
        await self.save(routine)
        return included

    async def list_all(self) -> list[Routine]:
        """All stored routines in weekday order."""
        routines = []
        for day in DAYS_OF_WEEK:
            routine = await self.get_by_day(day)
            if routine:
                routines.append(routine)
        return routines


class PreferencesRepository:
    """Repository for the singleton preferences record."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get_or_create(self) -> UserPreferences:
        """Fetch the preferences record, creating it with defaults if absent."""
        async with connect(self.db_path) as db:
            await db.execute(
                "INSERT OR IGNORE INTO user_preferences (id) VALUES (?)",
                (PREFERENCES_ID,),
            )
            await db.commit()
            cursor = await db.execute(
                "SELECT * FROM user_preferences WHERE id = ?", (PREFERENCES_ID,)
            )
            row = await cursor.fetchone()
            return self._row_to_preferences(row)

    async def save(self, preferences: UserPreferences) -> None:
        """Upsert the preferences record on its fixed identity."""
        async with connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO user_preferences
                (id, preferred_weight_unit, enable_rest_timer,
                 default_rest_duration, health_sync_enabled)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    preferred_weight_unit = excluded.preferred_weight_unit,
                    enable_rest_timer = excluded.enable_rest_timer,
                    default_rest_duration = excluded.default_rest_duration,
                    health_sync_enabled = excluded.health_sync_enabled
                """,
                (
                    PREFERENCES_ID,
                    preferences.preferred_weight_unit.value,
                    1 if preferences.enable_rest_timer else 0,
                    preferences.default_rest_duration,
                    1 if preferences.health_sync_enabled else 0,
                ),
            )
            await db.commit()

    def _row_to_preferences(self, row: aiosqlite.Row) -> UserPreferences:
        """Convert a database row to UserPreferences."""
        return UserPreferences(
            preferred_weight_unit=WeightUnit(row["preferred_weight_unit"]),
            enable_rest_timer=bool(row["enable_rest_timer"]),
            default_rest_duration=row["default_rest_duration"],
            health_sync_enabled=bool(row["health_sync_enabled"]),
        )
