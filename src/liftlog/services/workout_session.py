"""Logging session state and the save path for completed sets."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

import aiosqlite

from ..db.repositories import SetLogRepository
from ..models.preferences import UserPreferences
from ..models.session import SetEntry
from ..models.set_log import SetLog
from ..models.units import WeightUnit
from ..utils.units import to_storage
from .health_sync import HealthSyncService
from .previous_session import (
    PreviousSet,
    SessionWindow,
    build_set_entries,
    resolve_previous,
)

logger = logging.getLogger(__name__)

ROUTINE_DEFAULT_SETS = 3


@dataclass
class FinishResult:
    """Outcome of finishing a session."""

    saved: bool
    set_count: int
    health_synced: bool = False


@dataclass
class WorkoutSession:
    """A routine workout in progress.

    Holds the editable set rows per exercise. Weights in the rows are in
    the display unit; they are converted to pounds only when saved.
    """

    unit: WeightUnit
    started_at: datetime = field(default_factory=datetime.now)
    exercise_ids: list[str] = field(default_factory=list)
    entries: dict[str, list[SetEntry]] = field(default_factory=dict)
    previous: dict[str, dict[int, PreviousSet]] = field(default_factory=dict)
    rest_timer_skipped: bool = False

    @classmethod
    def start(
        cls,
        exercise_ids: list[str],
        logs: Iterable[SetLog],
        unit: WeightUnit,
        started_at: datetime | None = None,
        window: SessionWindow = SessionWindow.SAME_DAY,
    ) -> "WorkoutSession":
        """Start a session, pre-filling each exercise from its last workout.

        Sets logged earlier on the start day are not treated as previous.
        Exercises without history start with three empty sets.
        """
        started_at = started_at or datetime.now()
        logs = list(logs)
        session = cls(unit=unit, started_at=started_at, exercise_ids=list(exercise_ids))
        for exercise_id in session.exercise_ids:
            previous = resolve_previous(
                logs, exercise_id, window=window, before=started_at.date()
            )
            session.previous[exercise_id] = previous
            session.entries[exercise_id] = build_set_entries(
                previous, unit, fill_gaps=True, empty_count=ROUTINE_DEFAULT_SETS
            )
        return session

    def add_set(self, exercise_id: str) -> SetEntry:
        """Append a set row, copying the weight and reps of the last row."""
        rows = self.entries.setdefault(exercise_id, [])
        last = rows[-1] if rows else None
        entry = SetEntry(weight=last.weight, reps=last.reps) if last else SetEntry()
        rows.append(entry)
        return entry

    def remove_set(self, exercise_id: str, index: int) -> None:
        rows = self.entries.get(exercise_id, [])
        if 0 <= index < len(rows):
            del rows[index]

    def complete_set(
        self,
        exercise_id: str,
        index: int,
        weight: float | None = None,
        reps: int | None = None,
    ) -> SetEntry:
        """Mark a set row as done, optionally overriding its values."""
        entry = self.entries[exercise_id][index]
        if weight is not None:
            entry.weight = weight
        if reps is not None:
            entry.reps = reps
        entry.is_completed = True
        return entry

    def skip_rest_timer(self) -> None:
        """Stop offering the rest timer for the rest of this session."""
        self.rest_timer_skipped = True

    def should_start_rest_timer(self, preferences: UserPreferences) -> bool:
        return preferences.enable_rest_timer and not self.rest_timer_skipped

    def _completed(self) -> list[SetEntry]:
        return [e for rows in self.entries.values() for e in rows if e.is_completed]

    @property
    def session_volume(self) -> float:
        """Volume of completed sets, in the display unit."""
        return sum(e.volume for e in self._completed())

    @property
    def completed_sets_count(self) -> int:
        return len(self._completed())

    @property
    def has_completed_sets(self) -> bool:
        return self.completed_sets_count > 0

    def to_set_logs(self, now: datetime | None = None) -> list[SetLog]:
        """Completed rows as set logs, numbered by their row position."""
        now = now or datetime.now()
        logs = []
        for exercise_id in self.exercise_ids:
            for index, entry in enumerate(self.entries.get(exercise_id, [])):
                if not entry.is_completed:
                    continue
                logs.append(
                    SetLog(
                        set_number=index + 1,
                        reps=entry.reps,
                        weight=to_storage(entry.weight, self.unit),
                        exercise_id=exercise_id,
                        date=now,
                    )
                )
        return logs

    async def finish(
        self,
        set_log_repo: SetLogRepository,
        preferences: UserPreferences,
        health_sync: HealthSyncService | None = None,
        now: datetime | None = None,
    ) -> FinishResult:
        """Save completed sets, then export the workout if enabled.

        A failed save is logged and the session still finishes. The health
        export runs after the save and cannot undo it.
        """
        now = now or datetime.now()
        logs = self.to_set_logs(now)

        saved = True
        try:
            await set_log_repo.add_many(logs)
        except aiosqlite.Error as e:
            logger.error("Failed to save sets: %s", e)
            saved = False

        health_synced = False
        if preferences.health_sync_enabled and health_sync is not None:
            try:
                health_synced = await health_sync.sync(self.started_at, now)
            except Exception:
                logger.exception("Health export raised unexpectedly")

        return FinishResult(saved=saved, set_count=len(logs), health_synced=health_synced)


async def log_exercise_sets(
    set_log_repo: SetLogRepository,
    exercise_id: str,
    entries: list[SetEntry],
    unit: WeightUnit,
    notes: str | None = None,
    now: datetime | None = None,
) -> list[SetLog]:
    """Save the completed rows of a single-exercise logging screen.

    Returns the stored logs; an empty list if nothing was completed or the
    save failed (the failure is logged).
    """
    now = now or datetime.now()
    logs = [
        SetLog(
            set_number=index + 1,
            reps=entry.reps,
            weight=to_storage(entry.weight, unit),
            exercise_id=exercise_id,
            notes=notes or None,
            date=now,
        )
        for index, entry in enumerate(entries)
        if entry.is_completed
    ]
    try:
        await set_log_repo.add_many(logs)
    except aiosqlite.Error as e:
        logger.error("Failed to save sets for exercise %s: %s", exercise_id, e)
        return []
    return logs
