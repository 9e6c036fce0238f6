"""Services for liftlog."""

from .health_sync import HealthSyncService
from .previous_session import (
    PreviousSessionResolver,
    PreviousSet,
    SessionWindow,
    build_set_entries,
    resolve_previous,
)
from .workout_session import FinishResult, WorkoutSession, log_exercise_sets

__all__ = [
    "build_set_entries",
    "FinishResult",
    "HealthSyncService",
    "log_exercise_sets",
    "PreviousSessionResolver",
    "PreviousSet",
    "resolve_previous",
    "SessionWindow",
    "WorkoutSession",
]
