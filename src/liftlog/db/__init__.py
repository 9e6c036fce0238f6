"""Database layer for liftlog."""

from .engine import connect, get_data_dir, get_db_path, init_db
from .repositories import (
    ExerciseRepository,
    PreferencesRepository,
    RoutineRepository,
    SetLogRepository,
)

__all__ = [
    "connect",
    "ExerciseRepository",
    "get_data_dir",
    "get_db_path",
    "init_db",
    "PreferencesRepository",
    "RoutineRepository",
    "SetLogRepository",
]
