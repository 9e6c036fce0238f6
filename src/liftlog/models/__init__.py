"""Data models for liftlog."""

from .exercise import Exercise
from .preferences import UserPreferences
from .routine import DAYS_OF_WEEK, Routine
from .session import SetEntry
from .set_log import SetLog
from .units import STORAGE_UNIT, WeightUnit

__all__ = [
    "DAYS_OF_WEEK",
    "Exercise",
    "Routine",
    "SetEntry",
    "SetLog",
    "STORAGE_UNIT",
    "UserPreferences",
    "WeightUnit",
]
