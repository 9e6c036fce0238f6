"""CLI commands for liftlog."""

from .exercises import exercises
from .init import init
from .log import log, previous, workout
from .metrics import metrics
from .prefs import prefs
from .routine import routine
from .serve import serve

__all__ = [
    "exercises",
    "init",
    "log",
    "metrics",
    "prefs",
    "previous",
    "routine",
    "serve",
    "workout",
]
