"""Health-data store clients."""

from .base import (
    BaseHealthStore,
    HealthStore,
    HealthStoreError,
    NotAuthorizedError,
    NotAvailableError,
    WorkoutSummary,
    estimate_calories,
)
from .jsonl_store import JsonlHealthStore

__all__ = [
    "BaseHealthStore",
    "estimate_calories",
    "HealthStore",
    "HealthStoreError",
    "JsonlHealthStore",
    "NotAuthorizedError",
    "NotAvailableError",
    "WorkoutSummary",
]
