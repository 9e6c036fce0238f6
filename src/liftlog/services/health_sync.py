"""Best-effort export of finished workouts to a health store."""

import logging
from datetime import datetime

from ..clients.base import HealthStore, HealthStoreError, WorkoutSummary

logger = logging.getLogger(__name__)


class HealthSyncService:
    """Hands finished workouts to a health store.

    Failures are logged and reported as False; nothing here is retried or
    raised, so a broken store never affects the local save.
    """

    def __init__(self, store: HealthStore):
        self.store = store

    async def ensure_authorized(self) -> bool:
        """Request authorization once; the store caches a grant."""
        if self.store.is_authorized:
            return True
        try:
            return await self.store.request_authorization()
        except HealthStoreError as e:
            logger.warning("Health store authorization failed: %s", e)
            return False

    async def export_workout(self, workout: WorkoutSummary) -> bool:
        """Save a workout summary, returning whether it was stored."""
        if not await self.ensure_authorized():
            logger.info("Health store not authorized, skipping workout export")
            return False
        try:
            await self.store.save_workout(workout)
        except HealthStoreError as e:
            logger.warning("Failed to save workout to health store: %s", e)
            return False
        logger.debug(
            "Exported %.1f minute workout (%.0f kcal)",
            workout.duration_minutes,
            workout.calories,
        )
        return True

    async def sync(self, start: datetime, end: datetime) -> bool:
        """Export a workout spanning start..end with an estimated calorie burn."""
        return await self.export_workout(WorkoutSummary.from_times(start, end))
