"""Base protocol for health-data stores."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, runtime_checkable

CALORIES_PER_MINUTE = 7.5  # moderate strength training


def estimate_calories(duration_minutes: float) -> float:
    """Estimate calories burned during strength training."""
    return duration_minutes * CALORIES_PER_MINUTE


@dataclass
class WorkoutSummary:
    """A finished workout handed to a health store."""

    start: datetime
    end: datetime
    calories: float
    activity_type: str = "traditional_strength_training"

    @property
    def duration_minutes(self) -> float:
        return (self.end - self.start).total_seconds() / 60

    @classmethod
    def from_times(cls, start: datetime, end: datetime) -> "WorkoutSummary":
        """Build a summary with the calorie estimate for its duration."""
        minutes = (end - start).total_seconds() / 60
        return cls(start=start, end=end, calories=estimate_calories(minutes))

    def to_dict(self) -> dict:
        return {
            "activity_type": self.activity_type,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "duration_seconds": (self.end - self.start).total_seconds(),
            "calories": self.calories,
        }


class HealthStoreError(Exception):
    """Base error for health store failures."""


class NotAuthorizedError(HealthStoreError):
    def __init__(self):
        super().__init__("Health store authorization not granted")


class NotAvailableError(HealthStoreError):
    def __init__(self):
        super().__init__("Health store is not available on this device")


@runtime_checkable
class HealthStore(Protocol):
    """Protocol for health-data stores."""

    @property
    def is_available(self) -> bool:
        """Whether the store can be used at all."""
        ...

    @property
    def is_authorized(self) -> bool:
        ...

    async def request_authorization(self) -> bool:
        """Ask for permission to write workouts."""
        ...

    async def save_workout(self, workout: WorkoutSummary) -> None:
        """Persist a workout, raising HealthStoreError on failure."""
        ...


class BaseHealthStore(ABC):
    """Base class for health stores with cached authorization."""

    def __init__(self):
        self._authorized = False

    @property
    @abstractmethod
    def is_available(self) -> bool:
        pass

    @property
    def is_authorized(self) -> bool:
        return self._authorized

    async def request_authorization(self) -> bool:
        """Request authorization once; later calls reuse the cached grant."""
        if self._authorized:
            return True
        if not self.is_available:
            raise NotAvailableError()
        self._authorized = await self._authorize()
        return self._authorized

    async def save_workout(self, workout: WorkoutSummary) -> None:
        if not self._authorized:
            raise NotAuthorizedError()
        await self._write(workout)

    @abstractmethod
    async def _authorize(self) -> bool:
        pass

    @abstractmethod
    async def _write(self, workout: WorkoutSummary) -> None:
        pass
