"""Tests for the health store export."""

import json
from datetime import datetime

import pytest

from liftlog.clients.base import (
    BaseHealthStore,
    HealthStore,
    NotAuthorizedError,
    NotAvailableError,
    WorkoutSummary,
    estimate_calories,
)
from liftlog.clients.jsonl_store import JsonlHealthStore
from liftlog.services.health_sync import HealthSyncService


class DeniedStore(BaseHealthStore):
    """Store where the user declines authorization."""

    @property
    def is_available(self) -> bool:
        return True

    async def _authorize(self) -> bool:
        return False

    async def _write(self, workout):
        raise AssertionError("should not be written")


class UnavailableStore(DeniedStore):
    @property
    def is_available(self) -> bool:
        return False


class TestWorkoutSummary:
    """Tests for the calorie estimate."""

    def test_estimate_calories(self):
        assert estimate_calories(60) == 450.0
        assert estimate_calories(0) == 0.0

    def test_from_times(self):
        start = datetime(2024, 3, 4, 18, 0)
        end = datetime(2024, 3, 4, 18, 45)
        workout = WorkoutSummary.from_times(start, end)
        assert workout.duration_minutes == 45.0
        assert workout.calories == pytest.approx(337.5)
        assert workout.to_dict()["duration_seconds"] == 2700.0


class TestBaseHealthStore:
    """Tests for authorization handling."""

    def test_satisfies_protocol(self, tmp_path):
        assert isinstance(JsonlHealthStore(tmp_path / "out.jsonl"), HealthStore)

    async def test_save_requires_authorization(self, tmp_path):
        store = JsonlHealthStore(tmp_path / "out.jsonl")
        workout = WorkoutSummary.from_times(datetime(2024, 3, 4, 18), datetime(2024, 3, 4, 19))
        with pytest.raises(NotAuthorizedError):
            await store.save_workout(workout)

    async def test_unavailable(self):
        with pytest.raises(NotAvailableError):
            await UnavailableStore().request_authorization()

    async def test_authorization_is_cached(self, tmp_path):
        store = JsonlHealthStore(tmp_path / "out.jsonl")
        assert await store.request_authorization()
        assert store.is_authorized
        assert await store.request_authorization()


class TestHealthSyncService:
    """Tests for HealthSyncService."""

    async def test_sync_writes_workout(self, tmp_path):
        path = tmp_path / "out.jsonl"
        service = HealthSyncService(JsonlHealthStore(path))
        start = datetime(2024, 3, 4, 18, 0)
        end = datetime(2024, 3, 4, 19, 0)

        assert await service.sync(start, end)
        assert await service.sync(start, end)

        lines = path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        record = json.loads(lines[0])
        assert record["calories"] == 450.0
        assert record["activity_type"] == "traditional_strength_training"
        assert record["start"] == "2024-03-04T18:00:00"

    async def test_denied_authorization(self):
        service = HealthSyncService(DeniedStore())
        assert not await service.sync(datetime(2024, 3, 4, 18), datetime(2024, 3, 4, 19))

    async def test_unavailable_store(self):
        service = HealthSyncService(UnavailableStore())
        assert not await service.ensure_authorized()

    async def test_write_failure(self, tmp_path):
        store = JsonlHealthStore(tmp_path / "missing" / "out.jsonl")
        store._authorized = True
        service = HealthSyncService(store)
        assert not await service.sync(datetime(2024, 3, 4, 18), datetime(2024, 3, 4, 19))
