"""Pytest configuration and fixtures."""

import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from liftlog.db import ExerciseRepository, init_db
from liftlog.models.exercise import Exercise
from liftlog.models.set_log import SetLog


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
async def db_path(temp_db_path):
    """A temporary database with the schema created."""
    await init_db(temp_db_path)
    return temp_db_path


@pytest.fixture
def bench_press():
    return Exercise(name="Bench Press", target_muscle_group="Chest")


@pytest.fixture
def squat():
    return Exercise(name="Squat", target_muscle_group="Legs")


@pytest.fixture
async def stored_exercises(db_path, bench_press, squat):
    """Bench press and squat saved in the temporary database."""
    repo = ExerciseRepository(db_path)
    await repo.create(bench_press)
    await repo.create(squat)
    return bench_press, squat


@pytest.fixture
def monday_session(bench_press):
    """Three bench sets logged at the same moment."""
    when = datetime(2024, 3, 4, 18, 30)
    return [
        SetLog(set_number=1, reps=12, weight=135.0, exercise_id=bench_press.id, date=when),
        SetLog(set_number=2, reps=10, weight=135.0, exercise_id=bench_press.id, date=when),
        SetLog(set_number=3, reps=8, weight=135.0, exercise_id=bench_press.id, date=when),
    ]
