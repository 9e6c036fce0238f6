"""Pytest configuration for integration tests."""

import pytest

from liftlog.data.exercise_loader import seed_exercises_if_needed
from liftlog.db import init_db


# Mark all tests in this directory as integration tests
def pytest_collection_modifyitems(items):
    """Add integration marker to all tests in this directory."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def data_dir(monkeypatch, tmp_path):
    """Point the default data directory at a temporary folder."""
    path = tmp_path / "data"
    path.mkdir()
    monkeypatch.setenv("LIFTLOG_DATA_DIR", str(path))
    return path


@pytest.fixture
async def seeded_db(data_dir):
    """Database in the data directory with the bundled library loaded."""
    db_path = data_dir / "liftlog.db"
    await init_db(db_path)
    await seed_exercises_if_needed(db_path)
    return db_path
