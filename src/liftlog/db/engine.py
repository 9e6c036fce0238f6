"""Database engine setup and initialization."""

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

logger = logging.getLogger(__name__)

# Default data directory
DATA_DIR = Path(__file__).parent.parent.parent.parent / "data"
DB_FILENAME = "liftlog.db"


def get_data_dir() -> Path:
    """Get the data directory, honouring LIFTLOG_DATA_DIR."""
    override = os.environ.get("LIFTLOG_DATA_DIR")
    if override:
        return Path(override).expanduser()
    return DATA_DIR


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = get_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / DB_FILENAME


@asynccontextmanager
async def connect(db_path: Path) -> AsyncGenerator[aiosqlite.Connection, None]:
    """Open a connection with row access by name and foreign keys enforced."""
    async with aiosqlite.connect(db_path) as db:
        db.row_factory = aiosqlite.Row
        await db.execute("PRAGMA foreign_keys = ON")
        yield db



async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # Exercise library
        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercises (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                target_muscle_group TEXT NOT NULL,
                instructions TEXT,
                form_cues TEXT,
                video_url TEXT
            )
        """)

        # Logged sets; weight is always in pounds
        await db.execute("""
            CREATE TABLE IF NOT EXISTS set_logs (
                id TEXT PRIMARY KEY,
                exercise_id TEXT,
                set_number INTEGER NOT NULL CHECK (set_number >= 1),
                reps INTEGER NOT NULL CHECK (reps >= 0),
                weight REAL NOT NULL CHECK (weight >= 0),
                notes TEXT,
                date TIMESTAMP NOT NULL,
                FOREIGN KEY (exercise_id) REFERENCES exercises(id)
            )
        """)

        # One routine per weekday
        await db.execute("""
            CREATE TABLE IF NOT EXISTS routines (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                day_of_week TEXT UNIQUE NOT NULL
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS routine_exercises (
                routine_id INTEGER NOT NULL,
                exercise_id TEXT NOT NULL,
                position INTEGER NOT NULL,
                PRIMARY KEY (routine_id, exercise_id),
                FOREIGN KEY (routine_id) REFERENCES routines(id) ON DELETE CASCADE,
                FOREIGN KEY (exercise_id) REFERENCES exercises(id)
            )
        """)

        # Singleton preferences row
        await db.execute("""
            CREATE TABLE IF NOT EXISTS user_preferences (
                id TEXT PRIMARY KEY CHECK (id = 'singleton'),
                preferred_weight_unit TEXT NOT NULL DEFAULT 'lbs',
                enable_rest_timer INTEGER NOT NULL DEFAULT 1,
                default_rest_duration INTEGER NOT NULL DEFAULT 90,
                health_sync_enabled INTEGER NOT NULL DEFAULT 0
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_set_logs_exercise
            ON set_logs(exercise_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_set_logs_date
            ON set_logs(date)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_exercises_name
            ON exercises(name)
        """)

        await db.commit()

    logger.debug("Schema ready at %s", db_path)
