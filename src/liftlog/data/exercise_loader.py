"""Exercise library seeding from JSON."""

import json
import logging
from pathlib import Path

import aiosqlite

from ..db.engine import connect, get_db_path
from ..models.exercise import Exercise

logger = logging.getLogger(__name__)


def get_seed_json_path() -> Path:
    """Get the path to the bundled seed exercises file."""
    return Path(__file__).parent / "preloaded_exercises.json"


def load_seed_exercises(json_path: Path | None = None) -> list[Exercise]:
    """Load exercises from a seed JSON array.

    The file holds records of the form
    ``{name, targetMuscleGroup, instructions?, formCues?, videoURL?}``.
    A missing or unreadable file yields an empty list; malformed records
    are skipped. Problems are logged, never raised.

    Returns:
        List of Exercise objects loaded from JSON
    """
    json_path = json_path or get_seed_json_path()
    if not json_path.exists():
        logger.warning("Seed file %s not found, skipping pre-loaded exercises", json_path)
        return []

    try:
        with open(json_path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not read seed file %s: %s", json_path, e)
        return []

    if not isinstance(data, list):
        logger.warning("Seed file %s must contain a JSON array", json_path)
        return []

    exercises = []
    for ex_data in data:
        try:
            if not isinstance(ex_data, dict):
                raise TypeError(f"expected an object, got {type(ex_data).__name__}")
            exercise = Exercise.from_dict(ex_data, seed_format=True)
            for field_name, value in (
                ("name", exercise.name),
                ("targetMuscleGroup", exercise.target_muscle_group),
            ):
                if not isinstance(value, str):
                    raise TypeError(f"{field_name} must be a string")
                if not value.strip():
                    raise ValueError(f"{field_name} must not be empty")
            exercises.append(exercise)
        except (KeyError, TypeError, ValueError) as e:
            name = ex_data.get("name", "unknown") if isinstance(ex_data, dict) else "unknown"
            logger.warning("Skipping invalid seed exercise %s: %s", name, e)
            continue

    return exercises


async def seed_exercises_if_needed(
    db_path: Path | None = None,
    json_path: Path | None = None,
    force: bool = False,
) -> int:
    """Seed the exercise library from the JSON file.

    Only runs against an empty library unless ``force`` is set. Exercises
    whose name already exists are left alone.

    Args:
        db_path: Optional database path. Uses default if not provided.
        json_path: Optional seed file. Uses the bundled file if not provided.
        force: Seed even if the library already has exercises

    Returns:
        Number of exercises inserted
    """
    if db_path is None:
        db_path = get_db_path()

    async with connect(db_path) as db:
        cursor = await db.execute("SELECT LOWER(name) FROM exercises")
        existing = {row[0] for row in await cursor.fetchall()}

    if existing and not force:
        logger.info("Library already contains %d exercises, skipping seed", len(existing))
        return 0

    exercises = load_seed_exercises(json_path)
    if not exercises:
        return 0

    count = 0
    async with connect(db_path) as db:
        for exercise in exercises:
            if exercise.name.lower() in existing:
                continue
            try:
                await db.execute(
                    """
                    INSERT INTO exercises
                    (id, name, target_muscle_group, instructions, form_cues, video_url)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        exercise.id,
                        exercise.name,
                        exercise.target_muscle_group,
                        exercise.instructions,
                        exercise.form_cues,
                        exercise.video_url,
                    ),
                )
                existing.add(exercise.name.lower())
                count += 1
            except aiosqlite.Error as e:
                logger.warning("Failed to seed exercise %s: %s", exercise.name, e)
                continue

        try:
            await db.commit()
        except aiosqlite.Error as e:
            logger.error("Error saving seeded exercises: %s", e)
            return 0

    logger.info("Seeded %d exercises", count)
    return count
