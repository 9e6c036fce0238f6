"""Health store that appends workouts to a JSON Lines file."""

import asyncio
import json
from pathlib import Path

from ..db.engine import get_data_dir
from .base import BaseHealthStore, HealthStoreError, WorkoutSummary

EXPORT_FILENAME = "health_export.jsonl"


class JsonlHealthStore(BaseHealthStore):
    """Writes one JSON object per finished workout.

    Stands in for a platform health store on machines that have none; any
    tool that reads JSON Lines can pick the export up.
    """

    def __init__(self, path: Path | None = None):
        super().__init__()
        self.path = path or get_data_dir() / EXPORT_FILENAME

    @property
    def is_available(self) -> bool:
        return self.path.parent.is_dir()

    async def _authorize(self) -> bool:
        return True

    async def _write(self, workout: WorkoutSummary) -> None:
        line = json.dumps(workout.to_dict(), sort_keys=True)
        try:
            await asyncio.to_thread(self._append, line)
        except OSError as e:
            raise HealthStoreError(f"Failed to save workout: {e}") from e

    def _append(self, line: str) -> None:
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(line + "\n")
