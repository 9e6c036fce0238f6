"""Weekly routine model."""

from dataclasses import dataclass, field
from datetime import date

DAYS_OF_WEEK = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


def normalize_day(day: str) -> str:
    """Normalize a weekday name ("mon", "MONDAY") to its canonical form."""
    cleaned = day.strip().lower()
    for name in DAYS_OF_WEEK:
        if name.lower() == cleaned or name[:3].lower() == cleaned:
            return name
    raise ValueError(f"Unknown day of week: {day!r}")


def today(on: date | None = None) -> str:
    """Weekday name for a date (defaults to today)."""
    on = on or date.today()
    return DAYS_OF_WEEK[on.weekday()]


@dataclass
class Routine:
    """The exercises planned for one day of the week.

    Holds membership only; there are no per-routine set or rep targets.
    """

    day_of_week: str
    exercise_ids: list[str] = field(default_factory=list)

    def __post_init__(self):
        self.day_of_week = normalize_day(self.day_of_week)
        # Drop duplicates, keep first occurrence order
        self.exercise_ids = list(dict.fromkeys(self.exercise_ids))

    def contains(self, exercise_id: str) -> bool:
        return exercise_id in self.exercise_ids

    def toggle(self, exercise_id: str) -> bool:
        """Add the exercise if absent, remove it if present.

        Returns:
            True if the exercise is now part of the routine
        """
        if exercise_id in self.exercise_ids:
            self.exercise_ids.remove(exercise_id)
            return False
        self.exercise_ids.append(exercise_id)
        return True

    def to_dict(self) -> dict:
        return {"day_of_week": self.day_of_week, "exercise_ids": list(self.exercise_ids)}
