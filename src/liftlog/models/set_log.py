"""Individual set tracking model."""

from dataclasses import dataclass, field
from datetime import datetime

from .exercise import new_id


@dataclass
class SetLog:
    """A single logged set of an exercise.

    Weight is always stored in pounds, whatever unit the user
    entered it in. Conversion happens only when displaying.
    """

    set_number: int  # 1-based, unique only within one session
    reps: int
    weight: float  # in lbs
    exercise_id: str | None = None
    notes: str | None = None
    date: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=new_id)

    def __post_init__(self):
        if self.set_number < 1:
            raise ValueError(f"set_number must be 1 or greater, got {self.set_number}")
        if self.reps < 0:
            raise ValueError(f"reps must not be negative, got {self.reps}")
        if self.weight < 0:
            raise ValueError(f"weight must not be negative, got {self.weight}")

    @property
    def volume(self) -> float:
        """Training volume of this set (reps x weight)."""
        return self.reps * self.weight

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "exercise_id": self.exercise_id,
            "set_number": self.set_number,
            "reps": self.reps,
            "weight": self.weight,
            "notes": self.notes,
            "date": self.date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SetLog":
        """Create from dictionary."""
        date = data.get("date")
        if isinstance(date, str):
            date = datetime.fromisoformat(date)
        kwargs = {}
        if data.get("id"):
            kwargs["id"] = data["id"]
        return cls(
            set_number=data["set_number"],
            reps=data["reps"],
            weight=data["weight"],
            exercise_id=data.get("exercise_id"),
            notes=data.get("notes"),
            date=date or datetime.now(),
            **kwargs,
        )
