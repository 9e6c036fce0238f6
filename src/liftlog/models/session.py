"""In-progress logging session rows."""

from dataclasses import dataclass, field

from .exercise import new_id


@dataclass
class SetEntry:
    """One editable set row while logging.

    Unlike SetLog, the weight here is in the user's display unit.
    """

    weight: float = 0.0
    reps: int = 0
    is_completed: bool = False
    id: str = field(default_factory=new_id)

    @property
    def volume(self) -> float:
        return self.reps * self.weight
