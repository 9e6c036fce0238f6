"""Previous performance lookup for pre-filling a new logging session."""

from datetime import date, timedelta
from enum import Enum
from typing import Iterable, NamedTuple

from ..db.repositories import SetLogRepository
from ..models.session import SetEntry
from ..models.set_log import SetLog
from ..models.units import WeightUnit
from ..utils.units import to_display

SLIDING_WINDOW = timedelta(minutes=5)


class SessionWindow(str, Enum):
    """Which records count as the same session as the most recent one."""

    SAME_DAY = "same_day"  # same calendar day as the most recent set
    SLIDING = "sliding"  # within SLIDING_WINDOW of the most recent set


class PreviousSet(NamedTuple):
    """What the user did for one set position last time (weight in lbs)."""

    weight: float
    reps: int


def resolve_previous(
    logs: Iterable[SetLog],
    exercise_id: str,
    window: SessionWindow = SessionWindow.SAME_DAY,
    before: date | None = None,
) -> dict[int, PreviousSet]:
    """Find the most recent session for an exercise.

    Args:
        logs: All historical set logs
        exercise_id: The exercise to look up
        window: How to decide which sets belong to the most recent session
        before: If given, ignore sets logged on this day or later

    Returns:
        Mapping of 1-based set number to the previous weight and reps.
        Empty if the exercise has never been logged.
    """
    exercise_logs = [
        log
        for log in logs
        if log.exercise_id == exercise_id
        and (before is None or log.date.date() < before)
    ]
    exercise_logs.sort(key=lambda log: log.date, reverse=True)

    if not exercise_logs:
        return {}

    anchor = exercise_logs[0].date
    if window == SessionWindow.SLIDING:
        session = [log for log in exercise_logs if anchor - log.date <= SLIDING_WINDOW]
    else:
        session = [log for log in exercise_logs if log.date.date() == anchor.date()]

    # Newest first, so a re-logged set position keeps its latest values
    result: dict[int, PreviousSet] = {}
    for log in session:
        if log.set_number not in result:
            result[log.set_number] = PreviousSet(weight=log.weight, reps=log.reps)
    return result


def build_set_entries(
    previous: dict[int, PreviousSet],
    unit: WeightUnit,
    fill_gaps: bool = False,
    empty_count: int = 1,
) -> list[SetEntry]:
    """Turn a previous-session mapping into pre-filled set rows.

    Args:
        previous: Output of resolve_previous
        unit: Display unit for the pre-filled weights
        fill_gaps: Emit rows for every position up to the highest one,
            leaving missing positions empty
        empty_count: Number of empty rows when there is no previous data

    Returns:
        Ordered set rows, weights converted to the display unit
    """
    if not previous:
        return [SetEntry() for _ in range(empty_count)]

    if fill_gaps:
        positions = range(1, max(previous) + 1)
    else:
        positions = sorted(previous)

    entries = []
    for position in positions:
        prev = previous.get(position)
        if prev is None:
            entries.append(SetEntry())
        else:
            entries.append(SetEntry(weight=to_display(prev.weight, unit), reps=prev.reps))
    return entries


class PreviousSessionResolver:
    """Looks up previous performance against the set log store.

    The full log set is reloaded on every call; nothing is cached.
    """

    def __init__(
        self,
        set_log_repo: SetLogRepository,
        window: SessionWindow = SessionWindow.SAME_DAY,
    ):
        self.set_log_repo = set_log_repo
        self.window = window

    def resolve(
        self,
        logs: Iterable[SetLog],
        exercise_id: str,
        before: date | None = None,
    ) -> dict[int, PreviousSet]:
        return resolve_previous(logs, exercise_id, window=self.window, before=before)

    async def resolve_for(
        self, exercise_id: str, before: date | None = None
    ) -> dict[int, PreviousSet]:
        """Load all set logs and resolve the previous session for an exercise."""
        logs = await self.set_log_repo.list_all()
        return self.resolve(logs, exercise_id, before=before)
