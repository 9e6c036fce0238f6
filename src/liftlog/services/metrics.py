"""Aggregate training metrics over set logs.

Sessions here are grouped strictly by calendar day (midnight to midnight),
independent of the window used for previous-session lookup.
"""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterable

from ..models.exercise import Exercise
from ..models.routine import Routine
from ..models.set_log import SetLog

UNKNOWN_GROUP = "Unknown"


@dataclass
class SessionSummary:
    """All sets of one exercise (or of everything) logged on one day."""

    date: date
    sets: list[SetLog]

    @property
    def volume(self) -> float:
        return sum(s.volume for s in self.sets)

    @property
    def max_weight(self) -> float:
        """Heaviest set of the day, used as an estimated single-effort max."""
        return max((s.weight for s in self.sets), default=0.0)

    @property
    def set_count(self) -> int:
        return len(self.sets)

    @property
    def total_reps(self) -> int:
        return sum(s.reps for s in self.sets)


@dataclass
class ExerciseSummary:
    """Lifetime statistics for one exercise."""

    total_workouts: int
    total_sets: int
    total_volume: float
    personal_record_weight: float | None
    personal_record_volume: float | None


class TimeRange(str, Enum):
    """Look-back windows for the breakdown views."""

    WEEK = "week"
    MONTH = "month"
    THREE_MONTHS = "3months"
    ALL_TIME = "all"

    @property
    def days(self) -> int | None:
        return {
            TimeRange.WEEK: 7,
            TimeRange.MONTH: 30,
            TimeRange.THREE_MONTHS: 90,
        }.get(self)


def group_sessions(logs: Iterable[SetLog]) -> list[SessionSummary]:
    """Group set logs by calendar day, oldest first."""
    by_day: dict[date, list[SetLog]] = defaultdict(list)
    for log in logs:
        by_day[log.date.date()].append(log)

    return [
        SessionSummary(date=day, sets=sorted(sets, key=lambda s: s.set_number))
        for day, sets in sorted(by_day.items())
    ]


def volume_over_time(logs: Iterable[SetLog]) -> list[tuple[date, float]]:
    return [(s.date, s.volume) for s in group_sessions(logs)]


def max_weight_over_time(logs: Iterable[SetLog]) -> list[tuple[date, float]]:
    return [(s.date, s.max_weight) for s in group_sessions(logs) if s.sets]


def reps_over_time(logs: Iterable[SetLog]) -> list[tuple[date, int]]:
    return [(s.date, s.total_reps) for s in group_sessions(logs)]


def exercise_summary(logs: Iterable[SetLog]) -> ExerciseSummary:
    """Summary statistics for a list of logs belonging to one exercise."""
    logs = list(logs)
    sessions = group_sessions(logs)
    return ExerciseSummary(
        total_workouts=len(sessions),
        total_sets=len(logs),
        total_volume=sum(log.volume for log in logs),
        personal_record_weight=max((log.weight for log in logs), default=None),
        personal_record_volume=max((s.volume for s in sessions), default=None),
    )


def weekly_volume(logs: Iterable[SetLog]) -> list[tuple[date, float]]:
    """Total volume per ISO week, keyed by the Monday starting that week."""
    totals: dict[date, float] = defaultdict(float)
    for log in logs:
        iso_year, iso_week, _ = log.date.isocalendar()
        week_start = date.fromisocalendar(iso_year, iso_week, 1)
        totals[week_start] += log.volume
    return sorted(totals.items())


def filter_by_range(
    logs: Iterable[SetLog],
    time_range: TimeRange,
    now: datetime | None = None,
) -> list[SetLog]:
    """Keep logs within the look-back window."""
    if time_range.days is None:
        return list(logs)
    cutoff = (now or datetime.now()) - timedelta(days=time_range.days)
    return [log for log in logs if log.date >= cutoff]


def muscle_group_volume(
    logs: Iterable[SetLog],
    exercises: Iterable[Exercise],
) -> list[tuple[str, float]]:
    """Volume per target muscle group, largest first.

    Logs without a known exercise are counted under "Unknown".
    """
    group_for = {ex.id: ex.target_muscle_group for ex in exercises}
    totals: dict[str, float] = defaultdict(float)
    for log in logs:
        totals[group_for.get(log.exercise_id, UNKNOWN_GROUP)] += log.volume
    return sorted(totals.items(), key=lambda item: item[1], reverse=True)


def muscle_group_percentages(
    breakdown: list[tuple[str, float]],
) -> list[tuple[str, float]]:
    """Share of total volume per group, in percent."""
    total = sum(volume for _, volume in breakdown)
    if total <= 0:
        return [(group, 0.0) for group, _ in breakdown]
    return [(group, volume / total * 100) for group, volume in breakdown]


def exercises_in_group(
    logs: Iterable[SetLog],
    exercises: Iterable[Exercise],
    group: str,
) -> list[tuple[Exercise, float, int]]:
    """Exercises of one muscle group with their volume and set count."""
    members = {ex.id: ex for ex in exercises if ex.target_muscle_group == group}
    volume: dict[str, float] = defaultdict(float)
    counts: dict[str, int] = defaultdict(int)
    for log in logs:
        if log.exercise_id in members:
            volume[log.exercise_id] += log.volume
            counts[log.exercise_id] += 1

    rows = [(members[ex_id], volume[ex_id], counts[ex_id]) for ex_id in volume]
    return sorted(rows, key=lambda row: row[1], reverse=True)


def workout_dates(logs: Iterable[SetLog]) -> set[date]:
    """Calendar days on which anything was logged."""
    return {log.date.date() for log in logs}


def logs_for_date(logs: Iterable[SetLog], day: date) -> list[SetLog]:
    return [log for log in logs if log.date.date() == day]


def volume_for_date(logs: Iterable[SetLog], day: date) -> float:
    return sum(log.volume for log in logs_for_date(logs, day))


def logs_by_exercise_for_date(
    logs: Iterable[SetLog], day: date
) -> dict[str | None, list[SetLog]]:
    """Sets logged on a day, grouped by exercise id."""
    grouped: dict[str | None, list[SetLog]] = defaultdict(list)
    for log in logs_for_date(logs, day):
        grouped[log.exercise_id].append(log)
    return dict(grouped)


def routine_volume_for_date(
    logs: Iterable[SetLog],
    routine: Routine | None,
    day: date,
) -> float:
    """Volume logged on a day for the exercises of a routine."""
    if routine is None:
        return 0.0
    members = set(routine.exercise_ids)
    return sum(log.volume for log in logs_for_date(logs, day) if log.exercise_id in members)


def exercises_with_logs(
    exercises: Iterable[Exercise], logs: Iterable[SetLog]
) -> list[Exercise]:
    """Exercises that have at least one logged set."""
    logged = {log.exercise_id for log in logs}
    return [ex for ex in exercises if ex.id in logged]
