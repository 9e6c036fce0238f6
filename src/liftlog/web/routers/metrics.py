"""Metrics routes."""

from datetime import date

from fastapi import APIRouter, HTTPException, Query, Request

from ...db.repositories import ExerciseRepository, PreferencesRepository, SetLogRepository
from ...services import metrics as m
from ...utils.units import to_display
from ..deps import get_db

router = APIRouter(prefix="/metrics", tags=["metrics"])


@router.get("/exercise/{exercise_id}")
async def exercise_metrics(request: Request, exercise_id: str):
    """Per-session series and lifetime summary for one exercise."""
    db_path = get_db(request)
    if await ExerciseRepository(db_path).get(exercise_id) is None:
        raise HTTPException(status_code=404, detail="Exercise not found")

    unit = (await PreferencesRepository(db_path).get_or_create()).preferred_weight_unit
    logs = await SetLogRepository(db_path).list_for_exercise(exercise_id)
    summary = m.exercise_summary(logs)

    def display(value: float | None) -> float | None:
        return None if value is None else to_display(value, unit)

    return {
        "unit": unit.value,
        "sessions": [
            {
                "date": s.date.isoformat(),
                "volume": to_display(s.volume, unit),
                "max_weight": to_display(s.max_weight, unit),
                "set_count": s.set_count,
                "total_reps": s.total_reps,
            }
            for s in m.group_sessions(logs)
        ],
        "summary": {
            "total_workouts": summary.total_workouts,
            "total_sets": summary.total_sets,
            "total_volume": to_display(summary.total_volume, unit),
            "personal_record_weight": display(summary.personal_record_weight),
            "personal_record_volume": display(summary.personal_record_volume),
        },
    }


@router.get("/weekly")
async def weekly(request: Request):
    db_path = get_db(request)
    unit = (await PreferencesRepository(db_path).get_or_create()).preferred_weight_unit
    logs = await SetLogRepository(db_path).list_all()
    return [
        {"week": start.isoformat(), "volume": to_display(volume, unit)}
        for start, volume in m.weekly_volume(logs)
    ]


@router.get("/muscles")
async def muscles(
    request: Request,
    time_range: m.TimeRange = Query(m.TimeRange.ALL_TIME, alias="range"),
):
    """Volume breakdown by muscle group."""
    db_path = get_db(request)
    unit = (await PreferencesRepository(db_path).get_or_create()).preferred_weight_unit
    logs = m.filter_by_range(await SetLogRepository(db_path).list_all(), time_range)
    breakdown = m.muscle_group_volume(logs, await ExerciseRepository(db_path).list_all())
    percentages = dict(m.muscle_group_percentages(breakdown))
    return [
        {
            "group": group,
            "volume": to_display(volume, unit),
            "percent": percentages[group],
        }
        for group, volume in breakdown
    ]


@router.get("/calendar")
async def calendar(request: Request, day: date | None = None):
    """Workout days, or the sets of one day when ``day`` is given."""
    db_path = get_db(request)
    logs = await SetLogRepository(db_path).list_all()

    if day is None:
        return {"dates": sorted(d.isoformat() for d in m.workout_dates(logs))}

    unit = (await PreferencesRepository(db_path).get_or_create()).preferred_weight_unit
    grouped = m.logs_by_exercise_for_date(logs, day)
    return {
        "date": day.isoformat(),
        "volume": to_display(m.volume_for_date(logs, day), unit),
        "exercises": {
            exercise_id or "unknown": [log.to_dict() for log in sets]
            for exercise_id, sets in grouped.items()
        },
    }
