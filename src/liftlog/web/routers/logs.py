"""Set logging routes."""

from datetime import date

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from ...db.repositories import ExerciseRepository, PreferencesRepository, SetLogRepository
from ...models.session import SetEntry
from ...models.units import WeightUnit
from ...services.previous_session import SessionWindow, build_set_entries, resolve_previous
from ...services.workout_session import log_exercise_sets
from ...utils.units import to_display
from ..deps import get_db

router = APIRouter(prefix="/logs", tags=["logs"])


class SetIn(BaseModel):
    weight: float = Field(ge=0, allow_inf_nan=False)
    reps: int = Field(ge=0)


class LogSetsIn(BaseModel):
    exercise_id: str
    sets: list[SetIn]
    unit: WeightUnit | None = None
    notes: str | None = None


@router.get("")
async def list_logs(request: Request, exercise_id: str | None = None):
    """List set logs (weights in pounds), optionally for one exercise."""
    repo = SetLogRepository(get_db(request))
    items = await repo.list_for_exercise(exercise_id) if exercise_id else await repo.list_all()
    return [log.to_dict() for log in items]


@router.post("", status_code=201)
async def log_sets(request: Request, payload: LogSetsIn):
    """Log completed sets for an exercise, entered in the given unit."""
    db_path = get_db(request)
    if await ExerciseRepository(db_path).get(payload.exercise_id) is None:
        raise HTTPException(status_code=404, detail="Exercise not found")

    unit = payload.unit
    if unit is None:
        unit = (await PreferencesRepository(db_path).get_or_create()).preferred_weight_unit

    entries = [SetEntry(weight=s.weight, reps=s.reps, is_completed=True) for s in payload.sets]
    saved = await log_exercise_sets(
        SetLogRepository(db_path), payload.exercise_id, entries, unit, notes=payload.notes
    )
    if payload.sets and not saved:
        raise HTTPException(status_code=500, detail="Sets could not be saved")
    return [log.to_dict() for log in saved]


@router.get("/previous/{exercise_id}")
async def previous_session(
    request: Request,
    exercise_id: str,
    window: SessionWindow = SessionWindow.SAME_DAY,
    before_today: bool = False,
    fill_gaps: bool = False,
):
    """Previous session for an exercise plus the pre-filled set rows."""
    db_path = get_db(request)
    unit = (await PreferencesRepository(db_path).get_or_create()).preferred_weight_unit
    logs = await SetLogRepository(db_path).list_all()

    previous = resolve_previous(
        logs,
        exercise_id,
        window=window,
        before=date.today() if before_today else None,
    )
    entries = build_set_entries(previous, unit, fill_gaps=fill_gaps)
    return {
        "unit": unit.value,
        "previous": [
            {
                "set_number": number,
                "weight": to_display(p.weight, unit),
                "weight_lbs": p.weight,
                "reps": p.reps,
            }
            for number, p in sorted(previous.items())
        ],
        "entries": [{"weight": e.weight, "reps": e.reps} for e in entries],
    }


@router.delete("/{set_log_id}")
async def delete_log(request: Request, set_log_id: str):
    repo = SetLogRepository(get_db(request))
    if await repo.get(set_log_id) is None:
        raise HTTPException(status_code=404, detail="Set log not found")
    await repo.delete(set_log_id)
    return {"deleted": set_log_id}
