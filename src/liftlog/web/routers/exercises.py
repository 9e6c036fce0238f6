"""Exercise library routes."""

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from ...db.repositories import ExerciseRepository
from ...models.exercise import Exercise
from ..deps import get_db

router = APIRouter(prefix="/exercises", tags=["exercises"])


class ExerciseIn(BaseModel):
    name: str
    target_muscle_group: str
    instructions: str | None = None
    form_cues: str | None = None
    video_url: str | None = None


def _to_json(exercise: Exercise) -> dict:
    data = exercise.to_dict()
    data["form_cue_list"] = exercise.form_cue_list
    return data


@router.get("")
async def list_exercises(request: Request, group: str | None = None):
    """List the library, optionally for one muscle group."""
    repo = ExerciseRepository(get_db(request))
    items = await repo.list_by_muscle_group(group) if group else await repo.list_all()
    return [_to_json(ex) for ex in items]


@router.get("/groups")
async def muscle_groups(request: Request):
    return await ExerciseRepository(get_db(request)).muscle_groups()


@router.post("", status_code=201)
async def create_exercise(request: Request, payload: ExerciseIn):
    repo = ExerciseRepository(get_db(request))
    if await repo.get_by_name(payload.name):
        raise HTTPException(status_code=409, detail="Exercise already exists")
    exercise = Exercise(**payload.model_dump())
    await repo.create(exercise)
    return _to_json(exercise)


@router.get("/{exercise_id}")
async def get_exercise(request: Request, exercise_id: str):
    exercise = await ExerciseRepository(get_db(request)).get(exercise_id)
    if exercise is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return _to_json(exercise)


@router.delete("/{exercise_id}")
async def delete_exercise(request: Request, exercise_id: str):
    """Delete an exercise and all of its set logs."""
    repo = ExerciseRepository(get_db(request))
    if await repo.get(exercise_id) is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    removed = await repo.delete(exercise_id)
    return {"deleted": exercise_id, "deleted_logs": removed}
