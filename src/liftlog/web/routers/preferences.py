"""Preferences routes."""

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ...db.repositories import PreferencesRepository
from ...models.units import WeightUnit
from ..deps import get_db

router = APIRouter(prefix="/preferences", tags=["preferences"])


class PreferencesIn(BaseModel):
    preferred_weight_unit: WeightUnit | None = None
    enable_rest_timer: bool | None = None
    default_rest_duration: int | None = None
    health_sync_enabled: bool | None = None


@router.get("")
async def get_preferences(request: Request):
    prefs = await PreferencesRepository(get_db(request)).get_or_create()
    return prefs.to_dict()


@router.put("")
async def update_preferences(request: Request, payload: PreferencesIn):
    """Change any subset of the preferences."""
    repo = PreferencesRepository(get_db(request))
    prefs = await repo.get_or_create()

    if payload.preferred_weight_unit is not None:
        prefs.preferred_weight_unit = payload.preferred_weight_unit
    if payload.enable_rest_timer is not None:
        prefs.enable_rest_timer = payload.enable_rest_timer
    if payload.default_rest_duration is not None:
        prefs.set_rest_duration(payload.default_rest_duration)
    if payload.health_sync_enabled is not None:
        prefs.health_sync_enabled = payload.health_sync_enabled

    await repo.save(prefs)
    return prefs.to_dict()
