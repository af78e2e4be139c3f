"""Watcher settings endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request

from core.auth import require_admin
from models.settings import SettingsUpdate
from services.settings_service import InvalidSettingsError

router = APIRouter()

SCHEDULE_FIELDS = {"watch_enabled", "watch_interval_minutes", "cron_expression"}


@router.get("/settings")
async def get_settings(request: Request):
    settings = await request.app.state.settings_service.get()
    return settings.model_dump(mode="json")


@router.post("/settings", dependencies=[Depends(require_admin)])
async def update_settings(request: Request, body: SettingsUpdate):
    try:
        updated = await request.app.state.settings_service.update(body)
    except InvalidSettingsError as e:
        raise HTTPException(400, str(e))

    if body.model_fields_set & SCHEDULE_FIELDS:
        await request.app.state.scheduler.update_schedule()

    return updated.model_dump(mode="json")
