"""Scheduler status endpoint."""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/jobs/status")
async def get_job_status(request: Request):
    scheduler = request.app.state.scheduler
    return scheduler.get_status()
