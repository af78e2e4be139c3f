"""Watch list membership API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request

from core.auth import require_admin
from models.tracking import TrackedSlug, TrackedSlugUpdate

router = APIRouter()


@router.get("/tracked_slugs", response_model=list[TrackedSlug])
async def get_tracked_slugs(request: Request):
    svc = request.app.state.tracking_service
    return await svc.get_tracked_slugs()


@router.post(
    "/tracked_slugs/{slug}",
    response_model=TrackedSlug,
    dependencies=[Depends(require_admin)],
)
async def set_tracking(request: Request, slug: str, body: TrackedSlugUpdate):
    slug = slug.strip()
    if not slug:
        raise HTTPException(400, "Missing slug")
    svc = request.app.state.tracking_service
    return await svc.set_tracking(slug, body)
