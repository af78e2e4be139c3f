"""Change alert API endpoints."""

from fastapi import APIRouter, Depends, Request

from core.auth import require_admin
from models.embed import CleanupAlertsRequest
from utils.watch_diff import UPDATED_AT_CHANGED, summarize_alert

router = APIRouter()


@router.get("/alerts")
async def list_alerts(request: Request, slug: str | None = None, limit: int = 50):
    svc = request.app.state.alerts_service
    slug = (slug or "").strip() or None
    alerts = await svc.list_alerts(slug=slug, limit=limit)
    return {
        "slug": slug,
        "alerts": [
            {**a.model_dump(), "summary": summarize_alert(a.kind)} for a in alerts
        ],
    }


@router.post("/alerts/cleanup", dependencies=[Depends(require_admin)])
async def cleanup_alerts(request: Request, body: CleanupAlertsRequest | None = None):
    svc = request.app.state.alerts_service
    kind = ((body.kind if body else None) or "").strip() or UPDATED_AT_CHANGED
    deleted = await svc.delete_by_kind(kind)
    return {"ok": True, "kind": kind, "deleted": deleted}
