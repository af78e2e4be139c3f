"""Watch run trigger, watch list overview and per-market risk endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request

from core.auth import require_admin_or_cron
from services.watch_service import WatchRunInProgressError
from utils.normalize import load_market_json, normalize_market
from utils.risk import compute_risk
from utils.watch_diff import summarize_alert

router = APIRouter()

MAX_WATCHLIST_LIMIT = 1000


@router.post("/watch/run", dependencies=[Depends(require_admin_or_cron)])
async def run_watch(request: Request):
    svc = request.app.state.watch_service
    try:
        summary = await svc.run()
    except WatchRunInProgressError as e:
        raise HTTPException(409, str(e))
    return summary.model_dump()


@router.get("/watchlist")
async def get_watchlist(request: Request, limit: int = 200):
    tracking = request.app.state.tracking_service
    watch_state = request.app.state.watch_state_service
    alerts = request.app.state.alerts_service

    limit = max(1, min(limit, MAX_WATCHLIST_LIMIT))
    slugs = await tracking.list_watch_slugs(limit)
    records = await watch_state.get_many(slugs)

    rows = []
    for slug in slugs:
        watch = records.get(slug)
        market = load_market_json(watch.last_market_json) if watch else None
        risk = compute_risk(market) if market else None
        rows.append({
            "slug": slug,
            "question": (watch.question if watch else None)
            or (market or {}).get("question")
            or slug,
            "last_checked": watch.last_checked if watch else None,
            "last_resolution_source": watch.last_resolution_source if watch else None,
            "status": f"{watch.last_active}/{watch.last_closed}" if watch else "-",
            "alerts": await alerts.count_for_slug(slug),
            "risk_level": risk.level if risk else None,
            "risk_score": risk.score if risk else None,
        })
    return {"rows": rows}


@router.get("/risk/{slug}")
async def get_market_risk(request: Request, slug: str):
    """Live market view with risk, saved evidence and alert history."""
    slug = slug.strip()
    if not slug:
        raise HTTPException(400, "Missing slug")

    gamma = request.app.state.gamma
    market = await gamma.get_market_by_slug(slug)
    snapshot = normalize_market(market)

    evidence = await request.app.state.evidence_service.list_for_slug(slug, limit=25)
    alerts = await request.app.state.alerts_service.list_alerts(slug=slug, limit=50)

    return {
        "slug": slug,
        "market": snapshot.model_dump() if snapshot else None,
        "risk": compute_risk(market).model_dump() if market else None,
        "evidence": evidence,
        "alerts": [
            {**a.model_dump(), "summary": summarize_alert(a.kind)} for a in alerts
        ],
    }
