"""Impression/click beacon and stats endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Request

import config
from models.embed import TrackEventRequest
from services.analytics_service import VALID_EVENTS
from utils.tokens import verify_token

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/track")
async def track_event(request: Request, body: TrackEventRequest):
    # Only allow-listed sites may post stats
    if config.ALLOWED_ORIGINS:
        origin = request.headers.get("origin", "")
        if not origin or origin not in config.ALLOWED_ORIGINS:
            raise HTTPException(403, "Origin not allowed")

    if body.event not in VALID_EVENTS:
        raise HTTPException(400, "Invalid event")

    pub = body.pub or "unknown"
    secret = config.EMBED_SIGNING_SECRET
    if secret and not verify_token(pub, body.token or "", secret):
        logger.info("Rejected event with bad token for pub=%s", pub)
        raise HTTPException(401, "Invalid publisher token")

    await request.app.state.analytics_service.record(body, pub)
    return {"ok": True}


@router.get("/stats")
async def get_stats(
    request: Request,
    days: int = 7,
    pub: str | None = None,
    article: str | None = None,
):
    svc = request.app.state.analytics_service
    return await svc.get_stats(
        days=days if days > 0 else 7,
        pub=pub or None,
        article=article or None,
    )
