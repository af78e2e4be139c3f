"""Evidence capture and listing endpoints."""

import httpx
from fastapi import APIRouter, Depends, HTTPException, Request

from core.auth import require_admin
from models.embed import SaveEvidenceRequest

router = APIRouter()


@router.post("/evidence/save", dependencies=[Depends(require_admin)])
async def save_evidence(
    request: Request,
    body: SaveEvidenceRequest | None = None,
    slug: str | None = None,
):
    body = body or SaveEvidenceRequest()
    slug = (body.slug or slug or "").strip()
    if not slug:
        raise HTTPException(400, "Missing slug")

    gamma = request.app.state.gamma
    try:
        market = await gamma.fetch_market(slug)
    except (httpx.HTTPError, ValueError):
        raise HTTPException(502, "Gamma fetch failed")
    if not market:
        raise HTTPException(404, "Market not found")

    svc = request.app.state.evidence_service
    doc = await svc.save(
        slug,
        market,
        manual_evidence_url=body.resolutionUrl or body.resolution_url,
        notes=body.notes,
    )
    return {
        "ok": True,
        "slug": slug,
        "question": doc["question"],
        "resolution_source": doc["resolution_source"],
        "resolution_url": doc["resolution_url"],
        "notes": doc["notes"],
        "savedAt": doc["created_at"],
    }


@router.get("/evidence/list")
async def list_evidence(request: Request, slug: str = ""):
    slug = slug.strip()
    if not slug:
        raise HTTPException(400, "Missing slug")
    svc = request.app.state.evidence_service
    return {"slug": slug, "evidence": await svc.list_for_slug(slug)}
