"""Publisher-facing endpoints used by the embed script."""

from urllib.parse import urlencode

import httpx
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import RedirectResponse

from utils.risk import compute_risk

router = APIRouter()
trade_router = APIRouter()


@router.get("/gamma/market")
async def proxy_market(request: Request, slug: str = ""):
    """CORS-friendly passthrough of the first Gamma match for a slug."""
    slug = slug.strip()
    if not slug:
        raise HTTPException(400, "Missing slug")
    try:
        market = await request.app.state.gamma.fetch_market(slug)
    except (httpx.HTTPError, ValueError):
        raise HTTPException(502, "Gamma fetch failed")
    if not market:
        raise HTTPException(404, "Market not found")
    return market


@router.get("/embed/meta")
async def embed_meta(request: Request, slug: str = ""):
    slug = slug.strip()
    if not slug:
        raise HTTPException(400, "Missing slug")
    market = await request.app.state.gamma.get_market_by_slug(slug)
    if not market:
        raise HTTPException(404, "Market not found")
    evidence_count = await request.app.state.evidence_service.count_for_slug(slug)
    return {
        "slug": slug,
        "risk": compute_risk(market).model_dump(),
        "evidenceCount": evidence_count,
    }


@trade_router.api_route("/trade/{slug}", methods=["GET", "HEAD"])
async def trade_redirect(slug: str, pub: str = "", article: str = ""):
    """Send widget clicks to the landing page, keeping attribution params."""
    params = {k: v for k, v in (("pub", pub), ("article", article), ("slug", slug)) if v}
    target = "/?" + urlencode(params) if params else "/"
    return RedirectResponse(target, status_code=307)
