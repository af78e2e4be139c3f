"""Publisher token issuance."""

from fastapi import APIRouter, Depends, HTTPException

import config
from core.auth import require_admin
from models.embed import PublisherTokenRequest
from utils.tokens import issue_token

router = APIRouter()


@router.post("/publishers/token", dependencies=[Depends(require_admin)])
async def create_publisher_token(body: PublisherTokenRequest):
    secret = config.EMBED_SIGNING_SECRET
    if not secret:
        raise HTTPException(500, "Missing EMBED_SIGNING_SECRET")
    pub = body.pub.strip()
    if not pub:
        raise HTTPException(400, "pub required")
    return {"pub": pub, "token": issue_token(pub, secret)}
