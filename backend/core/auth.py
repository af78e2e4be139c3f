"""Shared-secret access checks for admin and scheduler callers."""

import enum
import hmac
import logging

from fastapi import Header, HTTPException

import config

logger = logging.getLogger(__name__)


class Access(enum.Enum):
    ALLOWED = "allowed"
    UNAUTHORIZED = "unauthorized"
    NOT_CONFIGURED = "not_configured"


def _matches(provided: str | None, secret: str) -> bool:
    if not secret or not provided:
        return False
    return hmac.compare_digest(provided.encode(), secret.encode())


def bearer_token(authorization: str | None) -> str | None:
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def check_access(
    admin_key: str | None,
    authorization: str | None,
    admin_secret: str,
    cron_secret: str = "",
) -> Access:
    """Admin key header or cron bearer token; either one is enough.

    Fails closed with NOT_CONFIGURED when no secret exists server-side.
    """
    if not admin_secret and not cron_secret:
        return Access.NOT_CONFIGURED
    if _matches(admin_key, admin_secret):
        return Access.ALLOWED
    if _matches(bearer_token(authorization), cron_secret):
        return Access.ALLOWED
    return Access.UNAUTHORIZED


def _enforce(access: Access, missing: str):
    if access is Access.NOT_CONFIGURED:
        logger.error("Refusing request: %s is not configured", missing)
        raise HTTPException(500, f"Missing {missing}")
    if access is Access.UNAUTHORIZED:
        raise HTTPException(401, "Unauthorized")


async def require_admin(x_admin_key: str | None = Header(None)):
    """FastAPI dependency: admin key only."""
    _enforce(check_access(x_admin_key, None, config.ADMIN_API_KEY), "ADMIN_API_KEY")


async def require_admin_or_cron(
    x_admin_key: str | None = Header(None),
    authorization: str | None = Header(None),
):
    """FastAPI dependency: admin key or scheduler bearer token."""
    access = check_access(
        x_admin_key, authorization, config.ADMIN_API_KEY, config.CRON_SECRET
    )
    _enforce(access, "ADMIN_API_KEY or CRON_SECRET")
