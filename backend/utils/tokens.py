"""HMAC-signed publisher tokens for the analytics beacon.

Format: base64url("<pub>:<issued_at_ms>") + "." + hex(HMAC-SHA256(payload)).
"""

import base64
import binascii
import hashlib
import hmac

from utils.time import DAY_MS, now_ms

TOKEN_MAX_AGE_MS = 30 * DAY_MS


def sign(payload: str, secret: str) -> str:
    return hmac.new(secret.encode(), payload.encode(), hashlib.sha256).hexdigest()


def _b64encode(text: str) -> str:
    return base64.urlsafe_b64encode(text.encode()).decode().rstrip("=")


def _b64decode(data: str) -> str:
    padded = data + "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(padded.encode()).decode()


def issue_token(pub: str, secret: str, issued_at: int | None = None) -> str:
    issued_at = now_ms() if issued_at is None else issued_at
    payload = f"{pub}:{issued_at}"
    return f"{_b64encode(payload)}.{sign(payload, secret)}"


def verify_token(pub: str, token: str, secret: str, now: int | None = None) -> bool:
    """Check pub match, 30-day lifetime and signature."""
    b64, _, sig = (token or "").partition(".")
    if not b64 or not sig:
        return False
    try:
        payload = _b64decode(b64)
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return False

    token_pub, _, issued_at_str = payload.rpartition(":")
    if token_pub != pub:
        return False
    try:
        issued_at = int(issued_at_str)
    except ValueError:
        return False

    now = now_ms() if now is None else now
    if now - issued_at > TOKEN_MAX_AGE_MS:
        return False

    return hmac.compare_digest(sign(payload, secret), sig)
