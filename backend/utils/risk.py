"""Heuristic dispute-risk score for a raw Gamma market.

Additive point system, clamped to 0-100. The constants are a default policy
rather than a calibrated model.
"""

from urllib.parse import urlparse

from models.risk import RiskAssessment
from utils.time import DAY_MS, now_ms, parse_iso_ms

SUBJECTIVE_SIGNALS = [
    "consensus",
    "considered",
    "qualify",
    "interpret",
    "based on",
    "reporting",
    "first entity",
    "announcement",
    "non-finalized",
    "will not qualify",
    "at the discretion",
    "resolve according",
]

HIGH_THRESHOLD = 60
MEDIUM_THRESHOLD = 30


def _to_float(value) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def risk_level(score: int) -> str:
    if score >= HIGH_THRESHOLD:
        return "HIGH"
    if score >= MEDIUM_THRESHOLD:
        return "MEDIUM"
    return "LOW"


def compute_risk(market: dict | None, now: int | None = None) -> RiskAssessment:
    """Score a market. `now` is epoch ms and defaults to the current time."""
    market = market or {}
    now = now_ms() if now is None else now

    description = str(market.get("description") or "").lower()
    resolution_source = str(market.get("resolutionSource") or "").strip()

    score = 0
    reasons: list[str] = []

    # Weak or missing resolution source
    if not resolution_source:
        score += 20
        reasons.append("Missing resolution source (harder to verify).")
    else:
        parsed = urlparse(resolution_source)
        if not parsed.scheme or not (parsed.netloc or parsed.path):
            score += 10
            reasons.append("Resolution source is not a valid URL.")
        elif parsed.scheme not in ("http", "https"):
            score += 10
            reasons.append("Resolution source is not a normal web URL.")

    # Subjective / consensus wording
    hits = [kw for kw in SUBJECTIVE_SIGNALS if kw in description]
    if hits:
        score += min(30, 8 + len(hits) * 3)
        reasons.append(
            f"Subjective/ambiguous wording detected ({', '.join(hits[:5])})."
        )

    # Very new markets still get clarifications
    start_ms = parse_iso_ms(market.get("startDate"))
    if start_ms is not None:
        age_days = (now - start_ms) // DAY_MS
        if age_days < 3:
            score += 6
            reasons.append(
                "Very new market (details may change / clarifications may arrive)."
            )

    if market.get("restricted") is True:
        score += 8
        reasons.append("Restricted market.")

    # Incentive risk around resolution
    vol24 = _to_float(market.get("volume24hr"))
    if vol24 > 50_000:
        score += 10
        reasons.append("High 24h volume (strong incentives around resolution).")
    elif vol24 > 10_000:
        score += 6
        reasons.append("Moderate 24h volume.")

    score = max(0, min(100, score))
    return RiskAssessment(score=score, level=risk_level(score), reasons=reasons)
