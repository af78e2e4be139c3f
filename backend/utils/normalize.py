"""Extract and coerce the comparison fields of a raw Gamma market."""

import hashlib
import json
import math

from models.watch import MarketSnapshot


def norm_str(value) -> str | None:
    """Trimmed string, with empty and missing both mapped to None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def flag(value) -> int:
    """1 only for a real boolean True."""
    return 1 if value is True else 0


def _load_list(value) -> list | None:
    if isinstance(value, list):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = json.loads(value)
    except (json.JSONDecodeError, TypeError):
        return None
    return parsed if isinstance(parsed, list) else None


def parse_outcomes(value) -> list[str] | None:
    items = _load_list(value)
    if items is None:
        return None
    return [str(item) for item in items]


def parse_prices(value) -> list[float] | None:
    """All-or-nothing numeric parse; a single bad element voids the array."""
    items = _load_list(value)
    if items is None:
        return None
    prices = []
    for item in items:
        if isinstance(item, bool):
            return None
        try:
            price = float(item)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(price):
            return None
        prices.append(price)
    return prices


def description_signature(description) -> str | None:
    text = "" if description is None else str(description)
    if not text:
        return None
    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()
    return f"{digest}:{len(text)}"


def market_end_date(market: dict) -> str | None:
    events = market.get("events")
    if isinstance(events, list) and events and isinstance(events[0], dict):
        end_date = norm_str(events[0].get("endDate"))
        if end_date:
            return end_date
    return norm_str(market.get("endDate"))


def normalize_market(market: dict | None) -> MarketSnapshot | None:
    """Build a MarketSnapshot, or None when the market is absent."""
    if not isinstance(market, dict):
        return None
    return MarketSnapshot(
        question=norm_str(market.get("question")),
        resolution_source=norm_str(market.get("resolutionSource")),
        active=flag(market.get("active")),
        closed=flag(market.get("closed")),
        restricted=flag(market.get("restricted")),
        end_date=market_end_date(market),
        updated_at=norm_str(market.get("updatedAt")),
        outcomes=parse_outcomes(market.get("outcomes")),
        outcome_prices=parse_prices(market.get("outcomePrices")),
        description_signature=description_signature(market.get("description")),
    )


def load_market_json(raw: str | None) -> dict | None:
    """Decode a stored market JSON blob; anything unusable is None."""
    if not raw:
        return None
    try:
        market = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return None
    return market if isinstance(market, dict) else None
