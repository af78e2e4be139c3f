"""Field-by-field comparison of two market snapshots into typed changes."""

import json

from models.watch import MarketSnapshot

WATCH_INITIALIZED = "watch_initialized"
MARKET_MISSING = "market_missing"
QUESTION_CHANGED = "question_changed"
RESOLUTION_SOURCE_CHANGED = "resolution_source_changed"
STATUS_CHANGED = "status_changed"
RESTRICTED_CHANGED = "restricted_changed"
END_DATE_CHANGED = "end_date_changed"
OUTCOMES_CHANGED = "outcomes_changed"
DESCRIPTION_CHANGED = "description_changed"
YES_PRICE_JUMP = "yes_price_jump"
# Emitted by earlier versions of the watcher; only purged, never produced.
UPDATED_AT_CHANGED = "updated_at_changed"

ALERT_SUMMARIES = {
    WATCH_INITIALIZED: "Started watching this market (baseline snapshot saved).",
    MARKET_MISSING: "Market disappeared from Gamma (or API error).",
    QUESTION_CHANGED: "Market question changed.",
    RESOLUTION_SOURCE_CHANGED: "Resolution source changed.",
    STATUS_CHANGED: "Market status changed (active/closed).",
    RESTRICTED_CHANGED: "Restricted flag changed.",
    END_DATE_CHANGED: "End date changed.",
    OUTCOMES_CHANGED: "Outcome list changed.",
    DESCRIPTION_CHANGED: "Rules text changed (market description changed).",
    YES_PRICE_JUMP: "First outcome price moved past the jump threshold.",
    UPDATED_AT_CHANGED: "Market updatedAt changed.",
}


def summarize_alert(kind: str) -> str:
    return ALERT_SUMMARIES.get(kind, kind or "alert")


def dump_list(values: list | None) -> str | None:
    if values is None:
        return None
    return json.dumps(values, separators=(",", ":"))


def baseline_summary(snapshot: MarketSnapshot) -> str:
    """JSON summary stored as new_value of the watch_initialized alert."""
    return json.dumps({
        "resolutionSource": snapshot.resolution_source,
        "status": snapshot.status,
        "restricted": snapshot.restricted,
        "endDate": snapshot.end_date,
        "descriptionSignature": snapshot.description_signature,
        "outcomes": snapshot.outcomes,
    })


def _change(kind: str, old, new) -> dict:
    return {"kind": kind, "old_value": old, "new_value": new}


def diff_snapshots(
    prev: MarketSnapshot,
    cur: MarketSnapshot,
    price_jump_threshold: float = 0.0,
) -> list[dict]:
    """Return one change dict per differing field, in a fixed order.

    updated_at is deliberately not compared.
    """
    changes = []

    pairs = [
        (QUESTION_CHANGED, prev.question, cur.question),
        (RESOLUTION_SOURCE_CHANGED, prev.resolution_source, cur.resolution_source),
        (STATUS_CHANGED, prev.status, cur.status),
        (RESTRICTED_CHANGED, str(prev.restricted), str(cur.restricted)),
        (END_DATE_CHANGED, prev.end_date, cur.end_date),
        (OUTCOMES_CHANGED, dump_list(prev.outcomes), dump_list(cur.outcomes)),
        (DESCRIPTION_CHANGED, prev.description_signature, cur.description_signature),
    ]
    for kind, old, new in pairs:
        if old != new:
            changes.append(_change(kind, old, new))

    if price_jump_threshold > 0:
        old_price, new_price = prev.yes_price, cur.yes_price
        if old_price is not None and new_price is not None:
            if round(abs(new_price - old_price), 6) >= price_jump_threshold:
                changes.append(_change(YES_PRICE_JUMP, str(old_price), str(new_price)))

    return changes
