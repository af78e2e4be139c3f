"""Deterministic, time-ordered document IDs and analytics uniqueness keys."""

UNIQUE_WINDOW_MS = 30 * 60 * 1000


def generate_alert_doc_id(created_at_ms: int, seq: int) -> str:
    """Generate a sortable alert id: '{13-digit epoch ms}-{4-digit sequence}'.

    Zero padding makes lexicographic order equal creation order, so a keyword
    sort on the id is monotonic across runs and within a run.
    """
    return f"{created_at_ms:013d}-{seq:04d}"


def unique_event_key(
    ts: int,
    pub: str | None,
    article: str | None,
    slug: str | None,
    page_url: str | None,
) -> str:
    """Events sharing a 30-minute bucket and placement count once."""
    bucket = ts // UNIQUE_WINDOW_MS
    return ":".join([str(bucket), pub or "", article or "", slug or "", page_url or ""])
