"""Impression/click rollups over a window of tracked embed events."""

import pandas as pd

from utils.dedup import unique_event_key

EVENT_FIELDS = ["event", "slug", "question", "pub", "article", "page_url", "referrer", "ts"]
BREAKDOWN_LIMIT = 25
RECENT_LIMIT = 50


def _counts(df: pd.DataFrame) -> dict:
    impressions = df[df["event"] == "impression"]
    clicks = df[df["event"] == "click"]
    return {
        "impressions_total": int(len(impressions)),
        "clicks_total": int(len(clicks)),
        "impressions_unique": int(impressions["uniq_key"].nunique()),
        "clicks_unique": int(clicks["uniq_key"].nunique()),
    }


def _breakdown(df: pd.DataFrame, dim: str) -> list[dict]:
    rows = []
    for value, group in df.groupby(dim, sort=False):
        row = {dim: value}
        if dim == "slug":
            row["question"] = group["question"].max()
        row.update(_counts(group))
        rows.append(row)
    rows.sort(key=lambda r: (r["clicks_unique"], r["impressions_unique"]), reverse=True)
    return rows[:BREAKDOWN_LIMIT]


def summarize_events(
    events: list[dict],
    days: int,
    pub: str | None = None,
    article: str | None = None,
) -> dict:
    """Totals, CTR and per-pub/article/slug breakdowns for a list of events."""
    result = {
        "days": days,
        "filters": {"pub": pub or "", "article": article or ""},
        "totals": {
            "impressions_total": 0,
            "clicks_total": 0,
            "impressions_unique": 0,
            "clicks_unique": 0,
            "ctr": 0,
        },
        "byPub": [],
        "byArticle": [],
        "bySlug": [],
        "recent": [],
    }
    if not events:
        return result

    df = pd.DataFrame(events).reindex(columns=EVENT_FIELDS)
    text_cols = [c for c in EVENT_FIELDS if c != "ts"]
    df[text_cols] = df[text_cols].fillna("").astype(str)
    df["ts"] = pd.to_numeric(df["ts"], errors="coerce").fillna(0).astype("int64")
    df["uniq_key"] = [
        unique_event_key(int(ts), pub_, article_, slug, page_url)
        for ts, pub_, article_, slug, page_url in zip(
            df["ts"], df["pub"], df["article"], df["slug"], df["page_url"]
        )
    ]

    totals = _counts(df)
    totals["ctr"] = (
        totals["clicks_unique"] / totals["impressions_unique"]
        if totals["impressions_unique"] > 0
        else 0
    )
    result["totals"] = totals
    result["byPub"] = _breakdown(df, "pub")
    result["byArticle"] = _breakdown(df, "article")
    result["bySlug"] = _breakdown(df, "slug")

    recent = df.sort_values("ts", ascending=False, kind="stable").head(RECENT_LIMIT)
    result["recent"] = [
        {
            "event": row.event,
            "pub": row.pub,
            "article": row.article,
            "slug": row.slug,
            "page_url": row.page_url,
            "ts": int(row.ts),
        }
        for row in recent.itertuples(index=False)
    ]
    return result
