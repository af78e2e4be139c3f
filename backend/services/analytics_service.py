"""Analytics service — record embed impressions/clicks and roll them up."""

import logging
import math

from core.es_client import ESClient
from models.embed import TrackEventRequest
from utils.stats import summarize_events
from utils.time import DAY_MS, now_ms

logger = logging.getLogger(__name__)

EVENTS_INDEX = "events"
VALID_EVENTS = ("impression", "click")
MAX_WINDOW_EVENTS = 10000

FIELD_LIMITS = {
    "slug": 200,
    "question": 300,
    "pub": 120,
    "article": 200,
    "page_url": 500,
    "referrer": 500,
}


class AnalyticsService:
    def __init__(self, es: ESClient):
        self.es = es

    async def record(self, body: TrackEventRequest, pub: str) -> dict:
        """Store one event with truncated text fields. Missing ts means now."""
        ts = body.ts if body.ts is not None and math.isfinite(body.ts) else None
        values = body.model_dump()
        values["pub"] = pub
        doc = {
            field: (values.get(field) or "")[:limit]
            for field, limit in FIELD_LIMITS.items()
        }
        doc["event"] = body.event
        doc["ts"] = int(ts) if ts is not None else now_ms()
        await self.es.index_doc(EVENTS_INDEX, None, doc)
        return doc

    async def get_stats(
        self,
        days: int = 7,
        pub: str | None = None,
        article: str | None = None,
    ) -> dict:
        cutoff = now_ms() - days * DAY_MS
        must = [{"range": {"ts": {"gte": cutoff}}}]
        if pub:
            must.append({"term": {"pub": pub}})
        if article:
            must.append({"term": {"article": article}})

        result = await self.es.search(
            EVENTS_INDEX,
            query={"bool": {"must": must}},
            sort=[{"ts": {"order": "desc"}}],
            size=MAX_WINDOW_EVENTS,
        )
        events = [h["_source"] for h in result["hits"]["hits"]]
        if len(events) == MAX_WINDOW_EVENTS:
            logger.warning("Stats window truncated at %d events", MAX_WINDOW_EVENTS)
        return summarize_events(events, days, pub=pub, article=article)
