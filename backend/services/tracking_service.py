"""Tracking service — which slugs the watcher polls."""

import logging
from datetime import datetime, timezone

from core.es_client import ESClient
from models.tracking import TrackedSlugUpdate
from services.evidence_service import EvidenceService

logger = logging.getLogger(__name__)

TRACKED_INDEX = "tracked_slugs"


class TrackingService:
    def __init__(self, es: ESClient, evidence_svc: EvidenceService):
        self.es = es
        self.evidence_svc = evidence_svc

    async def get_tracked_slugs(self, size: int = 10000) -> list[dict]:
        """All explicit tracking entries, tracked or not."""
        result = await self.es.search(
            TRACKED_INDEX,
            query={"match_all": {}},
            sort=[{"slug": {"order": "asc"}}],
            size=size,
        )
        return [hit["_source"] for hit in result["hits"]["hits"]]

    async def set_tracking(self, slug: str, update: TrackedSlugUpdate) -> dict:
        """Create or update the tracking entry for a slug."""
        now = datetime.now(timezone.utc).isoformat()

        existing = await self.es.get(TRACKED_INDEX, slug)
        if existing:
            doc = existing
            doc.update(update.model_dump(exclude_none=True))
            doc["updated_at_utc"] = now
        else:
            doc = update.model_dump(exclude_none=True)
            doc["slug"] = slug
            doc["created_at_utc"] = now
            doc["updated_at_utc"] = now

        await self.es.index_doc(TRACKED_INDEX, slug, doc)
        logger.info("Updated tracking for %s: is_tracked=%s", slug, doc.get("is_tracked"))
        return doc

    async def list_watch_slugs(self, limit: int = 1000) -> list[str]:
        """Evidence slugs plus explicitly tracked ones, minus explicitly untracked."""
        slugs = set(await self.evidence_svc.distinct_slugs(limit))
        for entry in await self.get_tracked_slugs():
            if entry.get("is_tracked", True):
                slugs.add(entry["slug"])
            else:
                slugs.discard(entry["slug"])
        return sorted(slugs)[:limit]
