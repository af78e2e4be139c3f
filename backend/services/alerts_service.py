"""Alert store — append-only log of detected market changes."""

import logging

from core.es_client import ESClient
from models.watch import AlertRecord
from utils.dedup import generate_alert_doc_id

logger = logging.getLogger(__name__)

ALERTS_INDEX = "alerts"
MAX_LIST_LIMIT = 200


class AlertsService:
    def __init__(self, es: ESClient):
        self.es = es
        self._last_ms = -1
        self._seq = 0

    def _next_id(self, created_at: int) -> str:
        if created_at != self._last_ms:
            self._last_ms = created_at
            self._seq = 0
        self._seq += 1
        return generate_alert_doc_id(created_at, self._seq)

    async def insert(
        self,
        slug: str,
        kind: str,
        old_value: str | None,
        new_value: str | None,
        created_at: int,
    ) -> AlertRecord:
        """Append one alert."""
        alert = AlertRecord(
            id=self._next_id(created_at),
            slug=slug,
            kind=kind,
            old_value=old_value,
            new_value=new_value,
            created_at=created_at,
        )
        await self.es.index_doc(ALERTS_INDEX, alert.id, alert.model_dump())
        return alert

    async def list_alerts(self, slug: str | None = None, limit: int = 50) -> list[AlertRecord]:
        """Newest first, optionally for one slug."""
        limit = max(1, min(limit, MAX_LIST_LIMIT))
        query = {"term": {"slug": slug}} if slug else {"match_all": {}}
        result = await self.es.search(
            ALERTS_INDEX,
            query=query,
            sort=[{"created_at": {"order": "desc"}}, {"id": {"order": "desc"}}],
            size=limit,
        )
        return [AlertRecord(**h["_source"]) for h in result["hits"]["hits"]]

    async def count_for_slug(self, slug: str) -> int:
        return await self.es.count(ALERTS_INDEX, query={"term": {"slug": slug}})

    async def delete_by_kind(self, kind: str) -> int:
        """Administrative purge; the only way alerts are ever removed."""
        deleted = await self.es.delete_by_query(ALERTS_INDEX, {"term": {"kind": kind}})
        logger.info("Purged %d alerts of kind %s", deleted, kind)
        return deleted
