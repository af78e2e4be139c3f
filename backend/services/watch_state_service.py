"""Watch state store — last-seen snapshot per market slug."""

import logging

from core.es_client import ESClient
from models.watch import WatchRecord

logger = logging.getLogger(__name__)

WATCH_INDEX = "market_watch"


class WatchStateService:
    def __init__(self, es: ESClient):
        self.es = es

    async def get(self, slug: str) -> WatchRecord | None:
        doc = await self.es.get(WATCH_INDEX, slug)
        return WatchRecord(**doc) if doc else None

    async def get_many(self, slugs: list[str]) -> dict[str, WatchRecord]:
        docs = await self.es.mget(WATCH_INDEX, slugs)
        return {slug: WatchRecord(**doc) for slug, doc in docs.items()}

    async def upsert(self, record: WatchRecord) -> None:
        """Keyed by slug; last writer wins."""
        await self.es.index_doc(WATCH_INDEX, record.slug, record.model_dump())
