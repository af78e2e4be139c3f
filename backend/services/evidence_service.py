"""Evidence service — saved market snapshots plus resolution page captures."""

import json
import logging
import uuid

import httpx

from core.es_client import ESClient
from utils.normalize import norm_str
from utils.time import now_ms

logger = logging.getLogger(__name__)

EVIDENCE_INDEX = "evidence"
MAX_RESOLUTION_HTML = 120_000


class EvidenceService:
    def __init__(
        self,
        es: ESClient,
        timeout: int = 20,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.es = es
        self.timeout = timeout
        self._transport = transport

    async def fetch_resolution_html(self, url: str) -> str | None:
        """Best-effort capture of the resolution page, truncated."""
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, follow_redirects=True, transport=self._transport
            ) as client:
                resp = await client.get(url)
                return resp.text[:MAX_RESOLUTION_HTML]
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Could not fetch resolution page %s: %s", url, e)
            return None

    async def save(
        self,
        slug: str,
        market: dict,
        manual_evidence_url: str | None = None,
        notes: str | None = None,
    ) -> dict:
        """Store a snapshot of the market. A manual URL wins over resolutionSource."""
        question = norm_str(market.get("question"))
        resolution_source = norm_str(market.get("resolutionSource"))
        manual_evidence_url = norm_str(manual_evidence_url)
        resolution_url = manual_evidence_url or resolution_source

        resolution_html = None
        if resolution_url:
            resolution_html = await self.fetch_resolution_html(resolution_url)

        created_at = now_ms()
        doc = {
            "id": str(uuid.uuid4()),
            "slug": slug,
            "question": question,
            "resolution_source": resolution_source,
            "resolution_url": resolution_url,
            "manual_evidence_url": manual_evidence_url,
            "notes": norm_str(notes),
            "market_json": json.dumps(market),
            "resolution_html": resolution_html,
            "created_at": created_at,
        }
        await self.es.index_doc(EVIDENCE_INDEX, doc["id"], doc)
        logger.info("Saved evidence for %s (resolution_url=%s)", slug, resolution_url)
        return doc

    async def list_for_slug(self, slug: str, limit: int = 20) -> list[dict]:
        """Evidence summaries, newest first. Raw market JSON and HTML are omitted."""
        result = await self.es.search(
            EVIDENCE_INDEX,
            query={"term": {"slug": slug}},
            sort=[{"created_at": {"order": "desc"}}],
            size=limit,
        )
        items = []
        for hit in result["hits"]["hits"]:
            doc = hit["_source"]
            items.append({
                "id": doc.get("id"),
                "slug": doc.get("slug"),
                "created_at": doc.get("created_at"),
                "resolution_url": doc.get("resolution_url"),
                "question": doc.get("question"),
                "resolution_source": doc.get("resolution_source"),
                "manual_evidence_url": doc.get("manual_evidence_url"),
                "notes": doc.get("notes"),
                "saved_at": doc.get("created_at"),
            })
        return items

    async def count_for_slug(self, slug: str) -> int:
        return await self.es.count(EVIDENCE_INDEX, query={"term": {"slug": slug}})

    async def distinct_slugs(self, limit: int = 1000) -> list[str]:
        return await self.es.distinct_values(EVIDENCE_INDEX, "slug", size=limit)
