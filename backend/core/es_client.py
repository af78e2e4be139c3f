"""Elasticsearch client wrapper with keyed upserts, queries and index management."""

import logging
from typing import Any

from elasticsearch import AsyncElasticsearch, NotFoundError

logger = logging.getLogger(__name__)


class ESClient:
    def __init__(self, hosts: list[str], timeout: int = 30):
        self.client = AsyncElasticsearch(hosts=hosts, request_timeout=timeout)

    async def close(self):
        await self.client.close()

    async def health(self) -> dict:
        return await self.client.cluster.health()

    async def ensure_index(self, name: str, body: dict) -> bool:
        """Create index if it doesn't exist. If it exists, update mappings with any new fields."""
        if await self.client.indices.exists(index=name):
            # ES allows adding fields to a mapping, not modifying them
            if "mappings" in body and "properties" in body["mappings"]:
                try:
                    await self.client.indices.put_mapping(
                        index=name, properties=body["mappings"]["properties"]
                    )
                    logger.info("Updated mappings for index: %s", name)
                except Exception as e:
                    logger.warning("Could not update mappings for %s: %s", name, e)
            return False
        await self.client.indices.create(index=name, body=body)
        logger.info("Created index: %s", name)
        return True

    async def index_doc(self, index: str, doc_id: str | None, body: dict) -> dict:
        """Index a document; an existing doc with the same id is replaced."""
        return await self.client.index(index=index, id=doc_id, document=body)

    async def get(self, index: str, doc_id: str) -> dict | None:
        try:
            result = await self.client.get(index=index, id=doc_id)
            return result["_source"]
        except NotFoundError:
            return None

    async def search(
        self,
        index: str,
        query: dict | None = None,
        sort: list | None = None,
        size: int = 100,
        from_: int = 0,
        aggs: dict | None = None,
    ) -> dict:
        body: dict[str, Any] = {"size": size, "from": from_}
        if query:
            body["query"] = query
        if sort:
            body["sort"] = sort
        if aggs:
            body["aggs"] = aggs
        return await self.client.search(index=index, body=body)

    async def count(self, index: str, query: dict | None = None) -> int:
        body = {"query": query} if query else {}
        result = await self.client.count(index=index, body=body)
        return result["count"]

    async def mget(self, index: str, ids: list[str]) -> dict[str, dict]:
        """Fetch multiple documents by ID. Returns {doc_id: source} for found docs."""
        if not ids:
            return {}
        result = await self.client.mget(index=index, ids=ids)
        return {
            doc["_id"]: doc["_source"]
            for doc in result["docs"]
            if doc.get("found")
        }

    async def distinct_values(
        self, index: str, field: str, size: int = 1000, query: dict | None = None
    ) -> list[str]:
        """Distinct keyword values of a field, ascending."""
        result = await self.search(
            index,
            query=query,
            size=0,
            aggs={"values": {"terms": {"field": field, "size": size, "order": {"_key": "asc"}}}},
        )
        return [b["key"] for b in result["aggregations"]["values"]["buckets"]]

    async def delete_by_query(self, index: str, query: dict) -> int:
        """Delete all matching docs. Returns the number deleted."""
        result = await self.client.delete_by_query(index=index, query=query, refresh=True)
        deleted = result.get("deleted", 0)
        logger.info("Deleted %d docs from %s", deleted, index)
        return deleted
