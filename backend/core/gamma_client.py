"""Polymarket Gamma API client for slug lookups with retry logic."""

import logging

import httpx

from utils.retry import retry_with_backoff

logger = logging.getLogger(__name__)

BASE_URL = "https://gamma-api.polymarket.com"


class GammaClient:
    def __init__(self, base_url: str = BASE_URL, timeout: int = 30):
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def close(self):
        await self._client.aclose()

    @retry_with_backoff(max_attempts=3, base_delay=1.0)
    async def _get(self, path: str, params: dict | None = None) -> dict | list:
        resp = await self._client.get(path, params=params)
        resp.raise_for_status()
        return resp.json()

    async def fetch_market(self, slug: str) -> dict | None:
        """Fetch a market by slug. Raises on transport or HTTP errors.

        Gamma answers with a list; the first match is returned.
        """
        result = await self._get("/markets", params={"slug": slug})
        if isinstance(result, list):
            result = result[0] if result else None
        return result if isinstance(result, dict) else None

    async def get_market_by_slug(self, slug: str) -> dict | None:
        """Fetch a market by slug, treating any upstream failure as not found."""
        try:
            return await self.fetch_market(slug)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Market lookup failed for %s: %s", slug, e)
            return None
