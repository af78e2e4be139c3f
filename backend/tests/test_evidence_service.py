"""Tests for evidence capture: resolution page fetch, storage and listing."""

import json

import httpx
import pytest

from services.evidence_service import (
    EVIDENCE_INDEX,
    MAX_RESOLUTION_HTML,
    EvidenceService,
)


class PageServer:
    """Mock transport handler serving a fixed page and recording requested URLs."""

    def __init__(self, body: str = "<html>resolved</html>", error: Exception | None = None):
        self.body = body
        self.error = error
        self.urls: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.urls.append(str(request.url))
        if self.error:
            raise self.error
        return httpx.Response(200, text=self.body)


def _service(es, server: PageServer) -> EvidenceService:
    return EvidenceService(es, transport=httpx.MockTransport(server))


class TestFetchResolutionHtml:
    @pytest.mark.asyncio
    async def test_truncated(self, es):
        svc = _service(es, PageServer(body="x" * (MAX_RESOLUTION_HTML + 500)))

        html = await svc.fetch_resolution_html("https://a.example/page")

        assert len(html) == MAX_RESOLUTION_HTML

    @pytest.mark.asyncio
    async def test_transport_failure_is_none(self, es):
        svc = _service(es, PageServer(error=httpx.ConnectError("down")))

        assert await svc.fetch_resolution_html("https://a.example/page") is None

    @pytest.mark.asyncio
    async def test_malformed_url_is_none(self, es):
        server = PageServer()
        svc = _service(es, server)

        assert await svc.fetch_resolution_html("http://a\x00b.com") is None
        assert server.urls == []


class TestSave:
    @pytest.mark.asyncio
    async def test_manual_url_wins(self, es, market):
        server = PageServer()
        svc = _service(es, server)

        doc = await svc.save(
            "will-it-rain", market, manual_evidence_url=" https://manual.example/x ", notes=" n "
        )

        assert server.urls == ["https://manual.example/x"]
        assert doc["resolution_url"] == "https://manual.example/x"
        assert doc["manual_evidence_url"] == "https://manual.example/x"
        assert doc["resolution_source"] == "https://a.example"
        assert doc["notes"] == "n"
        assert doc["resolution_html"] == "<html>resolved</html>"

    @pytest.mark.asyncio
    async def test_falls_back_to_resolution_source(self, es, market):
        server = PageServer()
        doc = await _service(es, server).save("will-it-rain", market)

        assert len(server.urls) == 1
        assert server.urls[0].startswith("https://a.example")
        assert doc["resolution_url"] == "https://a.example"
        assert doc["manual_evidence_url"] is None

    @pytest.mark.asyncio
    async def test_no_url_skips_fetch(self, es, market):
        server = PageServer()
        doc = await _service(es, server).save("will-it-rain", {**market, "resolutionSource": ""})

        assert server.urls == []
        assert doc["resolution_url"] is None
        assert doc["resolution_html"] is None

    @pytest.mark.asyncio
    async def test_failed_fetch_still_stores(self, es, market):
        svc = _service(es, PageServer())

        doc = await svc.save("will-it-rain", market, manual_evidence_url="http://a\x00b.com")

        stored = es.docs[(EVIDENCE_INDEX, doc["id"])]
        assert stored["resolution_html"] is None
        assert json.loads(stored["market_json"]) == market


class TestListing:
    @pytest.mark.asyncio
    async def test_newest_first_without_raw_payloads(self, es):
        for i, created_at in enumerate([100, 300, 200]):
            es.docs[(EVIDENCE_INDEX, f"e{i}")] = {
                "id": f"e{i}",
                "slug": "rain",
                "created_at": created_at,
                "market_json": "{}",
                "resolution_html": "<html/>",
            }
        es.docs[(EVIDENCE_INDEX, "other")] = {"id": "other", "slug": "snow", "created_at": 999}
        svc = EvidenceService(es)

        items = await svc.list_for_slug("rain")

        assert [i["created_at"] for i in items] == [300, 200, 100]
        assert items[0]["saved_at"] == 300
        assert "resolution_html" not in items[0]
        assert "market_json" not in items[0]

    @pytest.mark.asyncio
    async def test_counts_and_distinct_slugs(self, es):
        for i, slug in enumerate(["rain", "rain", "snow"]):
            es.docs[(EVIDENCE_INDEX, str(i))] = {"id": str(i), "slug": slug}
        svc = EvidenceService(es)

        assert await svc.count_for_slug("rain") == 2
        assert await svc.distinct_slugs() == ["rain", "snow"]
