"""Tests for watch list membership."""

import pytest

from models.tracking import TrackedSlugUpdate
from services.evidence_service import EVIDENCE_INDEX, EvidenceService
from services.tracking_service import TRACKED_INDEX, TrackingService


@pytest.fixture
def tracking_svc(es):
    return TrackingService(es, EvidenceService(es))


def _add_evidence(es, slug, n=1):
    for i in range(n):
        es.docs[(EVIDENCE_INDEX, f"{slug}-{i}")] = {"id": f"{slug}-{i}", "slug": slug}


class TestSetTracking:
    @pytest.mark.asyncio
    async def test_creates_entry(self, es, tracking_svc):
        doc = await tracking_svc.set_tracking("rain", TrackedSlugUpdate(notes="watch me"))

        assert doc["slug"] == "rain"
        assert doc["is_tracked"] is True
        assert doc["created_at_utc"] == doc["updated_at_utc"]
        assert es.docs[(TRACKED_INDEX, "rain")]["notes"] == "watch me"

    @pytest.mark.asyncio
    async def test_update_keeps_created_at_and_notes(self, tracking_svc):
        first = await tracking_svc.set_tracking("rain", TrackedSlugUpdate(notes="keep"))
        second = await tracking_svc.set_tracking("rain", TrackedSlugUpdate(is_tracked=False))

        assert second["is_tracked"] is False
        assert second["notes"] == "keep"
        assert second["created_at_utc"] == first["created_at_utc"]

    @pytest.mark.asyncio
    async def test_listing_sorted_by_slug(self, tracking_svc):
        for slug in ["c", "a", "b"]:
            await tracking_svc.set_tracking(slug, TrackedSlugUpdate())

        entries = await tracking_svc.get_tracked_slugs()

        assert [e["slug"] for e in entries] == ["a", "b", "c"]


class TestListWatchSlugs:
    @pytest.mark.asyncio
    async def test_evidence_slugs_are_watched(self, es, tracking_svc):
        _add_evidence(es, "rain", n=2)
        _add_evidence(es, "snow")

        assert await tracking_svc.list_watch_slugs() == ["rain", "snow"]

    @pytest.mark.asyncio
    async def test_tracked_slugs_added(self, es, tracking_svc):
        _add_evidence(es, "rain")
        await tracking_svc.set_tracking("fog", TrackedSlugUpdate())

        assert await tracking_svc.list_watch_slugs() == ["fog", "rain"]

    @pytest.mark.asyncio
    async def test_untracked_slugs_removed(self, es, tracking_svc):
        _add_evidence(es, "rain")
        _add_evidence(es, "snow")
        await tracking_svc.set_tracking("snow", TrackedSlugUpdate(is_tracked=False))

        assert await tracking_svc.list_watch_slugs() == ["rain"]

    @pytest.mark.asyncio
    async def test_untracking_without_evidence_is_harmless(self, tracking_svc):
        await tracking_svc.set_tracking("ghost", TrackedSlugUpdate(is_tracked=False))

        assert await tracking_svc.list_watch_slugs() == []

    @pytest.mark.asyncio
    async def test_capped_after_sorting(self, es, tracking_svc):
        _add_evidence(es, "b")
        _add_evidence(es, "d")
        await tracking_svc.set_tracking("a", TrackedSlugUpdate())
        await tracking_svc.set_tracking("c", TrackedSlugUpdate())

        assert await tracking_svc.list_watch_slugs(limit=3) == ["a", "b", "c"]
