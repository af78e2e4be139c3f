"""In-memory stand-ins for Elasticsearch, the ES-backed stores and the Gamma client."""

import copy

import pytest

from models.settings import Settings
from models.watch import AlertRecord, WatchRecord
from services.watch_service import WatchService
from utils.dedup import generate_alert_doc_id


class FakeES:
    """Just enough of ESClient for term/match_all lookups."""

    def __init__(self):
        self.docs: dict[tuple[str, str], dict] = {}

    def _matching(self, index: str, query: dict | None) -> list[dict]:
        docs = [dict(d) for (i, _), d in self.docs.items() if i == index]
        term = (query or {}).get("term")
        if term:
            (field, value), = term.items()
            docs = [d for d in docs if d.get(field) == value]
        return docs

    async def get(self, index, doc_id):
        doc = self.docs.get((index, doc_id))
        return dict(doc) if doc is not None else None

    async def index_doc(self, index, doc_id, body):
        self.docs[(index, doc_id)] = dict(body)

    async def search(self, index, query=None, sort=None, size=100, from_=0, aggs=None):
        docs = self._matching(index, query)
        for spec in reversed(sort or []):
            (field, opts), = spec.items()
            docs.sort(key=lambda d: d.get(field), reverse=opts.get("order") == "desc")
        return {"hits": {"hits": [{"_source": d} for d in docs[from_:from_ + size]]}}

    async def count(self, index, query=None):
        return len(self._matching(index, query))

    async def distinct_values(self, index, field, size=1000, query=None):
        values = {d[field] for d in self._matching(index, query) if d.get(field)}
        return sorted(values)[:size]


class FakeGamma:
    def __init__(self, markets: dict | None = None):
        self.markets = dict(markets or {})
        self.calls: list[str] = []

    async def get_market_by_slug(self, slug: str) -> dict | None:
        self.calls.append(slug)
        market = self.markets.get(slug)
        if isinstance(market, Exception):
            raise market
        return copy.deepcopy(market)

    async def fetch_market(self, slug: str) -> dict | None:
        return await self.get_market_by_slug(slug)


class FakeWatchState:
    def __init__(self):
        self.records: dict[str, WatchRecord] = {}

    async def get(self, slug: str) -> WatchRecord | None:
        record = self.records.get(slug)
        return record.model_copy() if record else None

    async def get_many(self, slugs: list[str]) -> dict[str, WatchRecord]:
        return {s: self.records[s].model_copy() for s in slugs if s in self.records}

    async def upsert(self, record: WatchRecord) -> None:
        self.records[record.slug] = record.model_copy()


class FakeAlerts:
    def __init__(self):
        self.rows: list[AlertRecord] = []

    async def insert(self, slug, kind, old_value, new_value, created_at) -> AlertRecord:
        alert = AlertRecord(
            id=generate_alert_doc_id(created_at, len(self.rows) + 1),
            slug=slug,
            kind=kind,
            old_value=old_value,
            new_value=new_value,
            created_at=created_at,
        )
        self.rows.append(alert)
        return alert

    async def list_alerts(self, slug=None, limit=50) -> list[AlertRecord]:
        rows = [a for a in self.rows if slug is None or a.slug == slug]
        return sorted(rows, key=lambda a: a.id, reverse=True)[:limit]

    async def count_for_slug(self, slug: str) -> int:
        return sum(1 for a in self.rows if a.slug == slug)

    async def delete_by_kind(self, kind: str) -> int:
        before = len(self.rows)
        self.rows = [a for a in self.rows if a.kind != kind]
        return before - len(self.rows)

    def kinds(self, slug: str | None = None) -> list[str]:
        return [a.kind for a in self.rows if slug is None or a.slug == slug]


class FakeTracking:
    def __init__(self, slugs: list[str] | None = None):
        self.slugs = list(slugs or [])
        self.limits: list[int] = []

    async def list_watch_slugs(self, limit: int = 1000) -> list[str]:
        self.limits.append(limit)
        return sorted(self.slugs)[:limit]


class FakeSettings:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()

    async def get(self) -> Settings:
        return self.settings


@pytest.fixture
def es():
    return FakeES()


@pytest.fixture
def gamma():
    return FakeGamma()


@pytest.fixture
def watch_state():
    return FakeWatchState()


@pytest.fixture
def alerts():
    return FakeAlerts()


@pytest.fixture
def tracking():
    return FakeTracking()


@pytest.fixture
def settings_svc():
    return FakeSettings()


@pytest.fixture
def watch_svc(gamma, watch_state, alerts, tracking, settings_svc):
    return WatchService(gamma, watch_state, alerts, tracking, settings_svc)


@pytest.fixture
def market():
    """A typical binary market as Gamma returns it (stringified arrays)."""
    return {
        "slug": "will-it-rain",
        "question": "Will it rain tomorrow?",
        "resolutionSource": "https://a.example",
        "active": True,
        "closed": False,
        "restricted": False,
        "updatedAt": "2025-01-01T00:00:00Z",
        "description": "Resolves YES if it rains.",
        "outcomes": '["Yes", "No"]',
        "outcomePrices": '["0.40", "0.60"]',
        "endDate": "2025-02-01T00:00:00Z",
    }
