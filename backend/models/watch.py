"""Pydantic models for market snapshots, watch state and change alerts."""

from pydantic import BaseModel, Field


class MarketSnapshot(BaseModel):
    """Normalized comparison fields extracted from a raw Gamma market."""
    question: str | None = None
    resolution_source: str | None = None
    active: int = 0
    closed: int = 0
    restricted: int = 0
    end_date: str | None = None
    updated_at: str | None = None
    outcomes: list[str] | None = None
    outcome_prices: list[float] | None = None
    description_signature: str | None = None  # "<sha256>:<length>"

    @property
    def status(self) -> str:
        return f"{self.active}/{self.closed}"

    @property
    def yes_price(self) -> float | None:
        if not self.outcome_prices:
            return None
        return self.outcome_prices[0]


class WatchRecord(BaseModel):
    slug: str
    question: str | None = None
    last_resolution_source: str | None = None
    last_active: int | None = None
    last_closed: int | None = None
    last_updated_at: str | None = None
    last_checked: int  # epoch ms
    last_market_json: str | None = None


class AlertRecord(BaseModel):
    id: str
    slug: str
    kind: str
    old_value: str | None = None
    new_value: str | None = None
    created_at: int  # epoch ms


class ChangeRef(BaseModel):
    slug: str
    kind: str


class SlugError(BaseModel):
    slug: str
    error: str


class WatchRunSummary(BaseModel):
    ok: bool = True
    checked: int = 0
    slugs: int = 0
    changeCount: int = 0
    changes: list[ChangeRef] = Field(default_factory=list)
    ranAt: int
    errors: list[SlugError] = Field(default_factory=list)
