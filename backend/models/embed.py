"""Request models for the publisher-facing embed endpoints."""

from pydantic import BaseModel


class TrackEventRequest(BaseModel):
    event: str | None = None  # impression | click
    slug: str | None = None
    question: str | None = None
    pub: str | None = None
    article: str | None = None
    page_url: str | None = None
    referrer: str | None = None
    ts: float | None = None
    token: str | None = None


class PublisherTokenRequest(BaseModel):
    pub: str = ""


class SaveEvidenceRequest(BaseModel):
    slug: str | None = None
    resolutionUrl: str | None = None
    resolution_url: str | None = None
    notes: str | None = None


class CleanupAlertsRequest(BaseModel):
    kind: str | None = None
