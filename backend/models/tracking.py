"""Pydantic models for watch list membership."""

from datetime import datetime
from pydantic import BaseModel


class TrackedSlugUpdate(BaseModel):
    is_tracked: bool = True
    notes: str | None = None


class TrackedSlug(BaseModel):
    slug: str
    is_tracked: bool = True
    notes: str | None = None
    created_at_utc: datetime | None = None
    updated_at_utc: datetime | None = None
