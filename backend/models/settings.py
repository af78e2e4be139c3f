"""Pydantic models for application settings stored in ES."""

from datetime import datetime
from pydantic import BaseModel, Field


class Settings(BaseModel):
    watch_enabled: bool = False
    watch_interval_minutes: int = Field(60, ge=1)
    cron_expression: str | None = None
    price_jump_threshold: float = Field(0.0, ge=0)  # 0 disables yes_price_jump
    max_slugs: int = Field(1000, ge=1)
    updated_at_utc: datetime | None = None


class SettingsUpdate(BaseModel):
    watch_enabled: bool | None = None
    watch_interval_minutes: int | None = Field(None, ge=1)
    cron_expression: str | None = None
    price_jump_threshold: float | None = Field(None, ge=0)
    max_slugs: int | None = Field(None, ge=1)
