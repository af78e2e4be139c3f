"""Watcher settings, stored as a single ES document."""

import logging
from datetime import datetime, timezone

from apscheduler.triggers.cron import CronTrigger

from core.es_client import ESClient
from models.settings import Settings, SettingsUpdate

logger = logging.getLogger(__name__)

SETTINGS_INDEX = "settings"
SETTINGS_DOC_ID = "global"


class InvalidSettingsError(ValueError):
    pass


def validate_cron(expression: str | None) -> str | None:
    """Blank means no cron; anything else must be a 5-field crontab."""
    expression = (expression or "").strip() or None
    if expression is None:
        return None
    try:
        CronTrigger.from_crontab(expression)
    except ValueError as e:
        raise InvalidSettingsError(f"Invalid cron_expression: {e}") from e
    return expression


class SettingsService:
    def __init__(self, es: ESClient):
        self.es = es

    async def ensure_defaults(self):
        if await self.es.get(SETTINGS_INDEX, SETTINGS_DOC_ID) is not None:
            return
        defaults = Settings(updated_at_utc=datetime.now(timezone.utc))
        await self.es.index_doc(SETTINGS_INDEX, SETTINGS_DOC_ID, defaults.model_dump(mode="json"))
        logger.info("Initialized default watcher settings")

    async def get(self) -> Settings:
        """Stored settings over defaults; unknown keys from older docs are ignored."""
        doc = await self.es.get(SETTINGS_INDEX, SETTINGS_DOC_ID) or {}
        known = {k: v for k, v in doc.items() if k in Settings.model_fields}
        return Settings(**known)

    async def update(self, updates: SettingsUpdate) -> Settings:
        """Apply only the fields the caller sent. Raises InvalidSettingsError."""
        changes = {
            k: v
            for k, v in updates.model_dump(exclude_unset=True).items()
            if v is not None or k == "cron_expression"
        }
        if "cron_expression" in changes:
            changes["cron_expression"] = validate_cron(changes["cron_expression"])

        current = await self.get()
        settings = current.model_copy(
            update={**changes, "updated_at_utc": datetime.now(timezone.utc)}
        )
        await self.es.index_doc(SETTINGS_INDEX, SETTINGS_DOC_ID, settings.model_dump(mode="json"))
        logger.info("Updated watcher settings: %s", sorted(changes))
        return settings
