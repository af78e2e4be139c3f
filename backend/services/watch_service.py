"""Watch service — polls tracked markets and records field-level changes.

One run walks every watched slug sequentially:
fetch from Gamma -> normalize -> compare with the stored baseline ->
append alerts -> upsert the watch record.
"""

import json
import logging
from datetime import datetime, timezone

from core.gamma_client import GammaClient
from models.watch import ChangeRef, SlugError, WatchRecord, WatchRunSummary
from services.alerts_service import AlertsService
from services.settings_service import SettingsService
from services.tracking_service import TrackingService
from services.watch_state_service import WatchStateService
from utils.normalize import load_market_json, normalize_market
from utils.time import now_ms
from utils.watch_diff import (
    MARKET_MISSING,
    WATCH_INITIALIZED,
    baseline_summary,
    diff_snapshots,
)

logger = logging.getLogger(__name__)


class WatchRunInProgressError(RuntimeError):
    pass


class WatchService:
    def __init__(
        self,
        gamma: GammaClient,
        watch_state: WatchStateService,
        alerts: AlertsService,
        tracking: TrackingService,
        settings_svc: SettingsService,
    ):
        self.gamma = gamma
        self.watch_state = watch_state
        self.alerts = alerts
        self.tracking = tracking
        self.settings_svc = settings_svc
        self.is_running: bool = False
        self.last_run_utc: datetime | None = None
        self.last_run_summary: dict | None = None

    async def run(self) -> WatchRunSummary:
        """Check every watched slug once. Refuses to overlap with a running pass."""
        if self.is_running:
            raise WatchRunInProgressError("Watch run already in progress")

        self.is_running = True
        ran_at = now_ms()
        summary = WatchRunSummary(ranAt=ran_at)
        try:
            settings = await self.settings_svc.get()
            slugs = await self.tracking.list_watch_slugs(settings.max_slugs)
            summary.slugs = len(slugs)

            for slug in slugs:
                summary.checked += 1
                try:
                    kinds = await self.check_slug(
                        slug, ran_at, settings.price_jump_threshold
                    )
                except Exception as e:
                    logger.exception("Watch check failed for %s", slug)
                    summary.errors.append(SlugError(slug=slug, error=str(e)))
                    continue
                summary.changes.extend(ChangeRef(slug=slug, kind=k) for k in kinds)

            summary.changeCount = len(summary.changes)
        finally:
            self.is_running = False
            self.last_run_utc = datetime.now(timezone.utc)
            self.last_run_summary = summary.model_dump()

        logger.info(
            "Watch run completed: checked=%d changes=%d errors=%d",
            summary.checked,
            summary.changeCount,
            len(summary.errors),
        )
        return summary

    async def check_slug(
        self, slug: str, now: int, price_jump_threshold: float = 0.0
    ) -> list[str]:
        """Diff one slug against its baseline. Returns the alert kinds emitted."""
        prev = await self.watch_state.get(slug)
        prev_market = load_market_json(prev.last_market_json) if prev else None
        prev_snapshot = normalize_market(prev_market)

        market = await self.gamma.get_market_by_slug(slug)
        snapshot = normalize_market(market)

        if snapshot is None:
            kinds = []
            if prev_snapshot is not None:
                await self.alerts.insert(slug, MARKET_MISSING, "present", "missing", now)
                kinds.append(MARKET_MISSING)
            if prev:
                record = prev.model_copy(update={"last_checked": now})
            else:
                record = WatchRecord(slug=slug, last_checked=now)
            await self.watch_state.upsert(record)
            return kinds

        if prev_snapshot is None:
            await self.alerts.insert(
                slug, WATCH_INITIALIZED, None, baseline_summary(snapshot), now
            )
            kinds = [WATCH_INITIALIZED]
        else:
            changes = diff_snapshots(prev_snapshot, snapshot, price_jump_threshold)
            for change in changes:
                await self.alerts.insert(
                    slug, change["kind"], change["old_value"], change["new_value"], now
                )
            kinds = [c["kind"] for c in changes]

        await self.watch_state.upsert(WatchRecord(
            slug=slug,
            question=snapshot.question,
            last_resolution_source=snapshot.resolution_source,
            last_active=snapshot.active,
            last_closed=snapshot.closed,
            last_updated_at=snapshot.updated_at,
            last_checked=now,
            last_market_json=json.dumps(market),
        ))
        if kinds:
            logger.info("%s: %s", slug, ", ".join(kinds))
        return kinds
