"""Scheduler manager — APScheduler integration for the periodic watch run."""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger

from models.settings import Settings
from services.settings_service import SettingsService
from services.watch_service import WatchRunInProgressError, WatchService

logger = logging.getLogger(__name__)

WATCH_JOB_ID = "market_watch"


def build_trigger(settings: Settings):
    if settings.cron_expression:
        return CronTrigger.from_crontab(settings.cron_expression)
    return IntervalTrigger(minutes=settings.watch_interval_minutes)


class SchedulerManager:
    def __init__(self, settings_svc: SettingsService, watch_svc: WatchService):
        self.settings_svc = settings_svc
        self.watch_svc = watch_svc
        self.scheduler = AsyncIOScheduler()
        self._started = False

    async def start(self):
        """Initialize and start the scheduler based on ES settings."""
        settings = await self.settings_svc.get()

        if settings.watch_enabled:
            self._add_watch_job(settings)

        self.scheduler.start()
        self._started = True
        logger.info("Scheduler started")

    async def shutdown(self):
        """Shut down the scheduler."""
        if self._started:
            self.scheduler.shutdown(wait=False)
            self._started = False
            logger.info("Scheduler shut down")

    def _add_watch_job(self, settings: Settings):
        self.scheduler.add_job(
            self._run_watch,
            trigger=build_trigger(settings),
            id=WATCH_JOB_ID,
            name="Market Watch",
            replace_existing=True,
            max_instances=1,
            misfire_grace_time=120,
        )
        logger.info(
            "Scheduled watch: interval=%dm, cron=%s",
            settings.watch_interval_minutes,
            settings.cron_expression,
        )

    async def update_schedule(self):
        """Re-read settings and update the watch job."""
        settings = await self.settings_svc.get()

        if settings.watch_enabled:
            self._add_watch_job(settings)
        elif self.scheduler.get_job(WATCH_JOB_ID):
            self.scheduler.remove_job(WATCH_JOB_ID)
            logger.info("Removed watch job")

    def get_status(self) -> dict:
        """Get scheduler status and job info."""
        jobs = []
        for job in self.scheduler.get_jobs():
            jobs.append({
                "id": job.id,
                "name": job.name,
                "next_run_time": job.next_run_time.isoformat() if job.next_run_time else None,
            })

        return {
            "running": self._started,
            "jobs": jobs,
            "last_run_utc": (
                self.watch_svc.last_run_utc.isoformat()
                if self.watch_svc.last_run_utc
                else None
            ),
            "last_run_summary": self.watch_svc.last_run_summary,
            "is_watching": self.watch_svc.is_running,
        }

    async def _run_watch(self):
        """Internal: scheduled watch run."""
        logger.info("Starting scheduled watch run")
        try:
            await self.watch_svc.run()
        except WatchRunInProgressError:
            logger.info("Watch run already in progress, skipping scheduled run")
        except Exception as e:
            logger.error("Scheduled watch run failed: %s", e)
