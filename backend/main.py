"""FastAPI application entry point with lifespan for ES, Gamma and scheduler init."""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from api.embed import trade_router
from api.router import api_router
from core.es_client import ESClient
from core.es_indices import ALL_INDICES
from core.gamma_client import GammaClient
from core.scheduler import SchedulerManager
from services.alerts_service import AlertsService
from services.analytics_service import AnalyticsService
from services.evidence_service import EvidenceService
from services.settings_service import SettingsService
from services.tracking_service import TrackingService
from services.watch_service import WatchService
from services.watch_state_service import WatchStateService

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


async def wait_for_es(es: ESClient, attempts: int = 30, delay: float = 2.0):
    for attempt in range(attempts):
        try:
            health = await es.health()
            logger.info("ES cluster status: %s", health.get("status"))
            return
        except Exception:
            if attempt == attempts - 1:
                raise
            await asyncio.sleep(delay)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- Startup ---
    logger.info("Starting up — connecting to ES at %s", config.ES_HOST)
    es = ESClient(hosts=[config.ES_HOST])
    await wait_for_es(es)

    # One-time schema setup; ensure_index is idempotent
    for name, mapping in ALL_INDICES.items():
        await es.ensure_index(name, mapping)
    logger.info("All indices ensured")

    if not config.ADMIN_API_KEY and not config.CRON_SECRET:
        logger.warning("Neither ADMIN_API_KEY nor CRON_SECRET is set; admin routes will refuse")

    # Init services
    gamma = GammaClient(base_url=config.GAMMA_BASE_URL, timeout=config.GAMMA_TIMEOUT)
    settings_svc = SettingsService(es)
    await settings_svc.ensure_defaults()

    evidence_svc = EvidenceService(es)
    tracking_svc = TrackingService(es, evidence_svc)
    watch_state_svc = WatchStateService(es)
    alerts_svc = AlertsService(es)
    analytics_svc = AnalyticsService(es)
    watch_svc = WatchService(gamma, watch_state_svc, alerts_svc, tracking_svc, settings_svc)

    scheduler = SchedulerManager(settings_svc, watch_svc)
    await scheduler.start()

    # Store on app state
    app.state.es = es
    app.state.gamma = gamma
    app.state.settings_service = settings_svc
    app.state.evidence_service = evidence_svc
    app.state.tracking_service = tracking_svc
    app.state.watch_state_service = watch_state_svc
    app.state.alerts_service = alerts_svc
    app.state.analytics_service = analytics_svc
    app.state.watch_service = watch_svc
    app.state.scheduler = scheduler

    logger.info("Backend ready")

    yield

    # --- Shutdown ---
    logger.info("Shutting down")
    await scheduler.shutdown()
    await gamma.close()
    await es.close()


app = FastAPI(title="Polymarket Embed & Market Watch", version="1.0.0", lifespan=lifespan)

# The widget is embedded on third-party publisher sites
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)
app.include_router(trade_router)


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=config.API_HOST, port=config.API_PORT)
