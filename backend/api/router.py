"""Main API router — aggregates all sub-routers."""

from fastapi import APIRouter

from api.alerts import router as alerts_router
from api.analytics import router as analytics_router
from api.embed import router as embed_router
from api.evidence import router as evidence_router
from api.jobs import router as jobs_router
from api.publishers import router as publishers_router
from api.settings import router as settings_router
from api.tracking import router as tracking_router
from api.watch import router as watch_router

api_router = APIRouter(prefix="/api")

api_router.include_router(watch_router, tags=["Watch"])
api_router.include_router(alerts_router, tags=["Alerts"])
api_router.include_router(evidence_router, tags=["Evidence"])
api_router.include_router(tracking_router, tags=["Tracking"])
api_router.include_router(embed_router, tags=["Embed"])
api_router.include_router(analytics_router, tags=["Analytics"])
api_router.include_router(publishers_router, tags=["Publishers"])
api_router.include_router(settings_router, tags=["Settings"])
api_router.include_router(jobs_router, tags=["Jobs"])
