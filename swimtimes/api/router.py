"""API router aggregation."""

from fastapi import APIRouter

from swimtimes.api.athletes import router as athletes_router
from swimtimes.api.events import router as events_router
from swimtimes.api.health import router as health_router
from swimtimes.api.times import router as times_router
from swimtimes.api.transfer import router as transfer_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(athletes_router)
api_router.include_router(times_router)
api_router.include_router(events_router)
# Import/export of whole data files
api_router.include_router(transfer_router)
