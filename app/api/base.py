from fastapi import APIRouter
from app.api import health, time_entries, time_tracker

api_router = APIRouter()

# Include all sub-routers
api_router.include_router(health.router)
api_router.include_router(time_tracker.router)
api_router.include_router(time_entries.router)
