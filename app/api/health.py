"""Health check and monitoring endpoints"""

from fastapi import APIRouter, Request

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/")
async def health_check(request: Request):
    """Liveness plus whether the work timer is loaded and sampling"""
    controller = getattr(request.app.state, "tracker", None)
    tracker = "unavailable"
    if controller is not None:
        tracker = "running" if controller.state.is_running else "stopped"

    return {
        "status": "healthy" if controller is not None else "degraded",
        "service": "bt-time-tracker",
        "tracker": tracker,
    }
