import logging
from contextlib import asynccontextmanager

# Log configuration (before other imports)
# ruff: noqa: E402
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True
)

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from app.api.base import api_router  # noqa: E402
from app.config import get_settings  # noqa: E402
from app.dependencies import build_tracker_controller  # noqa: E402

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.tracker = None
    try:
        controller = build_tracker_controller(get_settings())
    except ValueError as e:
        logger.error(f"Time tracker disabled: {e}")
    else:
        snapshot = controller.restore()
        logger.info(f"Time tracker ready ({snapshot.display}, running={snapshot.is_running})")
        app.state.tracker = controller

    yield

    if app.state.tracker is not None:
        app.state.tracker.close()


app = FastAPI(
    title="BT Time Tracker API",
    description="Work timer and time entry management for the portfolio admin panel",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Specify your frontend URL in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include all API routes
app.include_router(api_router)


@app.get("/")
def read_root():
    return {
        "message": "BT Time Tracker API",
        "docs": "/docs",
        "version": "1.0.0"
    }
