# backend/app/main.py
"""
PetBnB search API.

Mounts the versioned sitter routes, the health check and the Prometheus
endpoint, and runs the rating snapshot refresher for the lifetime of the
process.
"""

import asyncio
from contextlib import asynccontextmanager
import logging
import threading
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from .api.dependencies.services import get_rating_aggregator_singleton
from .core.config import is_running_tests, settings
from .core.constants import API_DESCRIPTION, API_TITLE, API_VERSION, BRAND_NAME
from .errors import register_error_handlers
from .routes.v1 import health as health_v1, prometheus as prometheus_v1, sitters as sitters_v1

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown without deprecated events."""
    # Startup
    logger.info(f"{BRAND_NAME} API starting up...")
    logger.info(f"Environment: {settings.environment}")

    refresh_task: asyncio.Task[None] | None = None
    refresh_stop_event: threading.Event | None = None
    if settings.rating_cache_enabled and not is_running_tests():
        aggregator = get_rating_aggregator_singleton()
        refresh_stop_event = threading.Event()
        refresh_task = asyncio.create_task(
            asyncio.to_thread(aggregator.run_refresh_loop, refresh_stop_event)
        )
        logger.info(
            f"Rating snapshot refresh every {settings.rating_refresh_interval_seconds:.0f}s"
        )

    yield

    # Shutdown
    logger.info(f"{BRAND_NAME} API shutting down...")

    if refresh_task is not None:
        if refresh_stop_event is not None:
            refresh_stop_event.set()
        try:
            await refresh_task
        except Exception:
            logger.error("Rating snapshot refresh worker crashed", exc_info=True)


def _unique_operation_id(route: APIRoute) -> str:
    methods = "_".join(sorted(m.lower() for m in route.methods or []))
    path = route.path_format.replace("/", "_").replace("{", "").replace("}", "").strip("_")
    name = (route.name or "operation").lower().replace(" ", "_")
    return f"{methods}__{path}__{name}".strip("_")


app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=app_lifespan,
    generate_unique_id_function=_unique_operation_id,
)

# Register unified error envelope handlers
register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["GET", "HEAD", "OPTIONS"],
    allow_headers=["*"],
)
logger.info("CORS allow_origins=%s", settings.cors_origins)

# Create API v1 router
api_v1 = APIRouter(prefix="/api/v1")

# Mount v1 routes
api_v1.include_router(health_v1.router, prefix="/health")
api_v1.include_router(sitters_v1.router, prefix="/sitters")

app.include_router(api_v1)
app.include_router(prometheus_v1.router)
