"""Vehicle World API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers registered via register_error_handlers
    - Logging configured and database initialized on startup via lifespan
    - Engine disposed on shutdown
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from vehicle_api.api.error_handlers import register_error_handlers
from vehicle_api.api.routes import health, vehicles
from vehicle_api.config import get_settings
from vehicle_api.infrastructure.database import close_db, init_db
from vehicle_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(
        settings.effective_log_level,
        settings.effective_log_format,
        settings.log_dir,
    )
    manager = init_db(
        settings.sqlalchemy_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.is_development:
        await manager.create_schema()
    logger.info(f"Vehicle World API started ({settings.environment})")
    yield
    await close_db()
    logger.info("Vehicle World API shut down")


settings = get_settings()

app = FastAPI(
    title="Vehicle World API", version=health.SERVICE_VERSION, lifespan=lifespan,
)

app.include_router(health.router, prefix=settings.api_prefix)
app.include_router(vehicles.router, prefix=settings.api_prefix)

register_error_handlers(app)
