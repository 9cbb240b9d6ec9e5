"""Aurora Admin API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map AuroraError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Supabase client created on startup via lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from aurora_admin.api.error_handlers import register_error_handlers
from aurora_admin.api.routes import health, pdvs, users
from aurora_admin.config import get_settings
from aurora_admin.infrastructure.observability import setup_logging
from aurora_admin.infrastructure.supabase_gateway import init_backend

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    await init_backend(settings.supabase_url, settings.supabase_key)
    logger.info("Aurora Admin API started")
    yield
    logger.info("Aurora Admin API shutting down")


app = FastAPI(
    title="Aurora Admin API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(pdvs.router)

register_error_handlers(app)
