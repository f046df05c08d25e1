"""
Timeclock — Application entry point.

This is the **only** file that assembles the app.  Punch logic lives in
`core/` and `services/`, persistence in `storage/`, HTTP in `api/`.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from timeclock.api.v1.api import api_router
from timeclock.core.config import settings
from timeclock.core.exceptions import register_exception_handlers
from timeclock.db.base import Base
from timeclock.db.session import engine

# Ensure all models are imported so metadata.create_all can see them
from timeclock.models.storage_entry import StorageEntry  # noqa: F401

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan ────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(_app: FastAPI):
    if settings.PERSISTENCE_SCOPE == "durable":
        Base.metadata.create_all(engine)
        logger.info("Durable storage ready at %s", engine.url.render_as_string(hide_password=True))
    else:
        logger.info("Session-scoped storage: attendance data ends with each client session")

    logger.info("Timeclock v%s started", settings.VERSION)
    yield
    engine.dispose()
    logger.info("Shutdown complete")


# ── App factory ─────────────────────────────────────────────────────
def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME,
        description="Employee punch-in / punch-out kiosk",
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Global exception handlers (prevent stack-trace leakage)
    register_exception_handlers(application)

    # Mount API v1
    application.include_router(api_router, prefix=settings.API_V1_PREFIX)

    return application


app = create_app()
