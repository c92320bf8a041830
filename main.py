# ============================================================================
# PODCASTER BACK OFFICE - MAIN APPLICATION
# ============================================================================
# STATUS: Core - FastAPI application entry point
# PURPOSE: Wire config, logging, the database pool and services into the app
# CREATED: 19 OCT 2026
# ============================================================================
"""
Podcaster Back Office Main Application

FastAPI application that:
1. Opens the PostgreSQL connection pool
2. Builds the repositories and services
3. Serves the /private API plus health probes

Usage:
    uvicorn main:app --host 0.0.0.0 --port 8000
"""

import time
import uuid
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from __version__ import __version__, BUILD_DATE, CODENAME
from api import health_router, register_error_handlers, router, set_health_pool, set_services
from core.config import get_defaults
from core.logging import ComponentType, configure_logging, get_logger, log_context
from repositories.database import close_pool, init_pool
from services import build_services

defaults = get_defaults()
configure_logging(level=defaults.app.log_level, json_output=defaults.app.json_logs)
logger = get_logger(__name__, ComponentType.API)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Initializes services on startup, cleans up on shutdown.
    """
    logger.info(f"Starting {CODENAME} v{__version__} (Build {BUILD_DATE}, env {defaults.app.env})")

    # Optional: Bootstrap schema on startup (for development)
    if defaults.app.auto_bootstrap_schema:
        logger.info("Auto-bootstrap enabled, deploying schema...")
        from infrastructure import DatabaseInitializer
        result = DatabaseInitializer().initialize_all(dry_run=False)
        if result.success:
            logger.info("Schema bootstrap completed successfully")
        else:
            logger.warning(f"Schema bootstrap had issues: {result.errors}")

    pool = await init_pool()
    logger.info("Database pool initialized")

    services = build_services(pool, defaults)
    set_services(services)
    set_health_pool(pool)
    logger.info(
        "Services initialized",
        extra={"overwrite_atomic": defaults.overwrite.atomic,
               "reject_category_cycles": defaults.hierarchy.reject_cycles},
    )

    yield

    logger.info(f"Shutting down {CODENAME}...")
    set_services(None)
    set_health_pool(None)
    await close_pool()
    logger.info(f"{CODENAME} stopped")


# Create FastAPI app
app = FastAPI(
    title=CODENAME,
    description="Back office API for walls, blocks, programs and their associations",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next: Callable) -> Response:
    """Propagate or assign X-Request-ID and log each request inside its context."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    request.state.request_id = request_id

    with log_context(request_id=request_id):
        start_time = time.time()
        response = await call_next(request)
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={"process_time_ms": round((time.time() - start_time) * 1000, 2)},
        )

    response.headers[REQUEST_ID_HEADER] = request_id
    return response


register_error_handlers(app)

# Health check routes (no prefix - /livez, /readyz, /health)
app.include_router(health_router)

# Back office API (/private)
app.include_router(router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": CODENAME,
        "version": __version__,
        "build_date": BUILD_DATE,
        "status": "running",
        "docs": "/docs",
    }


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=defaults.app.host,
        port=defaults.app.port,
    )
