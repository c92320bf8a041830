# ============================================================================
# HEALTH CHECK ROUTES
# ============================================================================
# STATUS: Infrastructure - Liveness, readiness and health endpoints
# PURPOSE: Probe the process and its PostgreSQL connection
# CREATED: 19 OCT 2026
# ============================================================================
"""
Health Check Routes

Endpoints:
    GET /livez   - Liveness probe, no external checks
    GET /readyz  - 200 when the database answers, 503 otherwise
    GET /health  - Database and schema status with version info

Response Codes:
    200 - Healthy
    503 - Unhealthy (service unavailable)
"""

import logging
import time
from typing import Any, Dict, Optional

import psycopg
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from __version__ import __version__, BUILD_DATE
from core.contracts import SCHEMA

logger = logging.getLogger(__name__)

health_router = APIRouter(tags=["Health"])

_pool: Optional[AsyncConnectionPool] = None


def set_health_pool(pool: Optional[AsyncConnectionPool]):
    """Called by main.py at startup."""
    global _pool
    _pool = pool


async def check_database() -> Dict[str, Any]:
    """Count the back office tables; any driver error means unhealthy."""
    if _pool is None:
        return {"status": "unhealthy", "message": "Database pool not initialized"}

    start = time.monotonic()
    try:
        async with _pool.connection() as conn:
            # Repositories may hand back connections with any row factory
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(
                    "SELECT count(*) AS tables FROM information_schema.tables "
                    "WHERE table_schema = %s",
                    (SCHEMA,),
                )
                row = await cur.fetchone()
    except psycopg.Error as e:
        logger.warning(f"Database health check failed: {e}")
        return {"status": "unhealthy", "message": f"PostgreSQL connection failed: {e}"}

    return {
        "status": "healthy",
        "schema": SCHEMA,
        "tables": row["tables"],
        "duration_ms": round((time.monotonic() - start) * 1000, 2),
    }


@health_router.get("/livez")
async def liveness_probe():
    return {"status": "alive", "version": __version__, "build_date": BUILD_DATE}


@health_router.get("/readyz")
async def readiness_probe():
    database = await check_database()
    if database["status"] != "healthy":
        return JSONResponse(status_code=503, content={"status": "not_ready", "database": database})
    return {"status": "ready"}


@health_router.get("/health")
async def full_health_check():
    database = await check_database()
    healthy = database["status"] == "healthy"
    body = {
        "status": "healthy" if healthy else "unhealthy",
        "version": __version__,
        "build_date": BUILD_DATE,
        "checks": {"database": database},
    }
    return JSONResponse(status_code=200 if healthy else 503, content=body)


__all__ = ["health_router", "set_health_pool", "check_database"]
