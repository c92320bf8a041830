# ============================================================================
# APPLICATION TESTS
# ============================================================================
# STATUS: Tests - main.py wiring, middleware and health probes
# PURPOSE: Verify the root endpoint, request ids and health responses
# CREATED: 19 OCT 2026
# ============================================================================
"""
Application Tests

TestClient is used without a context manager so the lifespan handler
(which opens the database pool) does not run.

Run with:
    pytest tests/test_app.py -v
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import psycopg
from fastapi.testclient import TestClient
from psycopg.rows import dict_row

from api import set_health_pool, set_services
from api.health_routes import check_database
from main import REQUEST_ID_HEADER, app
from services import build_memory_services


def _async_cm(value):
    cm = MagicMock()
    cm.__aenter__ = AsyncMock(return_value=value)
    cm.__aexit__ = AsyncMock(return_value=False)
    return cm


def _health_pool(fetchone=None, error=None):
    cursor = AsyncMock()
    cursor.fetchone = AsyncMock(return_value=fetchone)
    if error is not None:
        cursor.execute = AsyncMock(side_effect=error)
    conn = AsyncMock()
    conn.cursor = MagicMock(return_value=_async_cm(cursor))
    pool = MagicMock()
    pool.connection.return_value = _async_cm(conn)
    return pool, conn


class TestRoot:

    def test_root(self):
        body = TestClient(app).get("/").json()
        assert body["status"] == "running"
        assert "version" in body

    def test_request_id_generated(self):
        response = TestClient(app).get("/")
        assert len(response.headers[REQUEST_ID_HEADER]) == 36

    def test_request_id_propagated(self):
        response = TestClient(app).get("/", headers={REQUEST_ID_HEADER: "req-123"})
        assert response.headers[REQUEST_ID_HEADER] == "req-123"

    def test_private_routes_mounted(self):
        set_services(build_memory_services())
        try:
            response = TestClient(app).post("/private/walls", json={"name": "", "description": ""})
            assert response.status_code == 400
        finally:
            set_services(None)


class TestHealth:

    def test_livez(self):
        assert TestClient(app).get("/livez").json()["status"] == "alive"

    def test_health_without_pool(self):
        set_health_pool(None)
        response = TestClient(app).get("/health")
        assert response.status_code == 503
        assert response.json()["checks"]["database"]["status"] == "unhealthy"

    def test_health_with_database(self):
        pool, _ = _health_pool(fetchone={"tables": 11})

        set_health_pool(pool)
        try:
            response = TestClient(app).get("/health")
            assert response.status_code == 200
            assert response.json()["checks"]["database"]["tables"] == 11
            assert TestClient(app).get("/readyz").status_code == 200
        finally:
            set_health_pool(None)

    def test_health_ignores_connection_row_factory(self):
        pool, conn = _health_pool(fetchone={"tables": 11})
        conn.row_factory = dict_row

        set_health_pool(pool)
        try:
            assert asyncio.run(check_database())["status"] == "healthy"
            assert conn.cursor.call_args.kwargs == {"row_factory": dict_row}
        finally:
            set_health_pool(None)

    def test_readyz_database_down(self):
        pool, _ = _health_pool(error=psycopg.OperationalError("down"))

        set_health_pool(pool)
        try:
            assert TestClient(app).get("/readyz").status_code == 503
        finally:
            set_health_pool(None)
