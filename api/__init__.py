# ============================================================================
# API MODULE
# ============================================================================
# STATUS: Transport - FastAPI routes
# PURPOSE: HTTP API for the podcast back office
# CREATED: 19 OCT 2026
# ============================================================================
"""
API Module

FastAPI routers for the back office. The service layer is injected at
startup with set_services(); domain errors map to HTTP via api.errors.
"""

from .routes import router, set_services, get_services
from .health_routes import health_router, set_health_pool
from .errors import register_error_handlers

__all__ = [
    "router",
    "set_services",
    "get_services",
    "health_router",
    "set_health_pool",
    "register_error_handlers",
]
