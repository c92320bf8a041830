# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the back office.
"""

from core.config.defaults import (
    AppDefaults,
    DatabaseDefaults,
    OverwriteDefaults,
    HierarchyDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "AppDefaults",
    "DatabaseDefaults",
    "OverwriteDefaults",
    "HierarchyDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
