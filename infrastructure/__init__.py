# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# STATUS: Infrastructure - Database plumbing shared by repositories
# PURPOSE: Schema deployment, repository base, per-parent locking
# CREATED: 19 OCT 2026
# ============================================================================
"""
Infrastructure module for the back office.

Provides:
- DatabaseInitializer: Bootstrap database schema from Pydantic models
- BaseRepository: error wrapping shared by all PostgreSQL repositories
- LockService: per-parent advisory locks for overwrites
"""

from infrastructure.base_repository import BaseRepository
from infrastructure.database_initializer import (
    DatabaseInitializer,
    InitializationResult,
    StepResult,
)
from infrastructure.locking import (
    LockService,
    LockNotAcquired,
)

__all__ = [
    # Repository base
    'BaseRepository',
    # Database Initialization
    'DatabaseInitializer',
    'InitializationResult',
    'StepResult',
    # Locking
    'LockService',
    'LockNotAcquired',
]
