# ============================================================================
# BASE REPOSITORY - ERROR HANDLING PATTERNS
# ============================================================================
# STATUS: Infrastructure - Base repository patterns
# PURPOSE: Common error wrapping and logging for all repositories
# CREATED: 19 OCT 2026
# ============================================================================
"""
Base Repository Patterns

Abstract base class that provides common infrastructure for all repositories:
- Consistent error handling with context managers
- Standardized logging

Every driver failure leaves a repository as a PersistenceError carrying
the operation, entity and id, chained to the original exception. Domain
errors raised inside the block pass through unchanged.
"""

import logging
from abc import ABC
from contextlib import contextmanager
from typing import Any, Dict, Optional

import psycopg

from core.errors import BackofficeError, PersistenceError


class BaseRepository(ABC):
    """
    Abstract base repository with common patterns.

    Subclasses set `entity_name` and implement storage-specific operations.
    """

    entity_name: str = "entity"

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @contextmanager
    def _error_context(self, operation: str, entity_id: Optional[str] = None):
        """
        Context manager for consistent error handling.

        Args:
            operation: Verb phrase for the message, e.g. "creating"
            entity_id: Optional entity ID for context

        Example:
            with self._error_context("creating", wall.id):
                await conn.execute(...)
        """
        try:
            yield
        except BackofficeError:
            # Already has context
            raise
        except psycopg.Error as e:
            error = PersistenceError(operation, self.entity_name, entity_id, detail=str(e))
            self.logger.error(str(error))
            raise error from e

    def _log_operation(
        self,
        operation: str,
        entity_id: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log a completed operation.

        Format: "operation entity: entity_id | details"
        """
        msg = f"{operation} {self.entity_name}: {entity_id}"
        if details:
            msg += f" | {details}"
        self.logger.info(msg)


__all__ = ["BaseRepository"]
