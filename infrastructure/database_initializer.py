# ============================================================================
# DATABASE INITIALIZER - INFRASTRUCTURE AS CODE
# ============================================================================
# STATUS: Infrastructure - Database initialization orchestrator
# PURPOSE: Bootstrap the backoffice schema from Pydantic models
# CREATED: 19 OCT 2026
# ============================================================================
"""
DatabaseInitializer - Infrastructure as Code for the back office.

Initialization workflow:
1. Connection test
2. Schema, tables, indexes and updated_at triggers (one transaction)
3. Table verification

Pydantic models are the SINGLE SOURCE OF TRUTH for schema.
DDL is generated via PydanticToSQL.generate_all().

Runs synchronously (psycopg.connect) because it is only used from the
deployment CLI.

Usage:
    from infrastructure import DatabaseInitializer

    initializer = DatabaseInitializer()
    result = initializer.initialize_all(dry_run=True)
    status = initializer.verify_installation()
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import psycopg
from psycopg import sql
from psycopg.rows import dict_row

from core.config import get_defaults
from core.contracts import SCHEMA
from core.schema.sql_generator import PydanticToSQL

logger = logging.getLogger(__name__)


# ============================================================================
# DATA CLASSES
# ============================================================================

@dataclass
class StepResult:
    """Result of a single initialization step."""
    name: str
    status: str  # 'success', 'failed', 'skipped'
    message: str = ""
    error: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass
class InitializationResult:
    """Complete result of database initialization."""
    timestamp: str
    success: bool = False
    steps: List[StepResult] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def summary(self) -> Dict[str, int]:
        return {
            "total_steps": len(self.steps),
            "successful": len([s for s in self.steps if s.status == "success"]),
            "failed": len([s for s in self.steps if s.status == "failed"]),
        }


# ============================================================================
# DATABASE INITIALIZER
# ============================================================================

class DatabaseInitializer:
    """
    Database initialization orchestrator.

    All operations are idempotent (safe to run multiple times).
    """

    SCHEMA_NAME = SCHEMA

    def __init__(self, connection_string: Optional[str] = None):
        self.connection_string = connection_string or get_defaults().database.connection_string
        self.generator = PydanticToSQL(schema_name=self.SCHEMA_NAME)

    @property
    def expected_tables(self) -> List[str]:
        from core.models import TABLE_MODELS
        return [m.__sql_table__ for m in TABLE_MODELS]

    def _connect(self) -> psycopg.Connection:
        return psycopg.connect(self.connection_string, row_factory=dict_row)

    def initialize_all(self, dry_run: bool = False) -> InitializationResult:
        """
        Initialize the backoffice schema.

        Args:
            dry_run: If True, render the DDL without connecting

        Returns:
            InitializationResult with detailed step results
        """
        result = InitializationResult(timestamp=datetime.now(timezone.utc).isoformat())

        logger.info("=" * 70)
        logger.info("BACKOFFICE - DATABASE INITIALIZATION")
        logger.info(f"   Schema: {self.SCHEMA_NAME}")
        logger.info(f"   Mode: {'DRY RUN' if dry_run else 'EXECUTE'}")
        logger.info("=" * 70)

        if dry_run:
            result.steps.append(self._render_ddl())
        else:
            for step_fn in (self._test_connection, self._deploy_schema, self._verify_tables):
                step = step_fn()
                result.steps.append(step)
                if step.status == "failed":
                    result.errors.append(f"{step.name}: {step.error}")
                    break

        result.success = not result.errors
        logger.info(f"INITIALIZATION {'COMPLETE' if result.success else 'FAILED'}")
        return result

    def _render_ddl(self) -> StepResult:
        statements = self.generator.generate_all()
        rendered = [stmt.as_string(None) for stmt in statements]
        return StepResult(
            name="deploy_schema",
            status="success",
            message=f"[DRY RUN] Would execute {len(statements)} statements",
            details={"statements": rendered},
        )

    def _test_connection(self) -> StepResult:
        step = StepResult(name="test_connection", status="pending")
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT version() AS version, current_database() AS db"
                ).fetchone()
            step.status = "success"
            step.message = f"Connected to {row['db']}"
            step.details = {"version": row["version"][:50]}
        except psycopg.Error as e:
            step.status = "failed"
            step.error = str(e)
            step.message = "Connection failed"
            logger.error(f"Connection test failed: {e}")
        return step

    def _deploy_schema(self) -> StepResult:
        step = StepResult(name="deploy_schema", status="pending")
        try:
            with self._connect() as conn:
                with conn.transaction():
                    executed = self.generator.execute(conn)
            step.status = "success"
            step.message = f"Deployed {executed} statements"
            step.details = {"statements_executed": executed, "schema": self.SCHEMA_NAME}
        except psycopg.Error as e:
            step.status = "failed"
            step.error = str(e)
            step.message = "Schema deployment failed"
            logger.error(f"Schema deployment failed: {e}")
        return step

    def _verify_tables(self) -> StepResult:
        step = StepResult(name="verify_tables", status="pending")
        try:
            existing = self._existing_tables()
        except psycopg.Error as e:
            step.status = "failed"
            step.error = str(e)
            return step

        missing = [t for t in self.expected_tables if t not in existing]
        step.details = {"existing": existing, "missing": missing}
        if missing:
            step.status = "failed"
            step.error = f"Missing tables: {missing}"
        else:
            step.status = "success"
            step.message = f"All {len(self.expected_tables)} expected tables exist"
        return step

    def _existing_tables(self) -> List[str]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT table_name FROM information_schema.tables "
                "WHERE table_schema = %s ORDER BY table_name",
                (self.SCHEMA_NAME,),
            ).fetchall()
        return [r["table_name"] for r in rows]

    def verify_installation(self) -> Dict[str, Any]:
        """
        Quick verification of database installation state.

        Returns:
            Dict with table names and row counts (-1 for missing tables)
        """
        status: Dict[str, Any] = {"schema": self.SCHEMA_NAME, "tables": {}}
        try:
            existing = set(self._existing_tables())
            with self._connect() as conn:
                for table in self.expected_tables:
                    if table not in existing:
                        status["tables"][table] = -1
                        continue
                    row = conn.execute(
                        sql.SQL("SELECT count(*) AS n FROM {}.{}").format(
                            sql.Identifier(self.SCHEMA_NAME),
                            sql.Identifier(table),
                        )
                    ).fetchone()
                    status["tables"][table] = row["n"]
        except psycopg.Error as e:
            status["error"] = str(e)
        return status


__all__ = [
    'DatabaseInitializer',
    'InitializationResult',
    'StepResult',
]
