# ============================================================================
# PYDANTIC TO SQL GENERATOR
# ============================================================================
# STATUS: Core - DDL generation from Pydantic models
# PURPOSE: Generate PostgreSQL CREATE statements from Pydantic models
# CREATED: 19 OCT 2026
# EXPORTS: PydanticToSQL
# DEPENDENCIES: pydantic, psycopg, annotated_types
# ============================================================================
"""
Pydantic to PostgreSQL Schema Generator.

Generates PostgreSQL DDL statements from Pydantic models.
Pydantic models are the SINGLE SOURCE OF TRUTH for schema.

Model Metadata Convention:
    Models define SQL metadata via ClassVar attributes:
    - __sql_table__: Table name
    - __sql_schema__: Schema name
    - __sql_primary_key__: Primary key column(s) - string or list
    - __sql_indexes__: List of index definitions, either
        (name, columns) / (name, columns, partial_where) tuples or
        {"name", "columns", "unique", "partial_where"} dicts

No foreign keys are generated. References between tables (program_id on
episodes, parent_id on categories, both sides of every link table) are
weak: the database does not check that the referenced row exists.

Usage:
    generator = PydanticToSQL(schema_name="backoffice")
    statements = generator.generate_all()
    for stmt in statements:
        cursor.execute(stmt)
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Type, Union, get_args, get_origin

from annotated_types import MaxLen
from psycopg import sql
from pydantic import BaseModel
from pydantic.fields import FieldInfo

from core.contracts import SCHEMA
from core.schema.ddl_utils import CommentBuilder, IndexBuilder, SchemaUtils, TriggerBuilder

logger = logging.getLogger(__name__)


class PydanticToSQL:
    """
    Convert Pydantic models to PostgreSQL DDL statements.

    Analyzes Pydantic models with __sql_* metadata and generates
    corresponding PostgreSQL CREATE TABLE statements.
    """

    TYPE_MAP = {
        str: "VARCHAR",
        int: "INTEGER",
        float: "DOUBLE PRECISION",
        bool: "BOOLEAN",
        datetime: "TIMESTAMPTZ",
    }

    def __init__(self, schema_name: str = SCHEMA):
        self.schema_name = schema_name

    # =========================================================================
    # METADATA EXTRACTION
    # =========================================================================

    @staticmethod
    def get_model_metadata(model: Type[BaseModel]) -> Dict[str, Any]:
        """
        Extract SQL DDL metadata from a Pydantic model.

        Returns:
            Dict with table, schema, primary_key, indexes
        """
        metadata = {
            "table": getattr(model, "__sql_table__", None),
            "schema": getattr(model, "__sql_schema__", SCHEMA),
            "primary_key": getattr(model, "__sql_primary_key__", []),
            "indexes": getattr(model, "__sql_indexes__", []),
        }

        if isinstance(metadata["primary_key"], str):
            metadata["primary_key"] = [metadata["primary_key"]]

        return metadata

    # =========================================================================
    # TYPE CONVERSION
    # =========================================================================

    @staticmethod
    def _unwrap_optional(field_type: Any) -> tuple:
        """Return (inner_type, is_optional) for Optional[X] / Union[X, None]."""
        if get_origin(field_type) is Union:
            args = [a for a in get_args(field_type) if a is not type(None)]
            if len(args) == 1:
                return args[0], True
        return field_type, False

    def python_type_to_sql(self, field_type: Type, field_info: FieldInfo) -> str:
        """
        Convert Python type to PostgreSQL type.

        Strings with a max_length constraint become VARCHAR(n); description
        style strings without one become TEXT.
        """
        actual_type, _ = self._unwrap_optional(field_type)

        if actual_type is str:
            for constraint in field_info.metadata or []:
                if isinstance(constraint, MaxLen):
                    return f"VARCHAR({constraint.max_length})"
            return "TEXT"

        sql_type = self.TYPE_MAP.get(actual_type)
        if sql_type:
            return sql_type

        raise ValueError(f"Unsupported column type {actual_type!r}")

    # =========================================================================
    # TABLE GENERATION
    # =========================================================================

    def _column(self, field_name: str, field_info: FieldInfo, primary_key: List[str]) -> sql.Composed:
        sql_type_str = self.python_type_to_sql(field_info.annotation, field_info)
        _, is_optional = self._unwrap_optional(field_info.annotation)

        parts = [sql.Identifier(field_name), sql.SQL(" "), sql.SQL(sql_type_str)]

        if not is_optional and field_name not in primary_key:
            parts.append(sql.SQL(" NOT NULL"))

        if field_name in ("created_at", "updated_at"):
            parts.append(sql.SQL(" DEFAULT NOW()"))
        elif field_info.default is not None and not field_info.is_required():
            default = field_info.default
            if isinstance(default, bool):
                parts.append(sql.SQL(" DEFAULT true" if default else " DEFAULT false"))
            elif isinstance(default, (str, int, float)):
                parts.extend([sql.SQL(" DEFAULT "), sql.Literal(default)])

        return sql.Composed(parts)

    def generate_table(self, model: Type[BaseModel]) -> sql.Composed:
        """
        Generate CREATE TABLE DDL from a Pydantic model.

        Args:
            model: Pydantic model with __sql_* metadata

        Returns:
            sql.Composed CREATE TABLE statement
        """
        meta = self.get_model_metadata(model)
        table_name = meta["table"]
        primary_key = meta["primary_key"]

        if not table_name:
            raise ValueError(f"Model {model.__name__} missing __sql_table__ attribute")

        logger.debug(f"Generating table {meta['schema']}.{table_name} from {model.__name__}")

        parts = [
            self._column(name, info, primary_key)
            for name, info in model.model_fields.items()
        ]

        if primary_key:
            parts.append(
                sql.SQL("PRIMARY KEY ({})").format(
                    sql.SQL(", ").join(sql.Identifier(col) for col in primary_key)
                )
            )

        return sql.SQL("CREATE TABLE IF NOT EXISTS {}.{} ({})").format(
            sql.Identifier(meta["schema"]),
            sql.Identifier(table_name),
            sql.SQL(", ").join(parts),
        )

    # =========================================================================
    # INDEX GENERATION
    # =========================================================================

    def generate_indexes(self, model: Type[BaseModel]) -> List[sql.Composed]:
        """
        Generate CREATE INDEX statements from a Pydantic model's __sql_indexes__.
        """
        meta = self.get_model_metadata(model)
        table_name = meta["table"]
        schema_name = meta["schema"]

        result = []

        for idx_def in meta["indexes"]:
            unique = False
            partial_where: Optional[str] = None
            if isinstance(idx_def, tuple):
                name = idx_def[0]
                columns = idx_def[1] if len(idx_def) > 1 else []
                partial_where = idx_def[2] if len(idx_def) > 2 else None
            elif isinstance(idx_def, dict):
                name = idx_def.get("name")
                columns = idx_def.get("columns", [])
                partial_where = idx_def.get("partial_where")
                unique = idx_def.get("unique", False)
            else:
                continue

            if not columns or not name:
                continue

            result.append(IndexBuilder.create(
                schema_name, table_name, columns,
                name=name, unique=unique, where=partial_where,
            ))

        return result

    # =========================================================================
    # COMPLETE SCHEMA GENERATION
    # =========================================================================

    def generate_all(self) -> List[sql.Composed]:
        """
        Generate complete DDL for all back office tables.

        Returns:
            List of sql.Composed statements ready for execution
        """
        from core.models import ENTITY_MODELS, TABLE_MODELS
        from core.models.associations import Association

        statements = [
            SchemaUtils.create_schema(self.schema_name),
            SchemaUtils.set_search_path(self.schema_name),
        ]

        for model in TABLE_MODELS:
            statements.append(self.generate_table(model))
            statements.extend(self.generate_indexes(model))

        for model in TABLE_MODELS:
            if issubclass(model, Association):
                relation = model.__relation__
                statements.append(CommentBuilder.table(
                    self.schema_name,
                    model.__sql_table__,
                    f"{relation.parent_entity} -> {relation.child_entity} links "
                    f"(weak references, one row per child per parent)",
                ))

        statements.append(TriggerBuilder.updated_at_function(self.schema_name))
        for model in ENTITY_MODELS:
            if "updated_at" in model.model_fields:
                statements.extend(
                    TriggerBuilder.updated_at_trigger(self.schema_name, model.__sql_table__)
                )

        logger.info(f"Generated {len(statements)} DDL statements for schema {self.schema_name}")
        return statements

    def execute(self, conn, dry_run: bool = False) -> int:
        """
        Execute all DDL statements.

        Args:
            conn: psycopg (sync) connection
            dry_run: If True, log statements but don't execute

        Returns:
            Number of statements executed
        """
        statements = self.generate_all()

        if dry_run:
            for stmt in statements:
                logger.info(f"[DRY RUN] {stmt.as_string(conn)[:100]}...")
            return len(statements)

        with conn.cursor() as cur:
            for stmt in statements:
                cur.execute(stmt)

        logger.info(f"Executed {len(statements)} DDL statements")
        return len(statements)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ['PydanticToSQL']
