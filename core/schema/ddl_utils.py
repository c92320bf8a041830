# ============================================================================
# DDL UTILITIES
# ============================================================================
# STATUS: Core - Building blocks for backoffice DDL
# PURPOSE: Index, updated_at trigger, table comment and schema statements
# CREATED: 19 OCT 2026
# ============================================================================
"""
DDL Utilities

Every builder returns a psycopg.sql.Composed; identifiers are always
quoted through sql.Identifier and comments through sql.Literal.

Usage:
    from core.schema.ddl_utils import IndexBuilder, TriggerBuilder

    stmt = IndexBuilder.create('backoffice', 'wall_blocks', ['wall_id', 'block_id'],
                               name='idx_wall_blocks_parent_child', unique=True)
"""

from typing import List, Optional, Sequence

from psycopg import sql


class IndexBuilder:
    """CREATE [UNIQUE] INDEX statements."""

    @staticmethod
    def create(
        schema: str,
        table: str,
        columns: Sequence[str],
        name: Optional[str] = None,
        unique: bool = False,
        where: Optional[str] = None,
    ) -> sql.Composed:
        """
        Args:
            columns: indexed columns, in order
            name: index name (default idx_<table>_<columns>)
            unique: emit CREATE UNIQUE INDEX
            where: raw predicate for a partial index, taken from model
                metadata and never from user input
        """
        if isinstance(columns, str):
            columns = [columns]
        index_name = name or f"idx_{table}_{'_'.join(columns)}"

        stmt = sql.SQL("CREATE {kind} IF NOT EXISTS {name} ON {schema}.{table} ({columns})").format(
            kind=sql.SQL("UNIQUE INDEX" if unique else "INDEX"),
            name=sql.Identifier(index_name),
            schema=sql.Identifier(schema),
            table=sql.Identifier(table),
            columns=sql.SQL(", ").join(map(sql.Identifier, columns)),
        )
        if where:
            stmt = sql.SQL("{} WHERE {}").format(stmt, sql.SQL(where))
        return stmt


class TriggerBuilder:
    """Keeps updated_at current on every UPDATE."""

    FUNCTION_NAME = "touch_updated_at"

    @classmethod
    def updated_at_function(cls, schema: str) -> sql.Composed:
        return sql.SQL("""
            CREATE OR REPLACE FUNCTION {schema}.{function}()
            RETURNS TRIGGER
            LANGUAGE plpgsql
            AS $$
            BEGIN
                NEW.updated_at = NOW();
                RETURN NEW;
            END;
            $$
        """).format(
            schema=sql.Identifier(schema),
            function=sql.Identifier(cls.FUNCTION_NAME),
        )

    @classmethod
    def updated_at_trigger(cls, schema: str, table: str) -> List[sql.Composed]:
        """DROP then CREATE, so redeploying replaces the trigger."""
        names = {
            "trigger": sql.Identifier(f"trg_{table}_updated_at"),
            "schema": sql.Identifier(schema),
            "table": sql.Identifier(table),
            "function": sql.Identifier(cls.FUNCTION_NAME),
        }
        return [
            sql.SQL("DROP TRIGGER IF EXISTS {trigger} ON {schema}.{table}").format(**names),
            sql.SQL("""
            CREATE TRIGGER {trigger}
            BEFORE UPDATE ON {schema}.{table}
            FOR EACH ROW
            EXECUTE FUNCTION {schema}.{function}()
            """).format(**names),
        ]


class CommentBuilder:

    @staticmethod
    def table(schema: str, table: str, comment: str) -> sql.Composed:
        return sql.SQL("COMMENT ON TABLE {}.{} IS {}").format(
            sql.Identifier(schema), sql.Identifier(table), sql.Literal(comment),
        )


class SchemaUtils:

    @staticmethod
    def create_schema(schema: str) -> sql.Composed:
        return sql.SQL("CREATE SCHEMA IF NOT EXISTS {}").format(sql.Identifier(schema))

    @staticmethod
    def set_search_path(schema: str) -> sql.Composed:
        return sql.SQL("SET search_path TO {}, public").format(sql.Identifier(schema))


__all__ = [
    'IndexBuilder',
    'TriggerBuilder',
    'CommentBuilder',
    'SchemaUtils',
]
