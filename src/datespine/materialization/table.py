"""
Table materialisation - full replace through a staging table.

The new contents are written completely to ``_datespine_stage_<table>`` first
and only then swapped into the target, so readers see either the previous
table or the new one, never a partial write.
"""

from typing import Any

import ibis

from datespine.exceptions import MaterializationError
from datespine.materialization.base import Materializer
from datespine.utils.logging import get_logger
from datespine.utils.sql import execute_sql, table_namespace
from datespine.utils.sql_escape import escape_qualified_name

STAGING_PREFIX = "_datespine_stage_"

# Backends where CREATE OR REPLACE TABLE ... AS SELECT is a single atomic
# statement with double-quoted identifiers
ATOMIC_REPLACE_BACKENDS = {"duckdb", "snowflake"}


class TableMaterializer(Materializer):
    """Table materializer - replaces the target table with the given data."""

    def __init__(self) -> None:
        self.logger = get_logger("datespine.materialization.table")

    def materialise(
        self,
        data: ibis.Table,
        table_name: str,
        schema: str,
        connection: ibis.BaseBackend,
        database: str | None = None,
        **kwargs: Any,
    ) -> int:
        """
        Replace ``[database.]schema.table_name`` with ``data``.

        1. Ensure the schema exists.
        2. Write all rows to the staging table (overwriting any leftover).
        3. Swap staging into the target, then drop staging.

        Args:
            data: Table to materialise
            table_name: Target table name
            schema: Target schema (ibis "database")
            connection: ibis backend
            database: Optional catalog holding the schema

        Returns:
            Row count of the target after the swap

        Raises:
            MaterializationError: If the staging write or the swap fails;
                the previous target is left untouched
        """
        namespace = table_namespace(database, schema)
        staging_name = f"{STAGING_PREFIX}{table_name}"
        target = ".".join(p for p in (database, schema, table_name) if p)

        self._ensure_schema(connection, schema, database)

        try:
            connection.create_table(staging_name, obj=data, database=namespace, overwrite=True)
        except Exception as e:
            self._drop_staging(connection, staging_name, namespace)
            raise MaterializationError(f"Failed to write staging table for '{target}': {e}") from e

        try:
            self._swap(connection, staging_name, table_name, schema, database)
        except Exception as e:
            self._drop_staging(connection, staging_name, namespace)
            raise MaterializationError(f"Failed to swap staging table into '{target}': {e}") from e

        self._drop_staging(connection, staging_name, namespace)

        row_count = int(connection.table(table_name, database=namespace).count().execute())
        self.logger.debug(f"Replaced '{target}' with {row_count} rows")
        return row_count

    def _ensure_schema(self, connection: ibis.BaseBackend, schema: str, database: str | None) -> None:
        """Create the target schema if the backend supports it."""
        if not hasattr(connection, "create_database"):
            return
        try:
            if database:
                connection.create_database(schema, catalog=database, force=True)
            else:
                connection.create_database(schema, force=True)
        except Exception as e:
            # A missing schema surfaces again, as a MaterializationError, on the staging write
            self.logger.warning(f"Could not ensure schema '{schema}' exists: {e}")

    def _swap(
        self,
        connection: ibis.BaseBackend,
        staging_name: str,
        table_name: str,
        schema: str,
        database: str | None,
    ) -> None:
        """Atomically replace the target with the staging table's contents."""
        backend = getattr(connection, "name", "")
        if backend in ATOMIC_REPLACE_BACKENDS:
            target_sql = escape_qualified_name(database, schema, table_name)
            staging_sql = escape_qualified_name(database, schema, staging_name)
            execute_sql(connection, f"CREATE OR REPLACE TABLE {target_sql} AS SELECT * FROM {staging_sql}")
            return

        # Other backends: ibis builds the new table aside and renames it over the old one
        namespace = table_namespace(database, schema)
        staged = connection.table(staging_name, database=namespace)
        connection.create_table(table_name, obj=staged, database=namespace, overwrite=True)

    def _drop_staging(self, connection: ibis.BaseBackend, staging_name: str, namespace: Any) -> None:
        try:
            connection.drop_table(staging_name, database=namespace, force=True)
        except Exception as e:
            self.logger.debug(f"Could not drop staging table '{staging_name}': {e}")
