"""
Raw SQL execution on ibis backends.
"""

from typing import Any

import ibis


def execute_sql(connection: ibis.BaseBackend, query: str) -> Any:
    """
    Execute a DDL statement immediately on an ibis backend.

    ``connection.sql()`` only accepts SELECT-shaped queries, so statements with
    side effects (CREATE, DROP, ALTER, transactions) go through ``raw_sql()``.

    For DuckDB ``raw_sql()`` hands back the underlying duckdb connection after
    executing; it must not be closed here.

    Raises:
        ValueError: If the backend exposes no raw SQL entry point
    """
    if not hasattr(connection, "raw_sql"):
        raise ValueError(
            f"Cannot execute SQL on connection type {type(connection)}. "
            "Connection must support raw_sql()."
        )
    return connection.raw_sql(query)


def table_namespace(database: str | None, schema: str | None) -> str | tuple[str, str] | None:
    """
    Build the ``database=`` argument ibis expects for a table location.

    ibis takes ``(catalog, schema)`` for a fully qualified location and a bare
    string for a schema in the current catalog.
    """
    if database and schema:
        return (database, schema)
    return schema or database
