"""
Connection management.

Connections are declared under ``connections:`` in config.yaml and looked up
by name; ``duckdb`` gets its own wrapper, every other type goes through the
generic ibis connector.
"""

from pathlib import Path
from typing import Any

from datespine.config.loader import Config
from datespine.connections.base import BaseConnection, ReadOnlyConnectionError
from datespine.connections.duckdb import DuckDBConnection
from datespine.connections.ibis_generic import IbisConnection
from datespine.exceptions import ConnectionError_, ConnectionNotFoundError

__all__ = [
    "BaseConnection",
    "DuckDBConnection",
    "IbisConnection",
    "ReadOnlyConnectionError",
    "create_connection",
    "get_connection",
]


def create_connection(name: str, conn_config: dict[str, Any], project_dir: Path | None = None) -> BaseConnection:
    """
    Build the connection wrapper for one ``connections:`` entry.

    Relative DuckDB paths are resolved against ``project_dir`` when given.
    """
    if not isinstance(conn_config, dict):
        raise ConnectionError_(f"Connection '{name}' must be a mapping, got {type(conn_config).__name__}")

    conn_type = conn_config.get("type")
    if conn_type == "duckdb":
        path = conn_config.get("path", ":memory:")
        if project_dir is not None and path != ":memory:" and not Path(path).is_absolute():
            conn_config = {**conn_config, "path": str(project_dir / path)}
        return DuckDBConnection(name, conn_config)
    if IbisConnection.supports_type(conn_type):
        return IbisConnection(name, conn_config)
    raise ConnectionError_(f"Unknown connection type '{conn_type}' for connection '{name}'")


def get_connection(config: Config, name: str | None = None) -> BaseConnection:
    """
    Look up a configured connection by name.

    With no name, the only configured connection is used.

    Raises:
        ConnectionNotFoundError: If the name is unknown, or no name was given
            and there is not exactly one connection
    """
    connections = config.connections
    if name is None:
        if len(connections) != 1:
            raise ConnectionNotFoundError("<default>")
        name = next(iter(connections))
    if name not in connections:
        raise ConnectionNotFoundError(name)
    return create_connection(name, connections[name], project_dir=config.project_dir)
