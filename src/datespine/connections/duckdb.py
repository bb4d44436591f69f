"""
DuckDB connection via ibis.

The local stand-in for the warehouse: the upstream quotes and the calendar
live in one DuckDB file, or the quotes are ATTACHed from another database.
"""

import re
from pathlib import Path
from typing import Any

import ibis

from datespine.connections.base import BaseConnection
from datespine.exceptions import ConnectionError_
from datespine.utils.logging import get_logger
from datespine.utils.sql import execute_sql

logger = get_logger("datespine.connections.duckdb")

ATTACH_TYPES = ("duckdb", "sqlite", "postgres")

_ATTACH_NAME = re.compile(r"^[A-Za-z0-9_]+$")


def _quote_literal(value: Any) -> str:
    return "'" + str(value).replace("'", "''") + "'"


class DuckDBConnection(BaseConnection):
    """
    DuckDB file (or in-memory database) opened through ibis.

    Config example::

        connections:
          warehouse:
            type: duckdb
            path: data/{env}/stocks.duckdb
            attach:
              - type: duckdb
                name: silver_src
                path: data/{env}/silver.duckdb
                read_only: true
    """

    @property
    def path(self) -> str:
        return self.config.get("path", ":memory:")

    def _connect(self) -> ibis.BaseBackend:
        backend = self._open()
        try:
            for attach_config in self.config.get("attach") or []:
                self._attach(backend, attach_config)
        except Exception:
            backend.disconnect()
            raise
        return backend

    def _open(self) -> ibis.BaseBackend:
        path = self.path
        if path == ":memory:":
            return ibis.duckdb.connect()

        Path(path).parent.mkdir(parents=True, exist_ok=True)
        try:
            return ibis.duckdb.connect(path)
        except Exception as e:
            reason = str(e)
            if "lock" in reason.lower() or "conflicting" in reason.lower():
                pid = re.search(r"PID\s+(\d+)", reason)
                holder = f" by PID {pid.group(1)}" if pid else " by another process"
                reason = f"file is locked{holder}; close other DuckDB sessions using it"
            raise ConnectionError_(
                f"Cannot open DuckDB database '{path}' for connection '{self.name}': {reason}",
                details={"connection": self.name, "path": path},
            ) from e

    def _attach(self, backend: ibis.BaseBackend, attach_config: dict[str, Any]) -> None:
        """
        ATTACH another database so upstream tables resolve as ``<name>.<schema>.<table>``.

        ``duckdb`` and ``sqlite`` take a ``path``; ``postgres`` takes a
        ``config`` mapping with at least ``host`` and ``database``. Any of them
        may set ``read_only: true``.
        """
        attach_type = attach_config.get("type")
        name = attach_config.get("name") or ""
        if not _ATTACH_NAME.match(name):
            raise ConnectionError_(f"Invalid attach name '{name}': use letters, digits and underscores only")
        if attach_type not in ATTACH_TYPES:
            raise ConnectionError_(
                f"Unsupported attach type '{attach_type}' for connection '{self.name}'. "
                f"Supported types: {', '.join(ATTACH_TYPES)}"
            )

        options = []
        if attach_type == "postgres":
            pg = attach_config.get("config") or {}
            missing = [key for key in ("host", "database") if not pg.get(key)]
            if missing:
                raise ConnectionError_(f"Postgres attach '{name}' is missing: {', '.join(missing)}")
            target = " ".join(
                [
                    f"host={pg['host']}",
                    f"port={int(pg.get('port', 5432))}",
                    f"user={pg.get('user', '')}",
                    f"password={pg.get('password', '')}",
                    f"dbname={pg['database']}",
                ]
            )
            options.append("TYPE POSTGRES")
        else:
            target = attach_config.get("path") or ""
            if not target:
                raise ConnectionError_(f"{attach_type} attach '{name}' is missing its path")
            if attach_type == "sqlite":
                options.append("TYPE SQLITE")

        read_only = bool(attach_config.get("read_only", False))
        if read_only:
            options.append("READ_ONLY")

        clause = f" ({', '.join(options)})" if options else ""
        execute_sql(backend, f"ATTACH {_quote_literal(target)} AS {name}{clause}")
        logger.info(f"Attached {attach_type} database as '{name}'{' (read-only)' if read_only else ''}")
