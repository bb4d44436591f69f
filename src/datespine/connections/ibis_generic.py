"""
Connection to any other ibis backend.

Production runs point at the cloud warehouse (Snowflake for the stocks
project). A backend is usable once its ibis extra is installed:

    pip install 'ibis-framework[snowflake]'
"""

import importlib
from typing import Any

import ibis

from datespine.connections.base import BaseConnection
from datespine.exceptions import ConnectionError_
from datespine.utils.logging import get_logger

logger = get_logger("datespine.connections.ibis_generic")


class IbisConnection(BaseConnection):
    """
    Warehouse connection opened with ``ibis.<type>.connect(**config)``.

    Config example (Snowflake)::

        connections:
          warehouse:
            type: snowflake
            config:
              account: ${SNOWFLAKE_ACCOUNT}
              user: ${SNOWFLAKE_USER}
              password: ${SNOWFLAKE_PASSWORD}
              database: STOCKS
              warehouse: ${SNOWFLAKE_WAREHOUSE:-COMPUTE_WH}
    """

    # Connection type -> ibis backend module
    BACKEND_MAP: dict[str, str] = {
        "snowflake": "ibis.snowflake",
        "bigquery": "ibis.bigquery",
        "databricks": "ibis.databricks",
        "postgres": "ibis.postgres",
        "mysql": "ibis.mysql",
        "sqlite": "ibis.sqlite",
        "trino": "ibis.trino",
        "clickhouse": "ibis.clickhouse",
        "mssql": "ibis.mssql",
    }

    def __init__(self, name: str, config: dict[str, Any]):
        super().__init__(name, config)
        backend_type = config.get("type", "")
        if not self.supports_type(backend_type):
            raise ConnectionError_(
                f"Unsupported ibis backend type '{backend_type}' for connection '{name}'. "
                f"Supported types: duckdb, {', '.join(sorted(self.BACKEND_MAP))}"
            )
        self.backend_type: str = backend_type

    @classmethod
    def supports_type(cls, conn_type: str | None) -> bool:
        return conn_type in cls.BACKEND_MAP

    def _connect(self) -> ibis.BaseBackend:
        """
        Raises:
            ConnectionError_: If the backend extra is missing or connect() fails
        """
        try:
            module = importlib.import_module(self.BACKEND_MAP[self.backend_type])
        except ImportError as e:
            raise ConnectionError_(
                f"ibis backend '{self.backend_type}' for connection '{self.name}' is not installed. "
                f"Install it with: pip install 'ibis-framework[{self.backend_type}]'"
            ) from e

        params = dict(self.config.get("config") or {})
        try:
            backend = module.connect(**params)
        except Exception as e:
            raise ConnectionError_(
                f"Failed to connect to {self.backend_type} for connection '{self.name}': {e}",
                details={"connection": self.name, "config_keys": sorted(params)},
            ) from e

        logger.info(f"Connected to {self.backend_type} for connection '{self.name}'")
        return backend
