"""
Connection wrapper shared by every warehouse type.

A wrapper holds one ``connections:`` entry from config.yaml and opens the ibis
backend on first use. The calendar reads its watermark and writes its table
through the same backend.
"""

from abc import ABC, abstractmethod
from typing import Any

import ibis

from datespine.exceptions import ConnectionError_
from datespine.utils.logging import get_logger

logger = get_logger("datespine.connections.base")

ACCESS_POLICIES = ("read", "readwrite")


class ReadOnlyConnectionError(ConnectionError_):
    """Raised when the calendar would be written through an ``access: read`` connection."""


class BaseConnection(ABC):
    """
    Lazily opened ibis backend plus its access policy.

    ``access: read`` lets a connection serve the upstream watermark (and dry
    runs) while refusing to replace the calendar table.

    Args:
        name: Key under ``connections:``
        config: The entry's settings
    """

    def __init__(self, name: str, config: dict[str, Any]):
        self.name = name
        self.config = config
        self._connection: ibis.BaseBackend | None = None

        access = config.get("access", "readwrite")
        if access not in ACCESS_POLICIES:
            raise ConnectionError_(
                f"Connection '{name}': invalid access policy '{access}'. Must be one of: {', '.join(ACCESS_POLICIES)}",
                details={"connection": name},
            )
        self._access: str = access

    @property
    def access(self) -> str:
        return self._access

    @property
    def is_read_only(self) -> bool:
        return self._access == "read"

    def assert_writable(self, operation: str = "write") -> None:
        """
        Raises:
            ReadOnlyConnectionError: If the connection has ``access: read``
        """
        if self.is_read_only:
            raise ReadOnlyConnectionError(
                f"Cannot perform {operation} on read-only connection '{self.name}'. "
                f"Set access: readwrite on the connection to allow it.",
                details={"connection": self.name},
            )

    @property
    def connection(self) -> ibis.BaseBackend:
        """The ibis backend, opened on first access."""
        if self._connection is None:
            self._connection = self._connect()
        return self._connection

    @abstractmethod
    def _connect(self) -> ibis.BaseBackend:
        """Open the backend described by ``self.config``."""

    def close(self) -> None:
        if self._connection is None:
            return
        try:
            self._connection.disconnect()
        except Exception as e:
            logger.debug(f"Error disconnecting '{self.name}': {e}")
        finally:
            self._connection = None

    def __enter__(self) -> "BaseConnection":
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"
