"""
Base materialiser interface.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import ibis


class Materializer(ABC):
    """Base class for materialisers."""

    @abstractmethod
    def materialise(
        self,
        data: "ibis.Table",
        table_name: str,
        schema: str,
        connection: "ibis.BaseBackend",
        database: str | None = None,
        **kwargs: Any,
    ) -> int:
        """
        Materialise data to target.

        Args:
            data: Table to materialise
            table_name: Target table name
            schema: Target schema
            connection: ibis backend
            database: Optional catalog holding the schema
            **kwargs: Materialisation-specific parameters

        Returns:
            Number of rows in the target after materialisation
        """
        pass
