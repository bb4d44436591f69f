"""
Upstream watermark reader.

The calendar never extends past the data it describes: its upper bound is the
latest ``quote_date`` seen in the cleaned quotes dataset. This module reads
that bound through a typed interface so the generator does not depend on any
particular upstream schema.
"""

from dataclasses import dataclass
from datetime import date

import ibis

from datespine.exceptions import UpstreamUnavailableError
from datespine.utils.dates import coerce_date
from datespine.utils.logging import get_logger
from datespine.utils.sql import table_namespace

logger = get_logger("datespine.watermark")


@dataclass(frozen=True)
class UpstreamDataset:
    """A table exposing a date column whose maximum bounds the calendar."""

    table: str
    column: str = "quote_date"
    schema: str | None = None
    database: str | None = None

    @property
    def qualified_name(self) -> str:
        return ".".join(p for p in (self.database, self.schema, self.table) if p)


def max_observed_date(connection: ibis.BaseBackend, dataset: UpstreamDataset) -> date | None:
    """
    Return ``max(dataset.column)`` as a date.

    Timestamps are truncated to their calendar date.

    Args:
        connection: ibis backend holding the upstream table
        dataset: Upstream table and watermark column

    Returns:
        The latest observed date, or None if the table has no rows (or the
        column is entirely NULL)

    Raises:
        UpstreamUnavailableError: If the table or column is missing, or the
            aggregate query fails
    """
    name = dataset.qualified_name
    try:
        table = connection.table(dataset.table, database=table_namespace(dataset.database, dataset.schema))
    except Exception as e:
        raise UpstreamUnavailableError(name, str(e), cause=e) from e

    if dataset.column not in table.columns:
        raise UpstreamUnavailableError(
            name, f"column '{dataset.column}' not found (available: {', '.join(table.columns)})"
        )

    try:
        value = table[dataset.column].max().execute()
    except Exception as e:
        raise UpstreamUnavailableError(name, f"failed to read max({dataset.column}): {e}", cause=e) from e

    watermark = coerce_date(value)
    if watermark is None:
        logger.info(f"Upstream '{name}' is empty; no watermark")
    else:
        logger.debug(f"Upstream watermark for '{name}': {watermark.isoformat()}")
    return watermark
