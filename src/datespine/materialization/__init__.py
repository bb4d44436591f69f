"""
Materialization - how the calendar is persisted.

Only full-replace table materialisation is supported.
"""

from datespine.exceptions import ConfigurationError
from datespine.materialization.base import Materializer
from datespine.materialization.table import TableMaterializer

__all__ = [
    "Materializer",
    "TableMaterializer",
    "get_materializer",
]

# Materializer registry
MATERIALIZERS = {
    "table": TableMaterializer,
}


def get_materializer(materialize_type: str) -> Materializer:
    """Get materializer by type."""
    if materialize_type not in MATERIALIZERS:
        raise ConfigurationError(f"Unknown materialization type: {materialize_type}")
    return MATERIALIZERS[materialize_type]()
