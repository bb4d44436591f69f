"""
Quality check implementations.
"""

from datespine.quality.checks.contiguous import ContiguousDatesCheck
from datespine.quality.checks.not_null import NotNullCheck
from datespine.quality.checks.row_count import RowCountCheck
from datespine.quality.checks.unique import UniqueCheck

__all__ = [
    "ContiguousDatesCheck",
    "NotNullCheck",
    "RowCountCheck",
    "UniqueCheck",
]
