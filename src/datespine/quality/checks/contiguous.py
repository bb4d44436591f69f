"""
Contiguous date range check.

A date column is contiguous when its values cover every day between its
minimum and maximum exactly once.
"""

import ibis

from datespine.quality.base import QualityCheck, QualityCheckResult, QualityCheckStatus
from datespine.utils.dates import coerce_date


class ContiguousDatesCheck(QualityCheck):
    """
    Check that a date column has no gaps and no duplicates.

    Usage:
        ContiguousDatesCheck(column="date_key")
    """

    def __init__(self, column: str, **kwargs):
        if not column:
            raise ValueError("ContiguousDatesCheck requires a column")
        super().__init__(column=column, **kwargs)

    @property
    def check_type(self) -> str:
        return "contiguous"

    def evaluate(self, table: ibis.Table, table_name: str) -> QualityCheckResult:
        column = table[self.column]
        stats = table.aggregate(
            total_rows=table.count(),
            distinct_days=column.nunique(),
            first_day=column.min(),
            last_day=column.max(),
        ).execute()

        total_rows = int(stats["total_rows"].iloc[0])
        if total_rows == 0:
            return self.result(QualityCheckStatus.SKIPPED, table_name, f"'{table_name}' is empty; nothing to check")

        distinct = int(stats["distinct_days"].iloc[0])
        first = coerce_date(stats["first_day"].iloc[0])
        last = coerce_date(stats["last_day"].iloc[0])
        expected = (last - first).days + 1
        details = {
            "first": first.isoformat(),
            "last": last.isoformat(),
            "expected_days": expected,
            "distinct_days": distinct,
        }

        if distinct == expected == total_rows:
            return self.result(
                QualityCheckStatus.PASSED,
                table_name,
                f"'{self.column}' covers {first} to {last} without gaps ({total_rows} days)",
                total_rows=total_rows,
                details=details,
            )

        missing = expected - distinct
        duplicates = total_rows - distinct
        return self.result(
            QualityCheckStatus.FAILED,
            table_name,
            f"'{self.column}' between {first} and {last} has {missing} missing day(s) and {duplicates} duplicate(s)",
            failed_rows=missing + duplicates,
            total_rows=total_rows,
            details={**details, "missing_days": missing, "duplicate_days": duplicates},
        )
