"""
Row count check: exact count or bounds.
"""

import ibis

from datespine.quality.base import QualityCheck, QualityCheckResult, QualityCheckStatus


class RowCountCheck(QualityCheck):
    """
    Usage:
        RowCountCheck(expected=365)
        RowCountCheck(min_count=1)
    """

    def __init__(
        self,
        expected: int | None = None,
        min_count: int | None = None,
        max_count: int | None = None,
        **kwargs,
    ):
        if expected is None and min_count is None and max_count is None:
            raise ValueError("RowCountCheck requires expected, min_count, or max_count")
        super().__init__(**kwargs)
        self.expected = expected
        self.min_count = min_count
        self.max_count = max_count

    @property
    def check_type(self) -> str:
        return "row_count"

    def violations(self, row_count: int) -> list[str]:
        found = []
        if self.expected is not None and row_count != self.expected:
            found.append(f"expected {self.expected}")
        if self.min_count is not None and row_count < self.min_count:
            found.append(f"minimum {self.min_count}")
        if self.max_count is not None and row_count > self.max_count:
            found.append(f"maximum {self.max_count}")
        return found

    def evaluate(self, table: ibis.Table, table_name: str) -> QualityCheckResult:
        row_count = int(table.count().execute())
        details = {
            "row_count": row_count,
            "expected": self.expected,
            "min_count": self.min_count,
            "max_count": self.max_count,
        }
        violations = self.violations(row_count)
        if violations:
            return self.result(
                QualityCheckStatus.FAILED,
                table_name,
                f"'{table_name}' has {row_count} rows ({', '.join(violations)})",
                total_rows=row_count,
                details=details,
            )
        return self.result(
            QualityCheckStatus.PASSED,
            table_name,
            f"'{table_name}' has {row_count} rows",
            total_rows=row_count,
            details=details,
        )
