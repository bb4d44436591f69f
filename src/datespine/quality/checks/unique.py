"""
Uniqueness check: no value appears twice in a column.
"""

import ibis

from datespine.quality.base import QualityCheck, QualityCheckResult, QualityCheckStatus


class UniqueCheck(QualityCheck):
    """
    Usage:
        UniqueCheck(column="date_key")
    """

    def __init__(self, column: str, **kwargs):
        if not column:
            raise ValueError("UniqueCheck requires a column")
        super().__init__(column=column, **kwargs)

    @property
    def check_type(self) -> str:
        return "unique"

    def evaluate(self, table: ibis.Table, table_name: str) -> QualityCheckResult:
        counts = table.aggregate(total_rows=table.count(), distinct_values=table[self.column].nunique()).execute()
        total_rows = int(counts["total_rows"].iloc[0])
        distinct = int(counts["distinct_values"].iloc[0])
        duplicates = total_rows - distinct

        if duplicates == 0:
            return self.result(
                QualityCheckStatus.PASSED,
                table_name,
                f"'{self.column}' is unique across {total_rows} rows",
                total_rows=total_rows,
                details={"distinct_count": distinct},
            )
        return self.result(
            QualityCheckStatus.FAILED,
            table_name,
            f"'{self.column}' has {duplicates} duplicate value(s) ({distinct} distinct in {total_rows} rows)",
            failed_rows=duplicates,
            total_rows=total_rows,
            details={"distinct_count": distinct, "duplicate_count": duplicates},
        )
