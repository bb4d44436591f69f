"""
Not-null check.
"""

import ibis

from datespine.quality.base import QualityCheck, QualityCheckResult, QualityCheckStatus


class NotNullCheck(QualityCheck):
    """
    Fails when any row has NULL in the column.

    Usage:
        NotNullCheck(column="date_key")
    """

    def __init__(self, column: str, **kwargs):
        if not column:
            raise ValueError("NotNullCheck requires a column")
        super().__init__(column=column, **kwargs)

    @property
    def check_type(self) -> str:
        return "not_null"

    def evaluate(self, table: ibis.Table, table_name: str) -> QualityCheckResult:
        column = table[self.column]
        counts = table.aggregate(total_rows=table.count(), null_rows=column.isnull().sum()).execute()
        total_rows = int(counts["total_rows"].iloc[0])
        # SUM over zero rows is NULL
        null_rows = int(counts["null_rows"].fillna(0).iloc[0])

        if null_rows == 0:
            return self.result(
                QualityCheckStatus.PASSED,
                table_name,
                f"'{self.column}' has no NULLs ({total_rows} rows)",
                total_rows=total_rows,
            )
        return self.result(
            QualityCheckStatus.FAILED,
            table_name,
            f"'{self.column}' is NULL in {null_rows} of {total_rows} rows",
            failed_rows=null_rows,
            total_rows=total_rows,
            details={"null_count": null_rows},
        )
