"""
dbt-style quality checks run against the materialised calendar.

Usage:
    from datespine.quality import QualityCheckRunner, UniqueCheck, ContiguousDatesCheck

    runner = QualityCheckRunner(connection)
    summary = runner.run_checks(
        table_name="dim_date",
        schema="gold",
        checks=[UniqueCheck(column="date_key"), ContiguousDatesCheck(column="date_key")],
    )
"""

from datespine.quality.base import (
    QualityCheck,
    QualityCheckResult,
    QualityCheckSeverity,
    QualityCheckStatus,
)
from datespine.quality.checks import ContiguousDatesCheck, NotNullCheck, RowCountCheck, UniqueCheck
from datespine.quality.runner import QualityCheckRunner, QualityCheckSummary

__all__ = [
    "QualityCheck",
    "QualityCheckResult",
    "QualityCheckSeverity",
    "QualityCheckStatus",
    "QualityCheckRunner",
    "QualityCheckSummary",
    "ContiguousDatesCheck",
    "NotNullCheck",
    "RowCountCheck",
    "UniqueCheck",
]
