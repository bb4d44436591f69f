"""
Quality check runner.

Runs a list of checks against the materialised calendar and rolls the results
up into a :class:`QualityCheckSummary` the builder can act on.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any

import ibis

from datespine.quality.base import (
    QualityCheck,
    QualityCheckResult,
    QualityCheckSeverity,
    QualityCheckStatus,
)
from datespine.utils.logging import get_logger

logger = get_logger("datespine.quality.runner")

# Log level for a FAILED result, by severity
_FAILURE_LOG_LEVEL = {
    QualityCheckSeverity.ERROR: logging.ERROR,
    QualityCheckSeverity.WARN: logging.WARNING,
    QualityCheckSeverity.INFO: logging.INFO,
}


def _is_blocking(result: QualityCheckResult) -> bool:
    """A result that should fail the run: it errored, or it failed at ERROR severity."""
    if result.status == QualityCheckStatus.ERROR:
        return True
    return result.status == QualityCheckStatus.FAILED and result.severity == QualityCheckSeverity.ERROR


@dataclass
class QualityCheckSummary:
    """Results of all checks run against one table."""

    table_name: str
    results: list[QualityCheckResult] = field(default_factory=list)
    duration_seconds: float = 0.0
    total_checks: int = 0

    def _count(self, status: QualityCheckStatus) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def passed(self) -> int:
        return self._count(QualityCheckStatus.PASSED)

    @property
    def failed(self) -> int:
        return self._count(QualityCheckStatus.FAILED)

    @property
    def errors(self) -> int:
        return self._count(QualityCheckStatus.ERROR)

    @property
    def skipped(self) -> int:
        return self._count(QualityCheckStatus.SKIPPED)

    @property
    def has_failures(self) -> bool:
        return any(_is_blocking(r) for r in self.results)

    @property
    def has_warnings(self) -> bool:
        return any(
            r.status == QualityCheckStatus.FAILED and r.severity == QualityCheckSeverity.WARN for r in self.results
        )

    @property
    def failure_messages(self) -> list[str]:
        return [r.message for r in self.results if _is_blocking(r)]

    def to_dict(self) -> dict[str, Any]:
        return {
            "table_name": self.table_name,
            "total_checks": self.total_checks,
            "passed": self.passed,
            "failed": self.failed,
            "errors": self.errors,
            "skipped": self.skipped,
            "has_failures": self.has_failures,
            "has_warnings": self.has_warnings,
            "duration_seconds": self.duration_seconds,
            "results": [r.to_dict() for r in self.results],
        }


class QualityCheckRunner:
    """
    Runs quality checks against one table.

    Usage:
        runner = QualityCheckRunner(connection)
        summary = runner.run_checks(
            "dim_date",
            [UniqueCheck(column="date_key"), ContiguousDatesCheck(column="date_key")],
            schema="gold",
        )
        if summary.has_failures:
            raise QualityError(...)

    Args:
        connection: ibis backend holding the table
        fail_fast: Stop after the first blocking result
    """

    def __init__(self, connection: ibis.BaseBackend, fail_fast: bool = False):
        self.connection = connection
        self.fail_fast = fail_fast

    def run_checks(
        self,
        table_name: str,
        checks: list[QualityCheck],
        schema: str | None = None,
        database: str | None = None,
    ) -> QualityCheckSummary:
        started = time.time()
        summary = QualityCheckSummary(table_name=table_name, total_checks=len(checks))

        for check in checks:
            result = check.run(self.connection, table_name, schema, database)
            summary.results.append(result)
            self._log_result(result)
            if self.fail_fast and _is_blocking(result):
                break

        summary.duration_seconds = time.time() - started
        logger.info(
            f"Quality checks for '{table_name}': {summary.passed} passed, {summary.failed} failed, "
            f"{summary.errors} errors, {summary.skipped} skipped"
        )
        return summary

    @staticmethod
    def _log_result(result: QualityCheckResult) -> None:
        if result.status == QualityCheckStatus.FAILED:
            logger.log(_FAILURE_LOG_LEVEL[result.severity], f"Quality check {result.check_name} failed: {result.message}")
        elif result.status == QualityCheckStatus.ERROR:
            logger.error(f"Quality check {result.check_name} could not run: {result.message}")
        else:
            logger.debug(f"Quality check {result.check_name} {result.status.value}: {result.message}")
