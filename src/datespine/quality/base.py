"""
Quality check building blocks.

A check looks at one column (or the whole table) of the materialised calendar
and reports a :class:`QualityCheckResult`. :meth:`QualityCheck.run` owns the
table lookup, timing and error capture; subclasses only implement
:meth:`QualityCheck.evaluate`.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

import ibis

from datespine.utils.logging import get_logger
from datespine.utils.sql import table_namespace

logger = get_logger("datespine.quality")


class QualityCheckSeverity(Enum):
    ERROR = "error"  # fails the run
    WARN = "warn"
    INFO = "info"


class QualityCheckStatus(Enum):
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"
    # The check could not be evaluated (missing table, query error)
    ERROR = "error"


@dataclass
class QualityCheckResult:
    """
    Outcome of one check against one table.

    ``failed_rows`` counts offending rows (duplicates, NULLs, missing days);
    ``details`` carries whatever figures the check computed.
    """

    check_name: str
    check_type: str
    status: QualityCheckStatus
    severity: QualityCheckSeverity
    table_name: str
    column_name: str | None = None
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)
    failed_rows: int = 0
    total_rows: int = 0
    duration_seconds: float = 0.0

    @property
    def passed(self) -> bool:
        return self.status == QualityCheckStatus.PASSED

    @property
    def failure_rate(self) -> float:
        """Failed rows as a percentage of rows checked."""
        if not self.total_rows:
            return 0.0
        return self.failed_rows * 100 / self.total_rows

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        data["severity"] = self.severity.value
        data["failure_rate"] = self.failure_rate
        return data


class QualityCheck(ABC):
    """
    A single assertion about a table.

    Args:
        column: Column under test; None for table-level checks
        severity: ERROR fails the run, WARN and INFO are only logged
        name: Override for the generated ``<type>_<column>`` name
    """

    def __init__(
        self,
        column: str | None = None,
        severity: QualityCheckSeverity = QualityCheckSeverity.ERROR,
        name: str | None = None,
    ) -> None:
        self.column = column
        self.severity = severity
        self.name = name

    @property
    @abstractmethod
    def check_type(self) -> str:
        """Short identifier such as ``unique`` or ``contiguous``."""

    @property
    def check_name(self) -> str:
        if self.name:
            return self.name
        return f"{self.check_type}_{self.column}" if self.column else self.check_type

    @abstractmethod
    def evaluate(self, table: ibis.Table, table_name: str) -> QualityCheckResult:
        """Compute the check against an already resolved table."""

    def run(
        self,
        connection: ibis.BaseBackend,
        table_name: str,
        schema: str | None = None,
        database: str | None = None,
    ) -> QualityCheckResult:
        """
        Resolve ``[database.]schema.table_name`` and evaluate the check.

        Errors while querying are reported as an ERROR result, never raised,
        so one broken check does not hide the others.
        """
        started = time.time()
        try:
            table = connection.table(table_name, database=table_namespace(database, schema))
            result = self.evaluate(table, table_name)
        except Exception as e:
            logger.error(f"Error running {self.check_type} check on '{table_name}': {e}")
            result = self.result(
                QualityCheckStatus.ERROR,
                table_name,
                f"Error running {self.check_type} check: {e}",
                details={"error": str(e)},
            )
        result.duration_seconds = time.time() - started
        return result

    def result(self, status: QualityCheckStatus, table_name: str, message: str, **fields: Any) -> QualityCheckResult:
        """Build a result stamped with this check's name, type, severity and column."""
        return QualityCheckResult(
            check_name=self.check_name,
            check_type=self.check_type,
            status=status,
            severity=self.severity,
            table_name=table_name,
            column_name=self.column,
            message=message,
            **fields,
        )
