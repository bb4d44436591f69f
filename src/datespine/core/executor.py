"""
Calendar build execution.

One run is a single synchronous pass: read the upstream watermark, generate
the spine, replace the destination table, check it. Nothing is kept between
runs, and concurrent runs against the same destination must be serialised by
whatever schedules them.
"""

import time
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any

import ibis

from datespine.calendar import CalendarDay, calendar_table, generate_calendar, is_truncated
from datespine.config.settings import CalendarSettings
from datespine.connections.base import BaseConnection
from datespine.exceptions import QualityError, SpineTruncatedError
from datespine.materialization import get_materializer
from datespine.quality import (
    ContiguousDatesCheck,
    NotNullCheck,
    QualityCheckRunner,
    QualityCheckSummary,
    RowCountCheck,
    UniqueCheck,
)
from datespine.utils.logging import get_logger
from datespine.watermark import max_observed_date

logger = get_logger("datespine.executor")


@dataclass
class CalendarBuild:
    """Generated calendar rows plus what bounded them."""

    rows: list[CalendarDay]
    start_date: date
    row_count: int
    watermark: date | None
    truncated: bool

    @property
    def first_date(self) -> date | None:
        return self.rows[0].date_key if self.rows else None

    @property
    def last_date(self) -> date | None:
        return self.rows[-1].date_key if self.rows else None


@dataclass
class RunResult:
    """Outcome of one calendar run."""

    table: str
    row_count: int
    watermark: date | None
    first_date: date | None
    last_date: date | None
    truncated: bool
    materialized: bool
    duration_seconds: float = 0.0
    quality: QualityCheckSummary | None = field(default=None, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "table": self.table,
            "row_count": self.row_count,
            "watermark": self.watermark.isoformat() if self.watermark else None,
            "first_date": self.first_date.isoformat() if self.first_date else None,
            "last_date": self.last_date.isoformat() if self.last_date else None,
            "truncated": self.truncated,
            "materialized": self.materialized,
            "duration_seconds": self.duration_seconds,
            "quality": self.quality.to_dict() if self.quality else None,
        }


class CalendarBuilder:
    """
    Builds and materialises the calendar dimension.

    Args:
        settings: Validated calendar settings
        connection: A configured connection wrapper, or a bare ibis backend
            (the upstream and destination share it)
    """

    def __init__(self, settings: CalendarSettings, connection: BaseConnection | ibis.BaseBackend):
        self.settings = settings
        if isinstance(connection, BaseConnection):
            self._wrapper: BaseConnection | None = connection
            self.backend = connection.connection
        else:
            self._wrapper = None
            self.backend = connection

    def build(self, loaded_at: datetime | None = None) -> CalendarBuild:
        """
        Read the watermark and generate the rows, without writing anything.

        Raises:
            UpstreamUnavailableError: If the watermark cannot be read
            SpineTruncatedError: If the spine falls short of the watermark
                and ``on_truncation`` is ``error``
        """
        settings = self.settings
        watermark = max_observed_date(self.backend, settings.upstream)
        truncated = is_truncated(settings.start_date, settings.row_count, watermark)
        if truncated:
            self._handle_truncation(watermark)

        rows = generate_calendar(
            settings.start_date,
            settings.row_count,
            watermark,
            loaded_at=loaded_at,
            extended=settings.extended_attributes,
        )
        return CalendarBuild(
            rows=rows,
            start_date=settings.start_date,
            row_count=settings.row_count,
            watermark=watermark,
            truncated=truncated,
        )

    def run(self, dry_run: bool = False, loaded_at: datetime | None = None) -> RunResult:
        """
        Build the calendar and fully replace the destination table.

        Args:
            dry_run: Generate and report, but do not write or check
            loaded_at: Override the load timestamp (default: now, UTC)

        Raises:
            UpstreamUnavailableError: Upstream missing; nothing is written
            SpineTruncatedError: Truncation under ``on_truncation: error``
            ReadOnlyConnectionError: Destination connection is read-only
            MaterializationError: Staging write or swap failed
            QualityError: An error-severity check failed after the write
        """
        started = time.time()
        destination = self.settings.destination
        if not dry_run and self._wrapper is not None:
            self._wrapper.assert_writable(f"materialization of '{destination.qualified_name}'")

        logger.info(
            f"Building '{destination.qualified_name}' from {self.settings.start_date.isoformat()} "
            f"(row_count={self.settings.row_count}, upstream={self.settings.upstream.qualified_name})"
        )
        build = self.build(loaded_at=loaded_at)

        if dry_run:
            logger.info(f"Dry run: {len(build.rows)} rows generated, nothing written")
            return self._result(build, len(build.rows), materialized=False, started=started)

        materializer = get_materializer(self.settings.materialized)
        written = materializer.materialise(
            calendar_table(build.rows, extended=self.settings.extended_attributes),
            destination.table,
            destination.schema,
            self.backend,
            database=destination.database,
        )
        logger.info(
            f"Replaced '{destination.qualified_name}' with {written} rows "
            f"({_format_range(build.first_date, build.last_date)})"
        )

        quality = None
        if self.settings.quality_checks:
            quality = self.check(expected_rows=len(build.rows))
            if quality.has_failures:
                raise QualityError(
                    f"Quality checks failed for '{destination.qualified_name}': "
                    + "; ".join(quality.failure_messages),
                    details=quality.to_dict(),
                )

        return self._result(build, written, materialized=True, started=started, quality=quality)

    def check(self, expected_rows: int | None = None) -> QualityCheckSummary:
        """Run the calendar's quality checks against the destination table."""
        destination = self.settings.destination
        checks = [
            NotNullCheck(column="date_key"),
            UniqueCheck(column="date_key"),
            ContiguousDatesCheck(column="date_key"),
        ]
        if expected_rows is not None:
            checks.append(RowCountCheck(expected=expected_rows))
        runner = QualityCheckRunner(self.backend)
        return runner.run_checks(destination.table, checks, schema=destination.schema, database=destination.database)

    def _handle_truncation(self, watermark: date) -> None:
        settings = self.settings
        last_date = settings.start_date + timedelta(days=settings.row_count - 1)
        if settings.on_truncation == "error":
            raise SpineTruncatedError(last_date, watermark)
        if settings.on_truncation == "warn":
            logger.warning(
                f"Calendar truncated: row_count={settings.row_count} ends at {last_date.isoformat()} "
                f"but upstream data reaches {watermark.isoformat()} "
                f"({(watermark - last_date).days} day(s) missing)"
            )
        else:
            logger.debug(f"Calendar truncated at {last_date.isoformat()} (on_truncation=ignore)")

    def _result(
        self,
        build: CalendarBuild,
        row_count: int,
        materialized: bool,
        started: float,
        quality: QualityCheckSummary | None = None,
    ) -> RunResult:
        return RunResult(
            table=self.settings.destination.qualified_name,
            row_count=row_count,
            watermark=build.watermark,
            first_date=build.first_date,
            last_date=build.last_date,
            truncated=build.truncated,
            materialized=materialized,
            duration_seconds=time.time() - started,
            quality=quality,
        )


def _format_range(first: date | None, last: date | None) -> str:
    if first is None or last is None:
        return "empty"
    return f"{first.isoformat()} to {last.isoformat()}"
