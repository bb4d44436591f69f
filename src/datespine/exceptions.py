"""
Datespine exception hierarchy.

All domain-specific exceptions inherit from DatespineError, so the CLI and
orchestrator wrappers can catch any failed run with a single base class while
still allowing fine-grained handling when needed.

Hierarchy::

    DatespineError
    ├── ConfigurationError          - config loading, parsing, validation
    │   └── SpineTruncatedError     - row budget ends before the watermark
    ├── ConnectionError_            - connection init and lookup
    │   └── ConnectionNotFoundError - named connection not configured
    ├── UpstreamUnavailableError    - watermark source missing or unreadable
    ├── MaterializationError        - staging write or table swap failed
    └── QualityError                - post-write quality checks failed
"""

from __future__ import annotations

from datetime import date


class DatespineError(Exception):
    """Base exception for all datespine errors."""

    def __init__(self, message: str, *, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


# --- Configuration -----------------------------------------------------------


class ConfigurationError(DatespineError):
    """Raised when configuration loading, parsing, or validation fails."""


class SpineTruncatedError(ConfigurationError):
    """Raised when ``row_count`` cannot reach the upstream watermark.

    Only raised with ``on_truncation: error``; the other policies keep the
    truncated spine.
    """

    def __init__(self, last_date: date, watermark: date) -> None:
        missing = (watermark - last_date).days
        super().__init__(
            f"Date spine ends at {last_date.isoformat()} but upstream data reaches "
            f"{watermark.isoformat()} ({missing} day(s) missing). Increase calendar.row_count.",
            details={"last_date": last_date.isoformat(), "watermark": watermark.isoformat(), "missing_days": missing},
        )
        self.last_date = last_date
        self.watermark = watermark
        self.missing_days = missing


# --- Connections -------------------------------------------------------------


class ConnectionError_(DatespineError):
    """Raised when a warehouse connection cannot be established.

    Named with trailing underscore to avoid shadowing the builtin
    ``ConnectionError``; the public alias ``DatespineConnectionError``
    is preferred for external use.
    """


# Public alias so callers don't need the underscore
DatespineConnectionError = ConnectionError_


class ConnectionNotFoundError(ConnectionError_):
    """Raised when a named connection is not configured."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Connection not found: {name}", details={"connection": name})
        self.connection_name = name


# --- Upstream ----------------------------------------------------------------


class UpstreamUnavailableError(DatespineError):
    """Raised when the watermark dataset does not exist or cannot be read."""

    def __init__(self, dataset: str, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(f"Upstream dataset '{dataset}' unavailable: {message}", details={"dataset": dataset})
        self.dataset = dataset
        if cause is not None:
            self.__cause__ = cause


# --- Materialization ---------------------------------------------------------


class MaterializationError(DatespineError):
    """Raised when the staging write or the swap into the target fails."""


# --- Quality -----------------------------------------------------------------


class QualityError(DatespineError):
    """Raised when data quality checks fail with error severity."""
