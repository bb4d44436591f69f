"""
datespine - Gold-layer calendar dimension bounded by upstream data.

Generates one row per day from a fixed start date up to the latest quote date
seen upstream, and fully replaces the ``dim_date`` table on every run.
"""

__version__ = "0.1.0"

from datespine.calendar import CalendarDay, generate_calendar
from datespine.config import CalendarSettings, Config, load_config
from datespine.core import CalendarBuild, CalendarBuilder, RunResult, preview, run
from datespine.exceptions import (
    ConfigurationError,
    ConnectionNotFoundError,
    DatespineConnectionError,
    DatespineError,
    MaterializationError,
    QualityError,
    SpineTruncatedError,
    UpstreamUnavailableError,
)
from datespine.utils.logging import get_logger, setup_logging, setup_logging_from_config
from datespine.watermark import UpstreamDataset, max_observed_date

__all__ = [
    # Generation
    "CalendarDay",
    "generate_calendar",
    "UpstreamDataset",
    "max_observed_date",
    # Execution
    "CalendarBuild",
    "CalendarBuilder",
    "RunResult",
    "run",
    "preview",
    # Config
    "CalendarSettings",
    "Config",
    "load_config",
    # Logging
    "get_logger",
    "setup_logging",
    "setup_logging_from_config",
    # Exceptions
    "DatespineError",
    "ConfigurationError",
    "SpineTruncatedError",
    "DatespineConnectionError",
    "ConnectionNotFoundError",
    "UpstreamUnavailableError",
    "MaterializationError",
    "QualityError",
]
