"""
Typed view of the ``calendar`` configuration section.

Every recognised option is validated here so that a bad config fails before
any connection is opened.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from datespine.config.loader import Config
from datespine.exceptions import ConfigurationError
from datespine.utils.sql_escape import validate_identifier
from datespine.watermark import UpstreamDataset

DEFAULT_START_DATE = date(2025, 1, 1)
DEFAULT_ROW_COUNT = 3650

# ignore: silent truncation, warn: log and continue, error: fail the run
TRUNCATION_POLICIES = ("ignore", "warn", "error")

MATERIALIZATIONS = ("table",)


@dataclass(frozen=True)
class Destination:
    """Where the calendar table lands."""

    table: str = "dim_date"
    schema: str = "gold"
    database: str | None = None

    @property
    def qualified_name(self) -> str:
        return ".".join(p for p in (self.database, self.schema, self.table) if p)


@dataclass(frozen=True)
class CalendarSettings:
    """Validated calendar generator settings."""

    start_date: date = DEFAULT_START_DATE
    row_count: int = DEFAULT_ROW_COUNT
    upstream: UpstreamDataset = field(
        default_factory=lambda: UpstreamDataset(table="stg_historical_quotes_cleaned", schema="silver")
    )
    destination: Destination = field(default_factory=Destination)
    connection: str | None = None
    on_truncation: str = "warn"
    extended_attributes: bool = False
    quality_checks: bool = True
    materialized: str = "table"

    @classmethod
    def from_config(cls, config: Config | dict[str, Any]) -> "CalendarSettings":
        """
        Build settings from a loaded Config (or a raw dict).

        Reads the ``calendar`` section; missing keys take the defaults above.

        Raises:
            ConfigurationError: If any option is malformed
        """
        data = config.data if isinstance(config, Config) else config
        section = data.get("calendar") or {}
        if not isinstance(section, dict):
            raise ConfigurationError("Configuration 'calendar' must be a dictionary")

        upstream_cfg = _section(section, "upstream")
        destination_cfg = _section(section, "destination")

        upstream = UpstreamDataset(
            table=_identifier(upstream_cfg.get("table", "stg_historical_quotes_cleaned"), "calendar.upstream.table"),
            column=_identifier(upstream_cfg.get("column", "quote_date"), "calendar.upstream.column"),
            schema=_optional_identifier(upstream_cfg.get("schema", "silver"), "calendar.upstream.schema"),
            database=_optional_identifier(upstream_cfg.get("database"), "calendar.upstream.database"),
        )
        destination = Destination(
            table=_identifier(destination_cfg.get("table", "dim_date"), "calendar.destination.table"),
            schema=_identifier(destination_cfg.get("schema", "gold"), "calendar.destination.schema"),
            database=_optional_identifier(destination_cfg.get("database"), "calendar.destination.database"),
        )

        on_truncation = str(section.get("on_truncation", "warn")).lower()
        if on_truncation not in TRUNCATION_POLICIES:
            raise ConfigurationError(
                f"Invalid calendar.on_truncation '{on_truncation}'. "
                f"Must be one of: {', '.join(TRUNCATION_POLICIES)}"
            )

        materialized = str(section.get("materialized", "table")).lower()
        if materialized not in MATERIALIZATIONS:
            raise ConfigurationError(
                f"Invalid calendar.materialized '{materialized}'. "
                f"The calendar is always fully replaced; supported: {', '.join(MATERIALIZATIONS)}"
            )

        return cls(
            start_date=_parse_date(section.get("start_date", DEFAULT_START_DATE)),
            row_count=_parse_row_count(section.get("row_count", DEFAULT_ROW_COUNT)),
            upstream=upstream,
            destination=destination,
            connection=section.get("connection"),
            on_truncation=on_truncation,
            extended_attributes=_parse_bool(section.get("extended_attributes", False), "extended_attributes"),
            quality_checks=_parse_bool(section.get("quality_checks", True), "quality_checks"),
            materialized=materialized,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_date": self.start_date.isoformat(),
            "row_count": self.row_count,
            "connection": self.connection,
            "on_truncation": self.on_truncation,
            "extended_attributes": self.extended_attributes,
            "quality_checks": self.quality_checks,
            "materialized": self.materialized,
            "upstream": self.upstream.qualified_name,
            "upstream_column": self.upstream.column,
            "destination": self.destination.qualified_name,
        }


def _section(section: dict[str, Any], key: str) -> dict[str, Any]:
    value = section.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"Configuration 'calendar.{key}' must be a dictionary, got {type(value).__name__}")
    return value


def _parse_date(value: Any) -> date:
    # YAML turns unquoted 2025-01-01 into a date already
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
    raise ConfigurationError(f"Invalid calendar.start_date '{value}': expected an ISO date (YYYY-MM-DD)")


def _parse_row_count(value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid calendar.row_count '{value}': expected a positive integer")
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if not isinstance(value, int) or value <= 0:
        raise ConfigurationError(f"Invalid calendar.row_count '{value}': expected a positive integer")
    return value


def _parse_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false", "yes", "no", "1", "0"):
        return value.strip().lower() in ("true", "yes", "1")
    raise ConfigurationError(f"Invalid calendar.{key} '{value}': expected true or false")


def _identifier(value: Any, key: str) -> str:
    if not isinstance(value, str) or not validate_identifier(value):
        raise ConfigurationError(
            f"Invalid {key} '{value}': use letters, digits and underscores, not starting with a digit"
        )
    return value


def _optional_identifier(value: Any, key: str) -> str | None:
    if value is None or value == "":
        return None
    return _identifier(value, key)
