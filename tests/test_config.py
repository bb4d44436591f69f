"""
Tests for configuration loading and calendar settings.
"""

from datetime import date

import pytest

from datespine.config import CalendarSettings, Config, load_config
from datespine.config.resolver import resolve_config
from datespine.config.settings import DEFAULT_ROW_COUNT, DEFAULT_START_DATE
from datespine.exceptions import ConfigurationError

BASE_CONFIG = """\
name: stocks
connections:
  warehouse:
    type: duckdb
    path: data/{env}/stocks.duckdb
calendar:
  start_date: 2025-01-01
  row_count: 3650
  destination:
    schema: gold
    table: dim_date
"""


class TestLoadConfig:
    """Tests for load_config."""

    def test_load_basic(self, tmp_path):
        (tmp_path / "config.yaml").write_text(BASE_CONFIG)
        config = load_config(tmp_path)
        assert config.env == "dev"
        assert config.project_dir == tmp_path
        assert config.get("name") == "stocks"
        assert config.connections["warehouse"]["path"] == "data/dev/stocks.duckdb"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Configuration file not found"):
            load_config(tmp_path)

    def test_env_overlay(self, tmp_path):
        (tmp_path / "config.yaml").write_text(BASE_CONFIG)
        (tmp_path / "config.prod.yaml").write_text("calendar:\n  on_truncation: error\n")
        config = load_config(tmp_path, env="prod")
        assert config.env == "prod"
        assert config.get("calendar.on_truncation") == "error"
        # Untouched keys survive the merge
        assert config.get("calendar.row_count") == 3650
        assert config.connections["warehouse"]["path"] == "data/prod/stocks.duckdb"

    def test_env_without_overlay_file(self, tmp_path):
        (tmp_path / "config.yaml").write_text(BASE_CONFIG)
        config = load_config(tmp_path, env="staging")
        assert config.env == "staging"

    def test_invalid_yaml(self, tmp_path):
        (tmp_path / "config.yaml").write_text("calendar:\n  row_count: [1, 2\n")
        with pytest.raises(ConfigurationError, match="Error parsing config.yaml"):
            load_config(tmp_path)

    def test_non_mapping(self, tmp_path):
        (tmp_path / "config.yaml").write_text("- just\n- a list\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(tmp_path)

    def test_section_must_be_mapping(self, tmp_path):
        (tmp_path / "config.yaml").write_text("calendar: 42\n")
        with pytest.raises(ConfigurationError, match="'calendar' must be a dictionary"):
            load_config(tmp_path)

    def test_empty_file(self, tmp_path):
        (tmp_path / "config.yaml").write_text("")
        config = load_config(tmp_path)
        assert config.connections == {}
        assert config.calendar == {}


class TestConfig:
    """Tests for Config access."""

    def test_dot_notation(self):
        config = Config({"calendar": {"upstream": {"table": "quotes"}}})
        assert config.get("calendar.upstream.table") == "quotes"
        assert config.get("calendar.upstream.column", "quote_date") == "quote_date"
        assert config.get("missing.key") is None

    def test_getitem(self):
        config = Config({"calendar": {"row_count": 10}, "name": "stocks"})
        assert config["name"] == "stocks"
        assert isinstance(config["calendar"], Config)
        assert config["calendar.row_count"] == 10
        with pytest.raises(KeyError):
            config["nope"]

    def test_contains_and_iter(self):
        config = Config({"calendar": {"row_count": 10}})
        assert "calendar.row_count" in config
        assert "calendar.start_date" not in config
        assert list(config) == ["calendar"]


class TestResolver:
    """Tests for placeholder substitution."""

    def test_env_var(self, monkeypatch):
        monkeypatch.setenv("DATESPINE_TEST_USER", "loader")
        resolved = resolve_config({"user": "${DATESPINE_TEST_USER}", "nested": ["${DATESPINE_TEST_USER}"]})
        assert resolved == {"user": "loader", "nested": ["loader"]}

    def test_unset_var_left_alone(self, monkeypatch):
        monkeypatch.delenv("DATESPINE_TEST_UNSET", raising=False)
        assert resolve_config({"p": "${DATESPINE_TEST_UNSET}"}) == {"p": "${DATESPINE_TEST_UNSET}"}

    def test_fallback(self, monkeypatch):
        monkeypatch.delenv("DATESPINE_TEST_UNSET", raising=False)
        monkeypatch.setenv("DATESPINE_TEST_EMPTY", "")
        resolved = resolve_config({"a": "${DATESPINE_TEST_UNSET:-COMPUTE_WH}", "b": "${DATESPINE_TEST_EMPTY:-x}"})
        assert resolved == {"a": "COMPUTE_WH", "b": "x"}

    def test_set_var_beats_fallback(self, monkeypatch):
        monkeypatch.setenv("DATESPINE_TEST_USER", "loader")
        assert resolve_config({"u": "${DATESPINE_TEST_USER:-nobody}"}) == {"u": "loader"}

    def test_env_placeholder(self):
        assert resolve_config({"path": "data/{env}/x.duckdb", "n": 3}, env="prod") == {
            "path": "data/prod/x.duckdb",
            "n": 3,
        }


class TestCalendarSettings:
    """Tests for CalendarSettings.from_config."""

    def test_defaults(self):
        settings = CalendarSettings.from_config({})
        assert settings.start_date == DEFAULT_START_DATE == date(2025, 1, 1)
        assert settings.row_count == DEFAULT_ROW_COUNT == 3650
        assert settings.upstream.qualified_name == "silver.stg_historical_quotes_cleaned"
        assert settings.upstream.column == "quote_date"
        assert settings.destination.qualified_name == "gold.dim_date"
        assert settings.on_truncation == "warn"
        assert settings.materialized == "table"
        assert settings.quality_checks is True
        assert settings.extended_attributes is False

    def test_from_loaded_config(self, tmp_path):
        (tmp_path / "config.yaml").write_text(BASE_CONFIG)
        settings = CalendarSettings.from_config(load_config(tmp_path))
        assert settings.start_date == date(2025, 1, 1)
        assert settings.row_count == 3650

    def test_full_section(self):
        settings = CalendarSettings.from_config(
            {
                "calendar": {
                    "start_date": "2020-06-01",
                    "row_count": "500",
                    "connection": "warehouse",
                    "on_truncation": "ERROR",
                    "extended_attributes": "yes",
                    "quality_checks": False,
                    "upstream": {"database": "STOCKS", "schema": "SILVER", "table": "QUOTES", "column": "QUOTE_DATE"},
                    "destination": {"database": "STOCKS", "schema": "GOLD", "table": "DIM_DATE"},
                }
            }
        )
        assert settings.start_date == date(2020, 6, 1)
        assert settings.row_count == 500
        assert settings.connection == "warehouse"
        assert settings.on_truncation == "error"
        assert settings.extended_attributes is True
        assert settings.quality_checks is False
        assert settings.upstream.qualified_name == "STOCKS.SILVER.QUOTES"
        assert settings.destination.qualified_name == "STOCKS.GOLD.DIM_DATE"

    @pytest.mark.parametrize("row_count", [0, -1, "ten", 2.5, True])
    def test_invalid_row_count(self, row_count):
        with pytest.raises(ConfigurationError, match="calendar.row_count"):
            CalendarSettings.from_config({"calendar": {"row_count": row_count}})

    def test_invalid_start_date(self):
        with pytest.raises(ConfigurationError, match="calendar.start_date"):
            CalendarSettings.from_config({"calendar": {"start_date": "01/01/2025"}})

    def test_invalid_truncation_policy(self):
        with pytest.raises(ConfigurationError, match="on_truncation"):
            CalendarSettings.from_config({"calendar": {"on_truncation": "truncate"}})

    def test_only_table_materialization(self):
        with pytest.raises(ConfigurationError, match="materialized"):
            CalendarSettings.from_config({"calendar": {"materialized": "incremental"}})

    def test_invalid_identifier(self):
        with pytest.raises(ConfigurationError, match="calendar.destination.table"):
            CalendarSettings.from_config({"calendar": {"destination": {"table": "dim-date; drop"}}})

    def test_invalid_bool(self):
        with pytest.raises(ConfigurationError, match="quality_checks"):
            CalendarSettings.from_config({"calendar": {"quality_checks": "sometimes"}})

    def test_subsection_must_be_mapping(self):
        with pytest.raises(ConfigurationError, match="calendar.upstream"):
            CalendarSettings.from_config({"calendar": {"upstream": "silver.quotes"}})

    def test_to_dict(self):
        d = CalendarSettings.from_config({}).to_dict()
        assert d["start_date"] == "2025-01-01"
        assert d["destination"] == "gold.dim_date"
