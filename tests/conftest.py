"""
Shared fixtures for datespine tests.
"""

import logging
from datetime import date, timedelta

import ibis
import pytest

UPSTREAM_TABLE = "stg_historical_quotes_cleaned"


def seed_quotes(con, dates, schema="silver", table=UPSTREAM_TABLE):
    """Create the upstream quotes table holding one AAPL quote per given date."""
    con.raw_sql(f"CREATE SCHEMA IF NOT EXISTS {schema}")
    con.raw_sql(
        f"CREATE OR REPLACE TABLE {schema}.{table} (symbol VARCHAR, quote_date DATE, close_price DOUBLE)"
    )
    if dates:
        values = ", ".join(f"('AAPL', DATE '{d.isoformat()}', 100.0)" for d in dates)
        con.raw_sql(f"INSERT INTO {schema}.{table} VALUES {values}")


def weekdays(start, end):
    """Trading days (Mon-Fri) between start and end inclusive."""
    days = []
    day = start
    while day <= end:
        if day.weekday() < 5:
            days.append(day)
        day += timedelta(days=1)
    return days


@pytest.fixture
def con():
    """In-memory DuckDB backend."""
    backend = ibis.duckdb.connect()
    yield backend
    backend.disconnect()


@pytest.fixture
def quotes(con):
    """Upstream quotes for the first two trading weeks of 2025 (watermark 2025-01-10)."""
    seed_quotes(con, weekdays(date(2025, 1, 2), date(2025, 1, 10)))
    return con


@pytest.fixture(autouse=True)
def reset_datespine_logger():
    """Undo handlers and levels installed by setup_logging between tests."""
    yield
    logger = logging.getLogger("datespine")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
