#!/usr/bin/env python3
"""
Seed a local DuckDB warehouse with a small cleaned-quotes table.

Stands in for the Silver model the calendar reads its watermark from.
"""

from datetime import date, timedelta
from pathlib import Path

import ibis
import pandas as pd


def seed(db_path: Path, days: int = 120) -> None:
    con = ibis.duckdb.connect(str(db_path))
    con.create_database("silver", force=True)

    start = date(2025, 1, 2)
    quotes = pd.DataFrame(
        [
            {"symbol": symbol, "quote_date": start + timedelta(days=i), "close": 100.0 + i * step}
            for symbol, step in (("AAPL", 0.4), ("MSFT", 0.7))
            for i in range(days)
            if (start + timedelta(days=i)).weekday() < 5
        ]
    )
    con.create_table("stg_historical_quotes_cleaned", obj=quotes, database="silver", overwrite=True)
    print(f"Seeded {len(quotes)} quotes into {db_path} (last quote {quotes.quote_date.max()})")


if __name__ == "__main__":
    project_dir = Path(__file__).parent
    path = project_dir / "data" / "dev" / "stocks.duckdb"
    path.parent.mkdir(parents=True, exist_ok=True)
    seed(path)
