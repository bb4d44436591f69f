#!/usr/bin/env python3
"""
Build the stocks calendar dimension using the programmatic API.

Run seed_quotes.py first to create the upstream table.
"""

from pathlib import Path

from datespine import run


if __name__ == "__main__":
    project_dir = Path(__file__).parent
    result = run(project_dir=project_dir, env="dev")
    print(f"{result.table}: {result.row_count} rows, {result.first_date} to {result.last_date}")
