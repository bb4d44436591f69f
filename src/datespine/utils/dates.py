"""
Date coercion for values coming back from ibis backends.
"""

from datetime import date, datetime
from typing import Any

import pandas as pd


def coerce_date(value: Any) -> date | None:
    """
    Normalise a scalar date/timestamp result to ``datetime.date``.

    Backends return dates as ``date``, ``datetime``, ``pd.Timestamp``,
    ``numpy.datetime64`` or ISO strings; NULL comes back as None or NaT.
    """
    if value is None or pd.isna(value):
        return None
    # datetime (and pd.Timestamp) subclass date, so check them first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value[:10])
    return pd.Timestamp(value).date()
