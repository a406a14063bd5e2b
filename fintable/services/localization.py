from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

import pandas as pd

"""Default display-name and period helpers.

Callers may inject their own ``localize`` / ``parse_period`` through
PivotOptions; these are the defaults used when they don't.
"""

__all__ = [
    "localize",
    "to_timestamp",
    "parse_period",
    "format_period",
]


def localize(value: Any, language: str) -> str:
    """Resolve a possibly language-tagged value to display text.

    ``{"en": "Revenue", "fr": "Recettes"}`` -> text for ``language``, else the
    first available translation, else "". Scalars are returned as ``str``.
    """
    if value is None:
        return ""
    if isinstance(value, Mapping):
        text = value.get(language)
        if text is not None:
            return str(text)
        for text in value.values():
            return "" if text is None else str(text)
        return ""
    return str(value)


def to_timestamp(value: Any, *, numeric: bool = False) -> pd.Timestamp | None:
    """Coerce a cell to a Timestamp, or None when it is not date-like.

    Numbers are only treated as epoch milliseconds when ``numeric`` is set.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, pd.Timestamp):
        return None if pd.isna(value) else value
    if isinstance(value, (datetime, date)):
        return pd.Timestamp(value)
    if isinstance(value, (int, float)):
        if not numeric or value != value:  # NaN
            return None
        return pd.Timestamp(value, unit="ms")
    if isinstance(value, str):
        ts = pd.to_datetime(value.strip(), errors="coerce")
        return None if pd.isna(ts) else ts
    return None


def parse_period(value: Any) -> tuple[int, Any]:
    """Sortable key for a period cell.

    Numbers sort numerically, date-like values chronologically, anything else
    lexically; the leading rank keeps the three groups mutually comparable.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, float(value))
    ts = to_timestamp(value)
    if ts is not None:
        return (1, ts.value)
    return (2, str(value))


def format_period(value: Any, period_format: str | None = None) -> str:
    """Header text for a period column."""
    if period_format:
        ts = to_timestamp(value)
        if ts is not None:
            return ts.strftime(period_format)
    return str(value)
