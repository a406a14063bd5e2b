from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from ..models.config_models import SnapshotPeriod
from ..models.summary_record import SummaryRecord

"""Cumulative Calculator.

``Cumul || m`` of a flow row is the sum of m over every period. Balance rows
(boundary leaves, the grand total) instead take a snapshot of one period:
the first for opening balances, the last for the grand total.
"""

__all__ = [
    "compute_cumulative",
    "snapshot_period",
    "apply_snapshot",
]


def compute_cumulative(
    records: Iterable[SummaryRecord], periods: Sequence[Any], measures: Sequence[str]
) -> None:
    """Set each record's cumulative columns in place. Requires the full period set."""
    for record in records:
        for measure in measures:
            record.cumul[measure] = sum(record.value(period, measure) for period in periods)


def snapshot_period(periods: Sequence[Any], which: SnapshotPeriod) -> Any:
    if not periods:
        raise ValueError("snapshot requires at least one period")
    return periods[0] if which is SnapshotPeriod.FIRST else periods[-1]


def apply_snapshot(record: SummaryRecord, period: Any, measures: Sequence[str]) -> None:
    """Overwrite cumulative columns with the values of a single period."""
    for measure in measures:
        record.cumul[measure] = record.value(period, measure)
