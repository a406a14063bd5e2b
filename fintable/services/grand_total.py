from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from ..models.config_models import RollupConfig, SnapshotPeriod
from ..models.summary_record import RecordKind, SummaryRecord
from .cumulative import apply_snapshot, snapshot_period
from .subtotals import rollup_records

"""Grand Total Calculator: one record summing every leaf (never subtotals)."""

__all__ = [
    "GRAND_TOTAL_ORDER",
    "compute_grand_total",
]

GRAND_TOTAL_ORDER = math.inf  # larger than any real order


def compute_grand_total(
    leaves: Sequence[SummaryRecord],
    periods: Sequence[Any],
    measures: Sequence[str],
    *,
    levels: int,
    rollup: RollupConfig,
) -> SummaryRecord:
    label = rollup.grand_total_label
    record = SummaryRecord(
        category=label,
        labels=(label,) * levels,
        kind=RecordKind.GRAND_TOTAL,
        order=GRAND_TOTAL_ORDER,
    )
    rollup_records(
        record,
        (r for r in leaves if r.leaf),
        periods,
        measures,
        include_cumul=rollup.include_cumul,
    )
    if rollup.include_cumul and periods:
        apply_snapshot(record, snapshot_period(periods, SnapshotPeriod.LAST), measures)
    return record
