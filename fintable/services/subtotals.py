from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from ..models.config_models import RollupConfig
from ..models.summary_record import RecordKind, SummaryRecord
from .cumulative import apply_snapshot, snapshot_period

"""Subtotal Calculator.

Runs only with more than one category level. One subtotal per level-1
label, except boundary labels (opening / closing balances):

- the cross-cutting label rolls up every non-boundary leaf
- any other label rolls up the leaves sharing that level-1 label

Opening balance leaves get their Cumul replaced by a single-period snapshot
(correct_boundary_cumul).

Subtotals are appended; placement happens in assemble.sort_records.
"""

__all__ = [
    "rollup_records",
    "mark_boundary_leaves",
    "compute_subtotals",
    "correct_boundary_cumul",
]

logger = logging.getLogger(__name__)


def rollup_records(
    target: SummaryRecord,
    sources: Iterable[SummaryRecord],
    periods: Sequence[Any],
    measures: Sequence[str],
    *,
    include_cumul: bool = True,
) -> SummaryRecord:
    """Sum every value (and cumulative) column of ``sources`` into ``target``."""
    sources = list(sources)
    for period in periods:
        for measure in measures:
            target.set_value(period, measure, sum(r.value(period, measure) for r in sources))
    if include_cumul:
        for measure in measures:
            target.cumul[measure] = sum(r.cumulative(measure) for r in sources)
    return target


def mark_boundary_leaves(leaves: Iterable[SummaryRecord], rollup: RollupConfig) -> None:
    for record in leaves:
        record.boundary = record.label(1) in rollup.boundary_labels


def compute_subtotals(
    leaves: Sequence[SummaryRecord],
    top_level_order: Sequence[str],
    periods: Sequence[Any],
    measures: Sequence[str],
    *,
    levels: int,
    rollup: RollupConfig,
) -> list[SummaryRecord]:
    if levels <= 1:
        return []
    subtotals: list[SummaryRecord] = []
    for label in top_level_order:
        if label in rollup.boundary_labels:
            continue
        if label == rollup.cross_cutting_label:
            selected = [r for r in leaves if r.leaf and r.label(1) not in rollup.boundary_labels]
        else:
            selected = [r for r in leaves if r.leaf and r.label(1) == label]
        subtotal = SummaryRecord(category=label, labels=(label,) * levels, kind=RecordKind.SUBTOTAL)
        rollup_records(subtotal, selected, periods, measures, include_cumul=rollup.include_cumul)
        subtotals.append(subtotal)
    logger.debug(f"computed {len(subtotals)} subtotals")
    return subtotals


def correct_boundary_cumul(
    leaves: Iterable[SummaryRecord],
    periods: Sequence[Any],
    measures: Sequence[str],
    rollup: RollupConfig,
) -> None:
    """Opening balance rows are point-in-time: their Cumul is one period's value.

    Only leaves under ``rollup.opening_labels`` are corrected; closing balances
    keep the summed Cumul.
    """
    if not rollup.include_cumul or not periods:
        return
    period = snapshot_period(periods, rollup.boundary_snapshot)
    for record in leaves:
        if record.leaf and record.label(1) in rollup.opening_labels:
            apply_snapshot(record, period, measures)
