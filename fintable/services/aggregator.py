from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from ..models.layout import GAP_LABEL, ColumnLayout
from ..models.pivot_result import MISSING_VALUE, PivotWarning
from ..models.summary_record import SummaryRecord
from .category_keys import build_category_key, period_key
from .options import PivotOptions

"""Record Aggregator.

Single pass over the rows: rows sharing a CategoryKey fold into one leaf
SummaryRecord keyed by (period, measure). Repeated (category, period) pairs
overwrite (last write wins); nothing is summed at this stage.

Missing measure cells are a silent default: they count as 0 and a
MISSING_VALUE warning is recorded. After the pass every leaf is zero-filled
for periods it never saw, so every (period, measure) cell exists.
"""

__all__ = [
    "AggregationResult",
    "to_number",
    "aggregate_rows",
]

logger = logging.getLogger(__name__)


@dataclass
class AggregationResult:
    leaves: list[SummaryRecord]  # insertion (first-seen) order
    periods: list[Any]  # sorted ascending
    warnings: list[PivotWarning] = field(default_factory=list)


def to_number(value: Any) -> float | None:
    """Numeric value of a cell, or None when empty / not a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return number


def aggregate_rows(
    rows: Sequence[Sequence[Any]], layout: ColumnLayout, options: PivotOptions
) -> AggregationResult:
    records: dict[str, SummaryRecord] = {}
    seen_periods: dict[Any, None] = {}  # ordered set
    warnings: list[PivotWarning] = []
    measures = layout.measures
    measure_start = layout.measure_start

    for row in rows:
        period = period_key(row[0], options.language, options.localize)
        seen_periods.setdefault(period, None)
        key = build_category_key(
            row,
            layout,
            language=options.language,
            localize_fn=options.localize,
            separator=options.separator,
        )
        record = records.get(key.key)
        if record is None:
            record = SummaryRecord(category=key.key, labels=key.labels)
            records[key.key] = record

        if layout.has_order:
            order = to_number(row[1])
            if order is not None:
                record.order = order

        values: list[float] = []
        for offset, measure in enumerate(measures):
            value = to_number(row[measure_start + offset])
            if value is None:
                warnings.append(PivotWarning(
                    warning_type=MISSING_VALUE,
                    detail=f"measure '{measure}' empty or not numeric; counted as 0",
                    category=key.key,
                    period=period,
                ))
                value = 0.0
            record.set_value(period, measure, value)
            values.append(value)
        if layout.has_gap:
            record.set_value(period, GAP_LABEL, values[1] - values[0])

    periods = sorted(seen_periods, key=options.parse_period)
    output_measures = layout.output_measures
    for record in records.values():
        for period in periods:
            missing = [m for m in output_measures if (period, m) not in record.values]
            if not missing:
                continue
            # 行自体が存在しない期間: 0 埋め
            for measure in missing:
                record.set_value(period, measure, 0.0)
            warnings.append(PivotWarning(
                warning_type=MISSING_VALUE,
                detail=f"no row for period; {len(missing)} column(s) filled with 0",
                category=record.category,
                period=period,
            ))

    logger.debug(f"aggregated {len(rows)} rows into {len(records)} leaves over {len(periods)} periods")
    return AggregationResult(leaves=list(records.values()), periods=periods, warnings=warnings)
