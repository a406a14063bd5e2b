from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ..models.column_schema import ColumnSchema, ColumnSpec
from ..models.layout import CUMUL_LABEL, DEFAULT_SEPARATOR
from ..models.summary_record import SummaryRecord, column_id, cumul_column_id
from .localization import format_period
from .ordering import order_index, order_positions

"""Sort & Assemble.

Final record order:
1. grand total last, whatever its labels
2. level-1 label by canonical order (unknown labels last)
3. a subtotal directly after the leaves of its level-1 group
4. remaining levels by canonical order

Ties keep their incoming order (sorted() is stable), so the weak order sort
done earlier still shows through.
"""

__all__ = [
    "sort_records",
    "build_schema",
]


def sort_records(
    records: Sequence[SummaryRecord], orders: Mapping[int, Sequence[str]], levels: int
) -> list[SummaryRecord]:
    positions = {level: order_positions(orders.get(level, ())) for level in range(1, levels + 1)}

    def sort_key(record: SummaryRecord) -> tuple:
        if levels == 0:
            return (record.grandtotal,)
        first = order_index(positions[1], record.label(1))
        if record.subtotal:
            rest: tuple[int, ...] = ()
        else:
            rest = tuple(order_index(positions[l], record.label(l)) for l in range(2, levels + 1))
        return (record.grandtotal, first, record.subtotal, rest)

    return sorted(records, key=sort_key)


def build_schema(
    periods: Sequence[Any],
    measures: Sequence[str],
    *,
    separator: str = DEFAULT_SEPARATOR,
    period_format: str | None = None,
    include_cumul: bool = True,
) -> ColumnSchema:
    columns: list[ColumnSpec] = []
    for period in periods:
        label = format_period(period, period_format)
        for measure in measures:
            columns.append(ColumnSpec(
                column_id=column_id(period, measure, separator),
                period=period,
                period_label=label,
                measure=measure,
            ))
    if include_cumul:
        for measure in measures:
            columns.append(ColumnSpec(
                column_id=cumul_column_id(measure, separator),
                period=None,
                period_label=CUMUL_LABEL,
                measure=measure,
                cumulative=True,
            ))
    return ColumnSchema(columns=tuple(columns))
