from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from ..models.config_models import SlotBindings
from ..models.layout import ColumnLayout
from ..models.pivot_result import PivotResult, PivotWarning
from .aggregator import aggregate_rows
from .assemble import build_schema, sort_records
from .cumulative import compute_cumulative
from .errors import EmptyInputError, LayoutError
from .grand_total import compute_grand_total
from .layout_resolver import resolve_layout, validate_row
from .options import PivotOptions
from .ordering import category_orders, order_warnings, sort_by_order
from .subtotals import compute_subtotals, correct_boundary_cumul, mark_boundary_leaves

"""Summary pipeline: rows + layout -> ordered records + column schema.

Stages run strictly in sequence, each over the output of the previous one:

    validate -> aggregate -> cumulative -> order -> subtotals
             -> boundary correction -> grand total -> sort & schema

The whole call is a pure function of (rows, layout, options). Re-running on
the same input gives the same records in the same order.
"""

__all__ = [
    "build_summary",
    "build_summary_from_slots",
]

logger = logging.getLogger(__name__)


def _materialize(rows: Iterable[Sequence[Any]]) -> list[Sequence[Any]]:
    rows = list(rows)
    if not rows:
        raise EmptyInputError("no data available")
    return rows


def build_summary(
    rows: Iterable[Sequence[Any]],
    layout: ColumnLayout,
    options: PivotOptions | None = None,
) -> PivotResult:
    """Summarize already-decoded rows laid out as ``layout`` describes.

    Raises:
        EmptyInputError: no rows at all
        LayoutError: any row does not match the layout (checked before any
            aggregation happens)
    """
    options = options or PivotOptions()
    rows = _materialize(rows)
    if layout.measure_count < 1:
        raise LayoutError("insufficient columns: layout has no measure")
    if layout.category_levels < 0:
        raise LayoutError("category_levels must be >= 0")
    for index, row in enumerate(rows):
        validate_row(row, layout, index)

    rollup = options.rollup
    levels = layout.category_levels
    measures = layout.output_measures

    aggregation = aggregate_rows(rows, layout, options)
    periods = aggregation.periods
    warnings: list[PivotWarning] = list(aggregation.warnings)

    if rollup.include_cumul:
        compute_cumulative(aggregation.leaves, periods, measures)

    leaves = sort_by_order(aggregation.leaves)
    warnings.extend(order_warnings(leaves))
    orders = category_orders(leaves, levels)
    mark_boundary_leaves(leaves, rollup)

    subtotals = compute_subtotals(
        leaves, orders.get(1, []), periods, measures, levels=levels, rollup=rollup
    )
    correct_boundary_cumul(leaves, periods, measures, rollup)
    grand_total = compute_grand_total(leaves, periods, measures, levels=levels, rollup=rollup)

    records = sort_records([*leaves, *subtotals, grand_total], orders, levels)
    schema = build_schema(
        periods,
        measures,
        separator=options.separator,
        period_format=options.period_format,
        include_cumul=rollup.include_cumul,
    )
    logger.debug(
        f"summary built: rows={len(rows)} leaves={len(leaves)} subtotals={len(subtotals)} "
        f"periods={len(periods)} columns={len(schema)} warnings={len(warnings)}"
    )
    return PivotResult(
        records=records,
        schema=schema,
        periods=periods,
        measures=measures,
        layout=layout,
        separator=options.separator,
        include_cumul=rollup.include_cumul,
        warnings=warnings,
    )


def build_summary_from_slots(
    rows: Iterable[Sequence[Any]],
    slots: SlotBindings,
    options: PivotOptions | None = None,
) -> PivotResult:
    """Resolve the layout from slot bindings (first row as sample), then summarize."""
    options = options or PivotOptions()
    rows = _materialize(rows)
    layout = resolve_layout(slots, rows[0], language=options.language, localize_fn=options.localize)
    return build_summary(rows, layout, options)
