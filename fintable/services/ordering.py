from __future__ import annotations

from collections.abc import Sequence
from functools import cmp_to_key

from ..models.pivot_result import AMBIGUOUS_ORDER, PivotWarning
from ..models.summary_record import SummaryRecord

"""Ordering Resolver.

Two signals:
1. explicit ``order`` on leaf records: a weak sort, records without an order
   compare equal to everything (comparator returns 0), ties keep insertion
   order (list.sort is stable)
2. per-level category order: first-seen labels among the order-sorted leaves
"""

__all__ = [
    "compare_order",
    "sort_by_order",
    "category_orders",
    "order_positions",
    "order_index",
    "order_warnings",
]


def compare_order(a: SummaryRecord, b: SummaryRecord) -> int:
    if a.order is not None and b.order is not None:
        return (a.order > b.order) - (a.order < b.order)
    return 0


def sort_by_order(records: Sequence[SummaryRecord]) -> list[SummaryRecord]:
    return sorted(records, key=cmp_to_key(compare_order))


def category_orders(records: Sequence[SummaryRecord], levels: int) -> dict[int, list[str]]:
    """Level (1-based) -> distinct labels in first-seen order."""
    orders: dict[int, list[str]] = {}
    for level in range(1, levels + 1):
        seen: dict[str, None] = {}
        for record in records:
            label = record.label(level)
            if label is not None:
                seen.setdefault(label, None)
        orders[level] = list(seen)
    return orders


def order_positions(order: Sequence[str]) -> dict[str, int]:
    return {label: i for i, label in enumerate(order)}


def order_index(positions: dict[str, int], label: str | None) -> int:
    """Position of a label in a canonical order; unknown labels sort last."""
    if label is None or label not in positions:
        return len(positions)
    return positions[label]


def order_warnings(records: Sequence[SummaryRecord]) -> list[PivotWarning]:
    ordered = sum(1 for r in records if r.order is not None)
    if 0 < ordered < len(records):
        return [PivotWarning(
            warning_type=AMBIGUOUS_ORDER,
            detail=(
                f"{len(records) - ordered} of {len(records)} records carry no order; "
                "they compare equal to every other record"
            ),
        )]
    return []
