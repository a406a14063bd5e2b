from __future__ import annotations

from fintable.models.pivot_result import AMBIGUOUS_ORDER
from fintable.models.summary_record import SummaryRecord
from fintable.services.ordering import (
    category_orders,
    compare_order,
    order_index,
    order_positions,
    order_warnings,
    sort_by_order,
)


def _rec(labels: tuple[str, ...], order: float | None = None) -> SummaryRecord:
    return SummaryRecord(category=" || ".join(labels), labels=labels, order=order)


def test_compare_order_requires_both_orders():
    assert compare_order(_rec(("A",), 1), _rec(("B",), 2)) == -1
    assert compare_order(_rec(("A",), 2), _rec(("B",), 1)) == 1
    assert compare_order(_rec(("A",), 2), _rec(("B",), None)) == 0


def test_sort_by_order_ascending():
    records = [_rec(("C",), 3), _rec(("A",), 1), _rec(("B",), 2)]
    assert [r.category for r in sort_by_order(records)] == ["A", "B", "C"]


def test_order_zero_is_a_real_order():
    records = [_rec(("B",), 1), _rec(("A",), 0)]
    assert [r.category for r in sort_by_order(records)] == ["A", "B"]


def test_records_without_order_keep_insertion_order():
    records = [_rec(("C",)), _rec(("A",)), _rec(("B",))]
    assert [r.category for r in sort_by_order(records)] == ["C", "A", "B"]


def test_category_orders_first_seen_per_level():
    records = [
        _rec(("Revenue", "Sales")),
        _rec(("Costs", "Rent")),
        _rec(("Revenue", "Services")),
        _rec(("Costs", "Sales")),
    ]
    orders = category_orders(records, 2)
    assert orders[1] == ["Revenue", "Costs"]
    assert orders[2] == ["Sales", "Rent", "Services"]


def test_order_index_unknown_last():
    positions = order_positions(["a", "b"])
    assert order_index(positions, "b") == 1
    assert order_index(positions, "zzz") == 2
    assert order_index(positions, None) == 2


def test_order_warnings_only_when_mixed():
    assert order_warnings([_rec(("A",), 1), _rec(("B",), 2)]) == []
    assert order_warnings([_rec(("A",)), _rec(("B",))]) == []
    warnings = order_warnings([_rec(("A",), 1), _rec(("B",))])
    assert [w.warning_type for w in warnings] == [AMBIGUOUS_ORDER]
