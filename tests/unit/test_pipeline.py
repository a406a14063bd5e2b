from __future__ import annotations

import pytest

from fintable.models.config_models import RollupConfig, SlotBindings, SlotField
from fintable.models.layout import ColumnLayout
from fintable.models.pivot_result import AMBIGUOUS_ORDER
from fintable.services.errors import EmptyInputError, LayoutError
from fintable.services.options import PivotOptions
from fintable.services.pipeline import build_summary, build_summary_from_slots

"""End-to-end engine tests: rows + layout -> ordered records + schema."""

ONE_MEASURE = ColumnLayout(has_order=False, category_levels=1, measure_count=1, measure_labels=("Amount",))
FINANCIAL = ColumnLayout(has_order=True, category_levels=2, measure_count=2, measure_labels=("Plan", "Actual"))


def _by_category(result):
    return {r.category: r for r in result.records}


# --- concrete scenarios -------------------------------------------------------

def test_two_periods_one_level_one_measure():
    rows = [
        ["2024-01", "A", 10],
        ["2024-02", "A", 20],
        ["2024-01", "B", 5],
        ["2024-02", "B", -5],
    ]
    result = build_summary(rows, ONE_MEASURE)
    records = _by_category(result)
    assert [r.category for r in result.records] == ["A", "B", "Grand Total"]
    assert records["A"].cumulative("Amount") == 30
    assert records["B"].cumulative("Amount") == 0
    total = result.grand_total
    assert total.value("2024-01", "Amount") == 15
    assert total.value("2024-02", "Amount") == 15
    assert total.cumulative("Amount") == 15
    assert result.subtotals == []


def test_two_measures_add_gap():
    layout = ColumnLayout(has_order=False, category_levels=1, measure_count=2, measure_labels=("Plan", "Actual"))
    result = build_summary([["2024-01", "A", 100, 80]], layout)
    leaf = result.leaves[0]
    assert result.measures == ("Plan", "Actual", "Gap")
    assert leaf.value("2024-01", "Gap") == -20
    assert "Cumul || Gap" in result.schema.column_ids


def test_subtotals_per_top_level_label():
    layout = ColumnLayout(has_order=False, category_levels=2, measure_count=1, measure_labels=("m",))
    rows = [
        ["2024-01", "Revenue", "Sales", 10],
        ["2024-01", "Revenue", "Services", 5],
        ["2024-01", "Costs", "Rent", -3],
    ]
    result = build_summary(rows, layout)
    subtotals = {s.category: s for s in result.subtotals}
    assert set(subtotals) == {"Revenue", "Costs"}
    assert subtotals["Revenue"].value("2024-01", "m") == 15
    assert subtotals["Costs"].value("2024-01", "m") == -3
    # grand total sums the 3 leaves, not the subtotals
    assert result.grand_total.value("2024-01", "m") == 12


def test_short_row_raises_layout_error():
    with pytest.raises(LayoutError):
        build_summary([["2024-01", 5]], ONE_MEASURE)
    slots = SlotBindings(time=(SlotField(column="t"),), measure=(SlotField(column="m"),))
    with pytest.raises(LayoutError):
        build_summary_from_slots([["2024-01", 5]], slots)


def test_layout_error_raised_before_any_aggregation():
    rows = [["2024-01", "A", 1], ["2024-01", "A", "B", 1]]
    with pytest.raises(LayoutError, match="row 1"):
        build_summary(rows, ONE_MEASURE)


def test_empty_input_raises():
    with pytest.raises(EmptyInputError, match="no data available"):
        build_summary([], ONE_MEASURE)
    with pytest.raises(EmptyInputError):
        build_summary_from_slots(iter([]), SlotBindings())


# --- full financial table -----------------------------------------------------

def test_financial_table_order_and_values(sample_rows):
    result = build_summary(sample_rows, FINANCIAL)
    assert [(r.category, r.kind.value) for r in result.records] == [
        ("Initial || Cash", "leaf"),
        ("Revenue || Sales", "leaf"),
        ("Revenue", "subtotal"),
        ("Costs || Rent", "leaf"),
        ("Costs", "subtotal"),
        ("Cashflow Net || Financing", "leaf"),
        ("Cashflow Net", "subtotal"),
        ("Final || Cash", "leaf"),
        ("Grand Total", "grandtotal"),
    ]
    records = _by_category(result)

    net = records["Cashflow Net"]
    assert net.value("2024-01", "Plan") == 40
    assert net.value("2024-02", "Actual") == 55
    assert net.cumulative("Plan") == 80

    # opening balance: first period snapshot, closing balance: summed
    assert records["Initial || Cash"].cumulative("Plan") == 100
    assert records["Final || Cash"].cumulative("Plan") == 320
    assert records["Final || Cash"].cumulative("Gap") == -20
    assert records["Initial || Cash"].highlight is True
    assert records["Revenue"].highlight is True
    assert records["Revenue || Sales"].highlight is False

    total = result.grand_total
    assert total.value("2024-01", "Plan") == 270
    assert total.value("2024-02", "Plan") == 380
    assert total.cumulative("Plan") == 380
    assert total.cumulative("Gap") == -10
    assert result.warnings == []


def test_from_slots_matches_explicit_layout(sample_rows):
    slots = SlotBindings(
        time=(SlotField(column="month"),),
        order=(SlotField(column="position"),),
        category=(SlotField(column="section"),),
        columns=(SlotField(column="line"),),
        measure=(SlotField(column="plan", label="Plan"), SlotField(column="actual", label="Actual")),
    )
    assert build_summary_from_slots(sample_rows, slots).to_dicts() == build_summary(sample_rows, FINANCIAL).to_dicts()


def test_include_cumul_off(sample_rows):
    options = PivotOptions(rollup=RollupConfig(include_cumul=False))
    result = build_summary(sample_rows, FINANCIAL, options)
    assert result.schema.cumul_columns == []
    assert not any(key.startswith("Cumul") for key in result.to_dicts()[0])


def test_mixed_orders_warn():
    layout = ColumnLayout(has_order=True, category_levels=1, measure_count=1)
    rows = [["2024-01", 1, "A", 1], ["2024-01", None, "B", 2]]
    result = build_summary(rows, layout)
    assert [w.warning_type for w in result.warnings] == [AMBIGUOUS_ORDER]


# --- properties ---------------------------------------------------------------

def test_leaf_keys_unique(sample_rows):
    rows = sample_rows + [["2024-02", 2, "Revenue", "Sales", 61, 71]]
    result = build_summary(rows, FINANCIAL)
    keys = [r.category for r in result.leaves]
    assert len(keys) == len(set(keys)) == 5


def test_grand_total_conserves_leaf_sums(sample_rows):
    result = build_summary(sample_rows, FINANCIAL)
    for period in result.periods:
        for measure in result.measures:
            expected = sum(r.value(period, measure) for r in result.leaves)
            assert result.grand_total.value(period, measure) == pytest.approx(expected)


def test_same_label_subtotals_conserve_their_leaves(sample_rows):
    result = build_summary(sample_rows, FINANCIAL)
    for subtotal in result.subtotals:
        if subtotal.category == "Cashflow Net":
            continue
        group = [r for r in result.leaves if r.label(1) == subtotal.category]
        for period in result.periods:
            for measure in result.measures:
                assert subtotal.value(period, measure) == pytest.approx(
                    sum(r.value(period, measure) for r in group)
                )


def test_flow_leaf_cumulative_is_period_sum(sample_rows):
    result = build_summary(sample_rows, FINANCIAL)
    for leaf in result.leaves:
        if leaf.boundary:
            continue
        for measure in result.measures:
            assert leaf.cumulative(measure) == pytest.approx(sum(leaf.value(p, measure) for p in result.periods))


def test_gap_is_actual_minus_plan_everywhere(sample_rows):
    result = build_summary(sample_rows, FINANCIAL)
    for record in result.records:
        for period in result.periods:
            assert record.value(period, "Gap") == pytest.approx(
                record.value(period, "Actual") - record.value(period, "Plan")
            )


def test_rerun_is_identical(sample_rows):
    first = build_summary(sample_rows, FINANCIAL)
    second = build_summary(list(sample_rows), FINANCIAL)
    assert first.to_dicts() == second.to_dicts()
    assert first.schema == second.schema


def test_rich_period_cells_key_by_id():
    rows = [
        [{"id": "2024-02", "name": {"en": "Feb", "fr": "Févr."}}, "A", 2],
        [{"id": "2024-01", "name": {"en": "Jan", "fr": "Janv."}}, "A", 1],
        [{"id": "2024-01", "name": {"en": "Jan"}}, "B", 5],
    ]
    result = build_summary(rows, ONE_MEASURE)
    assert result.periods == ["2024-01", "2024-02"]
    records = _by_category(result)
    assert records["A"].value("2024-02", "Amount") == 2
    assert records["A"].cumulative("Amount") == 3
    assert result.grand_total.value("2024-01", "Amount") == 6
    assert result.schema.column_ids[0] == "2024-01 || Amount"


def test_cumulative_non_decreasing_as_periods_are_added():
    periods = ["2024-01", "2024-02", "2024-03", "2024-04"]
    values = {"A": [3, 0, 7, 1], "B": [0, 2, 2, 5]}
    rows = [[p, category, values[category][i]] for i, p in enumerate(periods) for category in values]

    previous = {"A": 0.0, "B": 0.0}
    for k in range(1, len(periods) + 1):
        prefix = [row for row in rows if row[0] in periods[:k]]
        records = _by_category(build_summary(prefix, ONE_MEASURE))
        for category in values:
            current = records[category].cumulative("Amount")
            assert current >= previous[category]
            assert current == sum(values[category][:k])
            previous[category] = current
