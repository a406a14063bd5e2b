from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pandas as pd
import pytest

from fintable.io.reader import InputFormatError, read_input_table, select_rows


def test_read_csv_selects_bound_columns_in_query_order(write_input):
    path = write_input("plan.csv")
    table = read_input_table(path, columns=["month", "section", "line", "plan"])
    assert table.name == "plan.csv"
    assert table.columns == ["month", "position", "section", "line", "plan", "actual"]
    assert table.rows[0] == ["2024-01", "Initial", "Cash", 100]
    assert len(table.rows) == 10


def test_numpy_scalars_unboxed(write_input):
    table = read_input_table(write_input("plan.csv"), columns=["position", "plan"])
    value = table.rows[0][0]
    assert type(value) is int


def test_read_xlsx(write_input):
    table = read_input_table(write_input("plan.xlsx"), columns=["month", "plan"])
    assert table.rows[-1] == ["2024-02", 190]


def test_missing_columns_raise(write_input):
    with pytest.raises(InputFormatError, match="missing columns"):
        read_input_table(write_input("plan.csv"), columns=["month", "budget"])


def test_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "plan.txt"
    p.write_text("a,b\n1,2\n", encoding="utf-8")
    with pytest.raises(InputFormatError, match="unsupported"):
        read_input_table(p)


def test_empty_cells_become_none_and_blank_rows_dropped():
    df = pd.DataFrame({
        " month ": ["2024-01", None, pd.NaT],
        "plan": [1.5, float("nan"), None],
        "when": [pd.Timestamp("2024-01-01"), pd.NaT, None],
    })
    table = select_rows(df, "frame")
    assert table.columns == ["month", "plan", "when"]
    assert table.rows == [["2024-01", 1.5, pd.Timestamp("2024-01-01")]]
    assert isinstance(table.rows[0][2], datetime)


def test_header_row_offset(temp_workdir: Path):
    p = temp_workdir / "data" / "titled.csv"
    p.write_text("Quarterly plan,,\nmonth,section,plan\n2024-01,Revenue,5\n", encoding="utf-8")
    table = read_input_table(p, columns=["month", "plan"], header_row=1)
    assert table.rows == [["2024-01", 5]]
