from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

"""Input reader for summary runs.

Reads one tabular file (.xlsx first sheet, or .csv) with pandas, treats
``header_row`` as the header, and returns the bound columns in query order
(time, order, category, columns, measure) as plain Python rows ready for the
engine. NaN / NaT become None; numpy scalars are unboxed.
"""

__all__ = [
    "SUPPORTED_SUFFIXES",
    "InputFormatError",
    "InputTable",
    "read_input_frame",
    "select_rows",
    "read_input_table",
]

SUPPORTED_SUFFIXES = (".xlsx", ".csv")


class InputFormatError(Exception):
    """Raised for unsupported files or when bound columns are missing."""


@dataclass
class InputTable:
    name: str
    columns: list[str]  # header of the file (all columns)
    rows: list[list[Any]]  # selected columns only, query order


def read_input_frame(path: Path, header_row: int = 0) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".xlsx":
        return pd.read_excel(path, sheet_name=0, header=header_row)
    if suffix == ".csv":
        return pd.read_csv(path, header=header_row)
    raise InputFormatError(f"unsupported input format: {path.name}")


def _cell(value: Any) -> Any:
    if isinstance(value, np.generic):
        value = value.item()
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, float) and value != value:  # NaN
        return None
    return value


def select_rows(df: pd.DataFrame, name: str, columns: Sequence[str] | None = None) -> InputTable:
    """Pick ``columns`` (all when None) out of ``df`` as row lists.

    Rows where every selected cell is empty are dropped, the same way blank
    spreadsheet lines are ignored.
    """
    header = [str(c).strip() for c in df.columns]
    df = df.set_axis(header, axis=1)
    if columns is not None:
        missing = [c for c in columns if c not in header]
        if missing:
            raise InputFormatError(f"'{name}' missing columns: {sorted(set(missing))}")
        df = df.loc[:, list(columns)]
    rows: list[list[Any]] = []
    for raw in df.itertuples(index=False, name=None):
        values = [_cell(v) for v in raw]
        if all(v is None for v in values):
            continue
        rows.append(values)
    return InputTable(name=name, columns=header, rows=rows)


def read_input_table(
    path: Path, columns: Sequence[str] | None = None, header_row: int = 0
) -> InputTable:
    df = read_input_frame(path, header_row=header_row)
    return select_rows(df, path.name, columns)
