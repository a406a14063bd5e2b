from __future__ import annotations

import math
from pathlib import Path

import pandas as pd

from ..models.pivot_result import PivotResult

"""Summary table export.

``to_dataframe`` lays a PivotResult out as one row per record: display label,
per-level labels, kind, order, then one column per schema column id.
"""

__all__ = [
    "OUTPUT_FORMATS",
    "to_dataframe",
    "write_summary",
]

OUTPUT_FORMATS = ("xlsx", "csv")


def to_dataframe(result: PivotResult) -> pd.DataFrame:
    levels = result.layout.category_levels
    label_columns = [f"category-{i}" for i in range(1, levels + 1)]
    rows = []
    for record in result.records:
        flat = record.to_dict(
            result.periods,
            result.measures,
            separator=result.separator,
            include_cumul=result.include_cumul,
        )
        row = {"label": record.display_label}
        row.update({c: flat.get(c) for c in label_columns})
        row["kind"] = record.kind.value
        # Excel cannot hold inf: the grand total sentinel is written blank
        row["order"] = None if record.order is None or math.isinf(record.order) else record.order
        row.update({c: flat[c] for c in result.schema.column_ids})
        rows.append(row)
    columns = ["label", *label_columns, "kind", "order", *result.schema.column_ids]
    return pd.DataFrame(rows, columns=columns)


def write_summary(result: PivotResult, path: Path) -> Path:
    df = to_dataframe(result)
    path.parent.mkdir(parents=True, exist_ok=True)
    suffix = path.suffix.lower()
    if suffix == ".xlsx":
        df.to_excel(path, sheet_name="Summary", index=False, engine="openpyxl")
    elif suffix == ".csv":
        df.to_csv(path, index=False)
    else:
        raise ValueError(f"unsupported output format: {path.suffix}")
    return path
