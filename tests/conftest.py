# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest

from fintable.logging.init import reset_logging

SAMPLE_HEADER = ["month", "position", "section", "line", "plan", "actual"]

# Opening balance, two flow sections, a cross-cutting section, closing balance
SAMPLE_ROWS: list[list[object]] = [
    ["2024-01", 1, "Initial", "Cash", 100, 100],
    ["2024-02", 1, "Initial", "Cash", 150, 130],
    ["2024-01", 2, "Revenue", "Sales", 50, 40],
    ["2024-02", 2, "Revenue", "Sales", 60, 70],
    ["2024-01", 3, "Costs", "Rent", -20, -25],
    ["2024-02", 3, "Costs", "Rent", -20, -20],
    ["2024-01", 4, "Cashflow Net", "Financing", 10, 0],
    ["2024-02", 4, "Cashflow Net", "Financing", 0, 5],
    ["2024-01", 5, "Final", "Cash", 130, 115],
    ["2024-02", 5, "Final", "Cash", 190, 185],
]


@pytest.fixture(autouse=True)
def _clean_logging():
    # setup_logging() binds the handler to the sys.stdout of the moment
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./out
output_format: csv
language: en
slots:
  time:
    - column: month
  order:
    - column: position
      type: numeric
  category:
    - column: section
  columns:
    - column: line
  measure:
    - column: plan
      label: {en: Plan, fr: Prévu}
    - column: actual
      label: {en: Actual, fr: Réel}
rollup:
  boundary_labels: [Initial, Final]
  cross_cutting_label: Cashflow Net
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "summary.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def write_input(temp_workdir: Path) -> Callable[..., Path]:
    """Factory: write rows under data/ as .csv or .xlsx (by suffix)."""

    def _write(name: str, rows: list[list[object]] | None = None, header: list[str] | None = None) -> Path:
        path = temp_workdir / "data" / name
        df = pd.DataFrame(SAMPLE_ROWS if rows is None else rows, columns=header or SAMPLE_HEADER)
        if path.suffix == ".xlsx":
            df.to_excel(path, index=False, engine="openpyxl")
        else:
            df.to_csv(path, index=False)
        return path

    return _write


@pytest.fixture()
def sample_rows() -> list[list[object]]:
    return [list(row) for row in SAMPLE_ROWS]
