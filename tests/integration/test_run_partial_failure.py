from __future__ import annotations

from pathlib import Path

from fintable.cli import main as cli_main

"""Integration: one broken input file never stops the others."""


def test_partial_failure_keeps_good_outputs(write_config, write_input, temp_workdir: Path, capsys):
    write_input("a_good.csv")
    write_input("b_missing_column.csv", rows=[["2024-01", "A", 1]], header=["month", "section", "plan"])
    write_input("c_good.xlsx")

    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 2
    assert "SUMMARY files=3/3 success=2 failed=1 skipped=0 rows=20 records=18" in out
    assert "ERROR b_missing_column.csv: 'b_missing_column.csv' missing columns" in out
    assert (temp_workdir / "out" / "a_good_summary.csv").exists()
    assert (temp_workdir / "out" / "c_good_summary.csv").exists()
    assert not (temp_workdir / "out" / "b_missing_column_summary.csv").exists()


def test_layout_mismatch_fails_file(temp_workdir: Path, write_input, capsys):
    # only period + measure bound: 2-cell rows are below the minimum row width
    (temp_workdir / "config" / "summary.yml").write_text(
        "source_directory: ./data\noutput_format: csv\n"
        "slots:\n  time: [{column: month}]\n  measure: [{column: plan}]\n",
        encoding="utf-8",
    )
    write_input("short.csv", rows=[["2024-01", 5]], header=["month", "plan"])
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 2
    assert "ERROR short.csv: insufficient columns" in out
    assert "SUMMARY files=1/1 success=0 failed=1" in out
