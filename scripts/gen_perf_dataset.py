#!/usr/bin/env python3
"""Dataset generation script for performance testing.

Generates synthetic financial rows shaped for the default slot bindings of
config/summary.yml:

    month | position | section | line | plan | actual

Sections follow a cash-flow statement: an opening balance (Initial), flow
sections (Revenue, Costs, Cashflow Net) and a closing balance (Final).
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

SECTIONS: dict[str, list[str]] = {
    "Initial": ["Cash"],
    "Revenue": ["Sales", "Services", "Licensing", "Other income"],
    "Costs": ["Salaries", "Rent", "Marketing", "Hosting", "Travel"],
    "Cashflow Net": ["Financing"],
    "Final": ["Cash"],
}


def generate_synthetic_data(rows: int, months: int = 12, seed: int = 42) -> pd.DataFrame:
    """Generate roughly ``rows`` financial rows spread over ``months`` periods.

    Every (section, line) pair appears once per month; extra lines are
    numbered so the requested row count is reached.
    """
    rng = np.random.default_rng(seed)
    periods = pd.date_range("2024-01-01", periods=months, freq="MS")

    base_lines = [(s, l) for s, lines in SECTIONS.items() for l in lines]
    lines_needed = max(len(base_lines), -(-rows // months))  # ceil
    flow_sections = [s for s in SECTIONS if s not in ("Initial", "Final")]
    extra = [
        (flow_sections[i % len(flow_sections)], f"Line {i + 1:05d}")
        for i in range(lines_needed - len(base_lines))
    ]
    all_lines = base_lines[:-1] + extra + base_lines[-1:]  # closing balance stays last

    data: dict[str, list[Any]] = {k: [] for k in ("month", "position", "section", "line", "plan", "actual")}
    for position, (section, line) in enumerate(all_lines, start=1):
        plan = np.round(rng.uniform(100, 10_000, months), 2)
        actual = np.round(plan * rng.uniform(0.8, 1.2, months), 2)
        if section == "Costs":
            plan, actual = -plan, -actual
        data["month"].extend(periods.to_pydatetime().tolist())
        data["position"].extend([position] * months)
        data["section"].extend([section] * months)
        data["line"].extend([line] * months)
        data["plan"].extend(plan.tolist())
        data["actual"].extend(actual.tolist())

    return pd.DataFrame(data)


def create_dataset_file(output_path: Path, rows: int, months: int = 12, seed: int = 42) -> None:
    """Write the dataset as .xlsx (sheet 1) or .csv, by suffix."""
    df = generate_synthetic_data(rows, months, seed)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_path.suffix.lower() == ".csv":
        df.to_csv(output_path, index=False)
    else:
        df.to_excel(output_path, sheet_name="Data", index=False, engine="openpyxl")

    print(f"Created dataset file: {output_path}")
    print(f"  Rows: {len(df):,}")
    print(f"  Months: {months}")
    print(f"  Distinct lines: {df[['section', 'line']].drop_duplicates().shape[0]:,}")


def main() -> int:
    """Main CLI interface for dataset generation."""
    parser = argparse.ArgumentParser(
        description="Generate synthetic financial datasets for performance testing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate default 50k rows over 12 months
  %(prog)s data/perf.xlsx

  # CSV, 24 months, custom seed
  %(prog)s data/perf.csv --rows 100000 --months 24 --seed 123
        """
    )
    parser.add_argument("output", type=Path, help="Output .xlsx or .csv path")
    parser.add_argument("--rows", type=int, default=50_000, help="Number of data rows (default: 50,000)")
    parser.add_argument("--months", type=int, default=12, help="Number of monthly periods (default: 12)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed for reproducible data (default: 42)")
    parser.add_argument("--dry-run", action="store_true", help="Show what would be generated without creating files")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if args.months <= 0:
        print("Error: --months must be positive", file=sys.stderr)
        return 1
    if args.output.suffix.lower() not in (".xlsx", ".csv"):
        print("Error: output must end with .xlsx or .csv", file=sys.stderr)
        return 1

    print("Dataset generation plan:")
    print(f"  Output file: {args.output}")
    print(f"  Rows: {args.rows:,}")
    print(f"  Months: {args.months}")
    print(f"  Random seed: {args.seed}")

    if args.dry_run:
        print("\n[DRY RUN] Would generate files but not creating them.")
        return 0

    try:
        print("\nGenerating dataset...")
        create_dataset_file(args.output, args.rows, args.months, args.seed)
        print("\nDataset generation completed successfully!")
        return 0
    except (OSError, ValueError) as e:
        print(f"\nError generating dataset: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
