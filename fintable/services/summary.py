from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering.

Format:
SUMMARY files={total}/{total} success={n} failed={n} skipped={n} rows={n}
records={n} warnings={n} elapsed_sec={x} throughput_rps={x}
"""


def _fmt_number(value: float) -> str:
    """Integers without a decimal point, tiny values without scientific notation."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(result: ProcessingResult) -> str:
    """Render the SUMMARY line for a finished run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     success_files=1, failed_files=0, skipped_files=0, total_input_rows=1000,
        ...     total_output_records=12, total_warnings=0, start_time=start, end_time=end,
        ...     elapsed_seconds=2.0, throughput_rows_per_sec=500.0
        ... )
        >>> render_summary_line(result)
        'SUMMARY files=1/1 success=1 failed=0 skipped=0 rows=1000 records=12 warnings=0 elapsed_sec=2 throughput_rps=500'
    """
    total = result.total_files
    return (
        f"SUMMARY files={total}/{total} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"skipped={result.skipped_files} "
        f"rows={result.total_input_rows} "
        f"records={result.total_output_records} "
        f"warnings={result.total_warnings} "
        f"elapsed_sec={_fmt_number(result.elapsed_seconds)} "
        f"throughput_rps={_fmt_number(result.throughput_rows_per_sec)}"
    )
