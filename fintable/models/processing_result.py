from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Processing result models: per-file statistics and the run aggregate used
for the SUMMARY line.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics."""
    file_name: str
    status: str  # success / failed / skipped
    input_rows: int
    output_records: int
    warnings: int
    elapsed_seconds: float
    output_path: str | None = None


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of a summary run."""
    success_files: int
    failed_files: int
    skipped_files: int  # files without data rows
    total_input_rows: int  # rows read from successfully summarized files
    total_output_records: int
    total_warnings: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    throughput_rows_per_sec: float  # total_input_rows / elapsed
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files + self.skipped_files
