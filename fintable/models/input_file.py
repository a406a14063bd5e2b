from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

"""InputFile domain model and FileStatus enum.

Tracks one input file through a summary run, from discovery to a written
summary table (or a failure reason).
"""


class FileStatus(Enum):
    """Status for InputFile processing.

    State transitions: pending -> processing -> (success | failed | skipped)

    - SKIPPED: the file had no data rows ("no data" condition)
    - FAILED: layout / format problem, nothing written for this file
    """
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class InputFile:
    path: Path
    name: str
    start_time: datetime | None = None
    end_time: datetime | None = None
    status: FileStatus = FileStatus.PENDING
    input_rows: int = 0
    output_records: int = 0
    warnings: int = 0
    output_path: Path | None = None
    error: str | None = None  # failure / skip reason
