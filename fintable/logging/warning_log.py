from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..models.pivot_result import PivotWarning
from ..models.warning_record import WarningRecord

"""Warning log buffering.

- JSON Lines, fixed schema (see WarningRecord)
- one ``logs/warnings-YYYYMMDD-HHMMSS.log`` (UTC) per run, created on the
  first non-empty flush
- serial use only; the orchestrator flushes once at the end of a run
"""

__all__ = [
    "WarningRecord",
    "WarningLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class WarningLogBuffer:
    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[WarningRecord] = []
        self._logs_dir = logs_dir if logs_dir is not None else LOGS_DIR
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"warnings-{stamp}.log"
        return self._file_path

    def append(self, record: WarningRecord) -> None:
        self._records.append(record)

    def extend_from(self, file: str, warnings: Iterable[PivotWarning]) -> int:
        count = 0
        for warning in warnings:
            self._records.append(WarningRecord.from_warning(file, warning))
            count += 1
        return count

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Append buffered records to the log file; None when nothing was buffered."""
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
