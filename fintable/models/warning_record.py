from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

from .pivot_result import PivotWarning

"""WarningRecord model for the warning log.

Engine warnings (MISSING_VALUE, AMBIGUOUS_ORDER) carry no timestamp or file
so the engine stays a pure function; the orchestrator wraps them into
WarningRecords when it knows which input file produced them.

JSON Lines schema is fixed: timestamp, file, warning_type, category, period,
detail. No extra keys.
"""

__all__ = [
    "WarningRecord",
]


@dataclass(frozen=True)
class WarningRecord:
    """Structured warning record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: input filename being summarized
        warning_type: classification in UPPER_SNAKE_CASE format
        category: category key the warning refers to ("" when file-level)
        period: period value as text ("" when not period-specific)
        detail: human readable description
    """
    timestamp: str  # ISO8601 UTC
    file: str
    warning_type: str  # UPPER_SNAKE
    category: str
    period: str
    detail: str

    @staticmethod
    def create(
        file: str, warning_type: str, detail: str, category: str = "", period: str = ""
    ) -> WarningRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return WarningRecord(
            timestamp=ts,
            file=file,
            warning_type=warning_type,
            category=category,
            period=period,
            detail=detail,
        )

    @staticmethod
    def from_warning(file: str, warning: PivotWarning) -> WarningRecord:
        return WarningRecord.create(
            file=file,
            warning_type=warning.warning_type,
            detail=warning.detail,
            category=warning.category or "",
            period="" if warning.period is None else str(warning.period),
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
