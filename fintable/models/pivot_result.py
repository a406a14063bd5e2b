from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .column_schema import ColumnSchema
from .layout import ColumnLayout
from .summary_record import SummaryRecord

"""PivotResult and PivotWarning models.

PivotResult is the full output of one engine invocation: ordered records,
the column schema, the resolved period / measure axes and any non-fatal
warnings collected on the way.
"""

__all__ = [
    "MISSING_VALUE",
    "AMBIGUOUS_ORDER",
    "PivotWarning",
    "PivotResult",
]

# Warning classifications (UPPER_SNAKE, same vocabulary as the warning log)
MISSING_VALUE = "MISSING_VALUE"
AMBIGUOUS_ORDER = "AMBIGUOUS_ORDER"


@dataclass(frozen=True)
class PivotWarning:
    """Non-fatal anomaly. The numeric result is still produced."""
    warning_type: str
    detail: str
    category: str | None = None
    period: Any = None


@dataclass(frozen=True)
class PivotResult:
    records: list[SummaryRecord]
    schema: ColumnSchema
    periods: list[Any]  # sorted ascending
    measures: tuple[str, ...]  # including Gap when applicable
    layout: ColumnLayout
    separator: str
    include_cumul: bool = True
    warnings: list[PivotWarning] = field(default_factory=list)

    @property
    def leaves(self) -> list[SummaryRecord]:
        return [r for r in self.records if r.leaf]

    @property
    def subtotals(self) -> list[SummaryRecord]:
        return [r for r in self.records if r.subtotal]

    @property
    def grand_total(self) -> SummaryRecord:
        return next(r for r in self.records if r.grandtotal)

    def to_dicts(self) -> list[dict[str, Any]]:
        return [
            r.to_dict(
                self.periods,
                self.measures,
                separator=self.separator,
                include_cumul=self.include_cumul,
            )
            for r in self.records
        ]
