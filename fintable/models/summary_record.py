from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .layout import CUMUL_LABEL, DEFAULT_SEPARATOR

"""SummaryRecord: one row of the summary table.

Values are held in a typed mapping ``(period, measure) -> float``; the flat
``"period || measure"`` column ids only appear when a record is exported via
``to_dict``.
"""

__all__ = [
    "RecordKind",
    "SummaryRecord",
    "column_id",
    "cumul_column_id",
]


def column_id(period: Any, measure: str, separator: str = DEFAULT_SEPARATOR) -> str:
    return f"{period}{separator}{measure}"


def cumul_column_id(measure: str, separator: str = DEFAULT_SEPARATOR) -> str:
    return f"{CUMUL_LABEL}{separator}{measure}"


class RecordKind(Enum):
    """A record is exactly one of leaf / subtotal / grand total."""
    LEAF = "leaf"
    SUBTOTAL = "subtotal"
    GRAND_TOTAL = "grandtotal"


@dataclass
class SummaryRecord:
    category: str  # CategoryKey string (top label only for subtotals)
    labels: tuple[str, ...]  # per-level labels, category-1..category-N
    kind: RecordKind = RecordKind.LEAF
    order: float | None = None
    values: dict[tuple[Any, str], float] = field(default_factory=dict)
    cumul: dict[str, float] = field(default_factory=dict)
    boundary: bool = False  # level-1 label is a boundary (balance) label

    @property
    def leaf(self) -> bool:
        return self.kind is RecordKind.LEAF

    @property
    def subtotal(self) -> bool:
        return self.kind is RecordKind.SUBTOTAL

    @property
    def grandtotal(self) -> bool:
        return self.kind is RecordKind.GRAND_TOTAL

    @property
    def highlight(self) -> bool:
        """Presentation hint: balance rows and subtotals are emphasized."""
        return self.subtotal or self.boundary

    @property
    def display_label(self) -> str:
        return self.labels[-1] if self.labels else self.category

    def label(self, level: int) -> str | None:
        """1-based level label."""
        if 1 <= level <= len(self.labels):
            return self.labels[level - 1]
        return None

    def value(self, period: Any, measure: str) -> float:
        return self.values.get((period, measure), 0.0)

    def set_value(self, period: Any, measure: str, value: float) -> None:
        self.values[(period, measure)] = value

    def cumulative(self, measure: str) -> float:
        return self.cumul.get(measure, 0.0)

    def to_dict(
        self,
        periods: Sequence[Any],
        measures: Sequence[str],
        *,
        separator: str = DEFAULT_SEPARATOR,
        include_cumul: bool = True,
    ) -> dict[str, Any]:
        """Flatten to the column-id keyed mapping consumed by renderers.

        Every period x measure column is present; absent values are 0.
        """
        out: dict[str, Any] = {"category": self.category}
        for level, label in enumerate(self.labels, start=1):
            out[f"category-{level}"] = label
        if self.order is not None:
            out["order"] = self.order
        out["leaf"] = self.leaf
        out["subtotal"] = self.subtotal
        out["grandtotal"] = self.grandtotal
        for period in periods:
            for measure in measures:
                out[column_id(period, measure, separator)] = self.value(period, measure)
        if include_cumul:
            for measure in measures:
                out[cumul_column_id(measure, separator)] = self.cumulative(measure)
        return out
