from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

"""Config dataclasses for the fintable summary tool.

These are the domain models produced by ``fintable.config.loader``. Slot
bindings describe which input columns feed which role of the pivot (time,
order, category, columns, measure); the rollup section carries the labels
that get special treatment during subtotalling.
"""

__all__ = [
    "SLOT_ROLES",
    "TIMESTAMP_TYPES",
    "SnapshotPeriod",
    "SlotField",
    "SlotBindings",
    "RollupConfig",
    "SummaryConfig",
]

# Query order: rows must arrive with cells in this role order
SLOT_ROLES: tuple[str, ...] = ("time", "order", "category", "columns", "measure")

TIMESTAMP_TYPES = frozenset({"datetime", "date", "timestamp"})


class SnapshotPeriod(Enum):
    """Which period a balance row's cumulative column is taken from."""
    FIRST = "first"
    LAST = "last"


@dataclass(frozen=True)
class SlotField:
    """A single input column bound to a slot role."""
    column: str
    label: Any = None  # str or {language: text}; None -> column name
    type: str = "hierarchy"  # hierarchy | numeric | datetime

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> SlotField:
        return cls(
            column=str(data["column"]),
            label=data.get("label"),
            type=str(data.get("type", "hierarchy")),
        )


@dataclass(frozen=True)
class SlotBindings:
    """Role -> bound fields. Only the counts matter to the layout resolver."""
    time: tuple[SlotField, ...] = ()
    order: tuple[SlotField, ...] = ()
    category: tuple[SlotField, ...] = ()
    columns: tuple[SlotField, ...] = ()
    measure: tuple[SlotField, ...] = ()

    def fields(self, role: str) -> tuple[SlotField, ...]:
        if role not in SLOT_ROLES:
            raise KeyError(f"unknown slot role: {role}")
        return getattr(self, role)

    @property
    def category_fields(self) -> tuple[SlotField, ...]:
        return (*self.category, *self.columns)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> SlotBindings:
        data = data or {}
        return cls(**{
            role: tuple(SlotField.from_mapping(item) for item in data.get(role) or [])
            for role in SLOT_ROLES
        })


@dataclass(frozen=True)
class RollupConfig:
    """Labels with special rollup semantics.

    boundary_labels are opening/closing balance rows: no subtotal of their own,
    excluded from the cross-cutting rollup. opening_labels (the opening balance)
    additionally get a cumulative column snapshotted from one period; closing
    balances keep their summed cumulative column.
    """
    boundary_labels: frozenset[str] = frozenset({"Initial", "Final"})
    opening_labels: frozenset[str] = frozenset({"Initial"})
    cross_cutting_label: str | None = "Cashflow Net"
    grand_total_label: str = "Grand Total"
    boundary_snapshot: SnapshotPeriod = SnapshotPeriod.FIRST
    include_cumul: bool = True


@dataclass(frozen=True)
class SummaryConfig:
    """Root configuration object for a summary run."""
    source_directory: str  # Directory to scan for input files
    slots: SlotBindings
    output_directory: str = "./out"
    output_format: str = "xlsx"  # xlsx | csv
    language: str = "en"
    separator: str = " || "
    period_format: str | None = None  # strftime pattern for date-like periods
    header_row: int = 0  # 0-based header row index in input files
    rollup: RollupConfig = field(default_factory=RollupConfig)
