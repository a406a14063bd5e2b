from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""Column schema of a summary table: period x measure blocks, then Cumul."""

__all__ = [
    "ColumnSpec",
    "ColumnSchema",
]


@dataclass(frozen=True)
class ColumnSpec:
    column_id: str
    period: Any  # None for the cumulative block
    period_label: str
    measure: str
    cumulative: bool = False


@dataclass(frozen=True)
class ColumnSchema:
    columns: tuple[ColumnSpec, ...]

    def __iter__(self):
        return iter(self.columns)

    def __len__(self) -> int:
        return len(self.columns)

    @property
    def column_ids(self) -> list[str]:
        return [c.column_id for c in self.columns]

    @property
    def period_columns(self) -> list[ColumnSpec]:
        return [c for c in self.columns if not c.cumulative]

    @property
    def cumul_columns(self) -> list[ColumnSpec]:
        return [c for c in self.columns if c.cumulative]

    def groups(self) -> list[tuple[str, list[ColumnSpec]]]:
        """Group header -> its columns, in schema order (one group per period)."""
        groups: list[tuple[str, list[ColumnSpec]]] = []
        previous: Any = None
        for spec in self.columns:
            current = (spec.cumulative, spec.period)
            if not groups or current != previous:
                groups.append((spec.period_label, []))
                previous = current
            groups[-1][1].append(spec)
        return groups
