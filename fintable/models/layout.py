from __future__ import annotations

from dataclasses import dataclass

"""ColumnLayout and CategoryKey models.

A ColumnLayout maps a flat input row ``[period, order?, cat_1..cat_N, m_1..m_M]``
to its semantic fields. It is derived from slot bindings by
``fintable.services.layout_resolver`` or built directly by callers that already
know the shape of their rows.
"""

__all__ = [
    "GAP_LABEL",
    "CUMUL_LABEL",
    "DEFAULT_SEPARATOR",
    "ColumnLayout",
    "CategoryKey",
]

GAP_LABEL = "Gap"
CUMUL_LABEL = "Cumul"
DEFAULT_SEPARATOR = " || "


@dataclass(frozen=True)
class ColumnLayout:
    has_order: bool
    category_levels: int
    measure_count: int
    measure_labels: tuple[str, ...] = ()  # real measures only, Gap is derived
    category_types: tuple[str, ...] = ()  # declared type per level (may be shorter)

    @property
    def category_start(self) -> int:
        return 2 if self.has_order else 1

    @property
    def measure_start(self) -> int:
        return self.category_start + self.category_levels

    @property
    def row_length(self) -> int:
        return self.measure_start + self.measure_count

    @property
    def has_gap(self) -> bool:
        return self.measure_count == 2

    @property
    def measures(self) -> tuple[str, ...]:
        """Labels of the measure cells, padded with positional names."""
        labels = list(self.measure_labels[: self.measure_count])
        for i in range(len(labels), self.measure_count):
            labels.append(f"Measure {i + 1}")
        return tuple(labels)

    @property
    def output_measures(self) -> tuple[str, ...]:
        """Measure set of the summary: measures plus Gap when exactly two."""
        if self.has_gap:
            return (*self.measures, GAP_LABEL)
        return self.measures

    def category_type(self, level: int) -> str | None:
        """Declared type of a 1-based category level, if known."""
        if 1 <= level <= len(self.category_types):
            return self.category_types[level - 1]
        return None


@dataclass(frozen=True)
class CategoryKey:
    key: str
    labels: tuple[str, ...]
