from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from ..models.config_models import SLOT_ROLES, SlotBindings, SlotField
from ..models.layout import ColumnLayout
from .errors import LayoutError
from .localization import localize

"""Column Layout Resolver.

Maps slot binding metadata (role -> bound fields) plus one sample row to a
ColumnLayout. The resolver only counts fields; cell contents are never
inspected beyond the sample row's length.

Resolution rules:
- ``has_order`` iff the ``order`` role is bound
- category levels come from ``category`` + ``columns`` bindings, clamped to
  the cells actually available in the sample row (``max_cats_from_data``)
- a bound ``columns`` role forces at least one level even when the data
  seems to leave no room for it
"""

__all__ = [
    "MIN_ROW_CELLS",
    "resolve_layout",
    "validate_row",
    "query_columns",
    "measure_label",
]

logger = logging.getLogger(__name__)

MIN_ROW_CELLS = 3


def measure_label(
    field: SlotField, language: str, localize_fn: Callable[[Any, str], str] = localize
) -> str:
    text = localize_fn(field.label, language) if field.label is not None else ""
    return text or field.column


def resolve_layout(
    slots: SlotBindings,
    sample_row: Sequence[Any],
    *,
    language: str = "en",
    localize_fn: Callable[[Any, str], str] = localize,
) -> ColumnLayout:
    """Derive the ColumnLayout for rows shaped like ``sample_row``.

    Raises:
        LayoutError: the row has fewer than MIN_ROW_CELLS cells, or no
            measure is bound.
    """
    if len(sample_row) < MIN_ROW_CELLS:
        raise LayoutError(
            f"insufficient columns: row has {len(sample_row)} cells, "
            f"at least {MIN_ROW_CELLS} required"
        )
    measure_count = len(slots.measure)
    if measure_count == 0:
        raise LayoutError("insufficient columns: no measure bound")

    has_order = len(slots.order) > 0
    base_index = 2 if has_order else 1  # 0: period, 1: order (optional)
    max_cats_from_data = max(0, len(sample_row) - base_index - measure_count)
    cats_from_slots = len(slots.category) + len(slots.columns)
    force_two_level = len(slots.columns) > 0
    if force_two_level:
        levels = min(cats_from_slots, max(1, max_cats_from_data))
    else:
        levels = max(0, min(cats_from_slots or max_cats_from_data, max_cats_from_data))

    layout = ColumnLayout(
        has_order=has_order,
        category_levels=levels,
        measure_count=measure_count,
        measure_labels=tuple(measure_label(f, language, localize_fn) for f in slots.measure),
        category_types=tuple(f.type for f in slots.category_fields[:levels]),
    )
    logger.debug(
        f"layout resolved: order={has_order} levels={levels} "
        f"measures={list(layout.output_measures)} (slots={cats_from_slots}, data={max_cats_from_data})"
    )
    return layout


def validate_row(row: Sequence[Any], layout: ColumnLayout, index: int = 0) -> None:
    """Check one row against the layout's cell count.

    Raises:
        LayoutError: row shorter than MIN_ROW_CELLS or not exactly
            ``layout.row_length`` cells long.
    """
    if len(row) < MIN_ROW_CELLS:
        raise LayoutError(
            f"row {index}: insufficient columns ({len(row)} cells, at least {MIN_ROW_CELLS} required)"
        )
    if len(row) != layout.row_length:
        raise LayoutError(
            f"row {index}: expected {layout.row_length} cells "
            f"(period + {'order + ' if layout.has_order else ''}"
            f"{layout.category_levels} categories + {layout.measure_count} measures), got {len(row)}"
        )


def query_columns(slots: SlotBindings) -> list[str]:
    """Bound input columns in the order rows must present them."""
    return [field.column for role in SLOT_ROLES for field in slots.fields(role)]
