from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from ..models.config_models import TIMESTAMP_TYPES
from ..models.layout import DEFAULT_SEPARATOR, CategoryKey, ColumnLayout
from .localization import localize, to_timestamp

"""Category Key Builder.

Each category cell becomes a display label; the labels joined with the
separator form the CategoryKey that identifies a leaf record. Level i's label
never depends on level j. Period cells go through period_key so rich cells
(``{"id": ..., "name": ...}``) can key the period axis.
"""

__all__ = [
    "extract_display_value",
    "period_key",
    "category_label",
    "build_category_key",
]

LocalizeFn = Callable[[Any, str], str]


def extract_display_value(cell: Any, language: str, localize_fn: LocalizeFn = localize) -> str:
    """Display text of a cell: name -> label -> id for rich cells, else the scalar."""
    if isinstance(cell, Mapping):
        if cell.get("name"):
            return localize_fn(cell["name"], language)
        if cell.get("label"):
            return localize_fn(cell["label"], language)
        ident = cell.get("id")
        return str(ident if ident is not None else cell)
    if cell is None:
        return ""
    return localize_fn(cell, language)


def period_key(cell: Any, language: str, localize_fn: LocalizeFn = localize) -> Any:
    """Hashable period value of a cell: the id of a rich cell, else the scalar."""
    if isinstance(cell, Mapping):
        ident = cell.get("id")
        if ident is not None:
            return ident
        return extract_display_value(cell, language, localize_fn)
    return cell


def category_label(
    cell: Any,
    level_type: str | None,
    language: str,
    localize_fn: LocalizeFn = localize,
) -> str:
    if level_type in TIMESTAMP_TYPES:
        raw = cell.get("id") if isinstance(cell, Mapping) else cell
        ts = to_timestamp(raw, numeric=True)
        if ts is not None:
            return localize_fn(ts.date().isoformat(), language)
    return extract_display_value(cell, language, localize_fn)


def build_category_key(
    row: Sequence[Any],
    layout: ColumnLayout,
    *,
    language: str = "en",
    localize_fn: LocalizeFn = localize,
    separator: str = DEFAULT_SEPARATOR,
) -> CategoryKey:
    start = layout.category_start
    labels = tuple(
        category_label(row[start + i], layout.category_type(i + 1), language, localize_fn)
        for i in range(layout.category_levels)
    )
    return CategoryKey(key=separator.join(labels), labels=labels)
