from __future__ import annotations

"""Engine error taxonomy.

LayoutError and EmptyInputError are recoverable by the caller (render a
placeholder such as "Fill in all the columns" / "No data available"). Every
other anomaly degrades to a best-effort numeric result plus a PivotWarning.
"""

__all__ = [
    "PivotError",
    "LayoutError",
    "EmptyInputError",
]


class PivotError(Exception):
    """Base exception for summary engine errors."""


class LayoutError(PivotError):
    """Row shape does not match the column layout (or is below the minimum)."""


class EmptyInputError(PivotError):
    """No input rows: nothing to summarize."""
