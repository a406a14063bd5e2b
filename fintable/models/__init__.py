"""Domain models for the fintable summary engine and its batch runner."""

from .column_schema import ColumnSchema, ColumnSpec
from .config_models import RollupConfig, SlotBindings, SlotField, SnapshotPeriod, SummaryConfig
from .layout import CUMUL_LABEL, DEFAULT_SEPARATOR, GAP_LABEL, CategoryKey, ColumnLayout
from .pivot_result import AMBIGUOUS_ORDER, MISSING_VALUE, PivotResult, PivotWarning
from .summary_record import RecordKind, SummaryRecord

__all__ = [
    # Configuration models
    "RollupConfig",
    "SlotBindings",
    "SlotField",
    "SnapshotPeriod",
    "SummaryConfig",
    # Engine models
    "CategoryKey",
    "ColumnLayout",
    "ColumnSchema",
    "ColumnSpec",
    "PivotResult",
    "PivotWarning",
    "RecordKind",
    "SummaryRecord",
    # Constants
    "AMBIGUOUS_ORDER",
    "CUMUL_LABEL",
    "DEFAULT_SEPARATOR",
    "GAP_LABEL",
    "MISSING_VALUE",
]
