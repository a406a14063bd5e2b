"""fintable: hierarchical period summaries (subtotals, grand total, cumulative columns)."""

__version__ = "0.1.0"
