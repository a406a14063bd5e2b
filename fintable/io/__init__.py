"""Tabular input / output for the batch runner (pandas based)."""
