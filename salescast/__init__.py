"""Synthetic sales series generation and revenue forecasting."""

__version__ = "0.4.0"
