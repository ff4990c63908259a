"""Stockview — fish-stock assessment aggregates, filters, and dashboard API."""

__version__ = "1.0.0"
