"""Aggregation, filtering, and selection state."""
from .aggregate import aggregate_by_region, aggregate_by_year, aggregate_hierarchy, summarize_years
from .filters import apply_highlight, apply_selection, search_rows
from .selection import DashboardView, SelectionState, derive_view
