"""
FastAPI dependencies — DataStore and session singletons, selection parsing.
"""
from __future__ import annotations

from typing import Optional, Union

from fastapi import HTTPException, Query

from stockview.analytics.selection import SelectionState
from stockview.data.schemas import Highlight, HighlightKind, Selection
from stockview.data.store import DataStore

# ---------------------------------------------------------------------------
# Global singletons (set during startup)
# ---------------------------------------------------------------------------
_store: DataStore | None = None
_session: SelectionState | None = None


def set_store(store: DataStore) -> None:
    """Install the store and start a fresh session over its records."""
    global _store, _session
    _store = store
    _session = SelectionState(store.records)


def get_store() -> DataStore:
    if _store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _store


def get_session() -> SelectionState:
    if _session is None:
        raise HTTPException(503, "Server not initialized yet")
    return _session


# ---------------------------------------------------------------------------
# Query parsing
# ---------------------------------------------------------------------------

def parse_selection(
    year: Optional[int] = Query(None, description="Exact year"),
    region: Optional[str] = Query(None, description="Exact region"),
    category: Optional[str] = Query(None, description="Exact category"),
) -> Selection:
    return Selection(year=year, region=region, category=category)


def coerce_highlight_value(kind: HighlightKind, value: Union[int, str]) -> Union[int, str]:
    """Years compare as integers; regions compare as strings."""
    if kind == HighlightKind.YEAR:
        try:
            return int(value)
        except (TypeError, ValueError):
            raise HTTPException(400, f"Invalid year highlight: {value!r}")
    return str(value)


def parse_highlight(
    highlight_kind: Optional[HighlightKind] = Query(None, description="year|region"),
    highlight_value: Optional[str] = Query(None),
) -> Highlight | None:
    if highlight_kind is None:
        return None
    if highlight_value is None:
        raise HTTPException(400, "highlight_value is required with highlight_kind")
    return Highlight(highlight_kind, coerce_highlight_value(highlight_kind, highlight_value))


def parse_column_filters(
    filter: list[str] = Query([], description="column:text, repeatable"),
) -> dict[str, str]:
    """Parse repeated ``filter=column:text`` params (split on the first colon)."""
    filters: dict[str, str] = {}
    for expr in filter:
        column, sep, text = expr.partition(":")
        if not sep or not column:
            raise HTTPException(400, f"Invalid filter expression: {expr!r}")
        filters[column] = text
    return filters
