"""
Raw table endpoints: searchable rows and per-column charts.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from stockview.analytics.filters import search_rows
from stockview.analytics.table import column_chart
from stockview.api.dependencies import get_store, parse_column_filters
from stockview.api.response_models import ColumnChartResponse
from stockview.data.store import DataStore

router = APIRouter(prefix="/api/table", tags=["table"])


def _check_columns(store: DataStore, *columns: str) -> None:
    unknown = [c for c in columns if c not in store.columns]
    if unknown:
        raise HTTPException(404, f"Unknown column(s): {', '.join(unknown)}")


@router.get("")
def table_rows(
    search: str = Query("", description="Case-insensitive text matched against every field"),
    filters: dict[str, str] = Depends(parse_column_filters),
    store: DataStore = Depends(get_store),
):
    """Rows matching the search text AND every column filter."""
    _check_columns(store, *filters)
    rows = search_rows(store.rows, search, filters)
    return {"total": len(store.rows), "count": len(rows), "columns": store.columns, "rows": rows}


@router.get("/chart", response_model=ColumnChartResponse)
def table_chart(
    category: str = Query(..., description="Column to group by"),
    metric: str = Query(..., description="Numeric column to sum"),
    search: str = Query(""),
    filters: dict[str, str] = Depends(parse_column_filters),
    store: DataStore = Depends(get_store),
):
    """Sum of ``metric`` per ``category`` value over the matching rows."""
    _check_columns(store, category, metric, *filters)
    rows = search_rows(store.rows, search, filters)
    return ColumnChartResponse(category=category, metric=metric, points=column_chart(rows, category, metric))
