"""
Dashboard endpoints — raw dataset, stateless aggregate views.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from stockview.analytics.aggregate import aggregate_by_region, aggregate_by_year, aggregate_hierarchy
from stockview.analytics.common import sanitize_for_json
from stockview.analytics.filters import apply_selection
from stockview.analytics.selection import derive_view
from stockview.api.dependencies import get_store, parse_highlight, parse_selection
from stockview.data.schemas import Highlight, Selection
from stockview.data.store import DataStore

router = APIRouter(prefix="/api", tags=["dashboard"])


def _safe_json(data) -> JSONResponse:
    return JSONResponse(content=sanitize_for_json(data))


@router.get("/csv")
def raw_dataset(store: DataStore = Depends(get_store)):
    """The dataset as raw string rows (the last good load after a failed reload)."""
    if not store.is_loaded:
        return JSONResponse(status_code=500, content={"error": "Failed to read CSV file"})
    return _safe_json({"data": store.rows})


@router.get("/dashboard")
def dashboard(
    include_records: bool = False,
    store: DataStore = Depends(get_store),
    selection: Selection = Depends(parse_selection),
    highlight: Highlight | None = Depends(parse_highlight),
):
    """Filtered aggregates, with highlighted values when a highlight is given."""
    view = derive_view(store.records, selection, highlight)
    return _safe_json(view.to_dict(include_records=include_records))


@router.get("/yearly")
def yearly(
    store: DataStore = Depends(get_store),
    selection: Selection = Depends(parse_selection),
):
    filtered = apply_selection(store.records, selection)
    return _safe_json([e.to_dict() for e in aggregate_by_year(filtered)])


@router.get("/regional")
def regional(
    store: DataStore = Depends(get_store),
    selection: Selection = Depends(parse_selection),
):
    filtered = apply_selection(store.records, selection)
    return _safe_json([e.to_dict() for e in aggregate_by_region(filtered)])


@router.get("/hierarchy")
def hierarchy(
    store: DataStore = Depends(get_store),
    selection: Selection = Depends(parse_selection),
):
    filtered = apply_selection(store.records, selection)
    return _safe_json([n.to_dict() for n in aggregate_hierarchy(filtered)])
