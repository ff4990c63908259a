"""
Meta endpoints: health, columns, options, reload.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from stockview.analytics.selection import SelectionState
from stockview.analytics.table import categorical_columns, default_visible_columns, numeric_columns
from stockview.api.dependencies import get_session, get_store
from stockview.api.response_models import ColumnsResponse, HealthResponse, OptionsResponse
from stockview.data.loader import DatasetLoadError
from stockview.data.store import DataStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: DataStore = Depends(get_store)):
    return HealthResponse(
        status="ok" if store.is_loaded else "empty",
        rows=store.row_count(),
        years=len(store.years()),
        regions=len(store.regions()),
        categories=len(store.categories()),
        source=store.path.name if store.path else None,
        load_error=store.load_error,
        reload_error=store.reload_error,
    )


@router.get("/columns", response_model=ColumnsResponse)
def list_columns(store: DataStore = Depends(get_store)):
    return ColumnsResponse(
        columns=store.columns,
        visible=default_visible_columns(store.columns),
        numeric=numeric_columns(store.rows, store.columns),
        categorical=categorical_columns(store.rows, store.columns),
    )


@router.get("/options", response_model=OptionsResponse)
def list_options(store: DataStore = Depends(get_store)):
    """Distinct values for the selection pickers."""
    return OptionsResponse(
        years=store.years(),
        regions=store.regions(),
        categories=store.categories(),
        stocks=store.stocks(),
        units=store.units(),
    )


@router.post("/reload")
def reload_data(
    store: DataStore = Depends(get_store),
    session: SelectionState = Depends(get_session),
):
    """Re-read the dataset file and swap the session's records."""
    try:
        store.load()
    except DatasetLoadError as exc:
        logger.error("Reload failed: %s", exc)
        raise HTTPException(500, str(exc))
    session.set_records(store.records)
    return {"status": "reloaded", "rows": store.row_count()}
