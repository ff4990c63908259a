"""
Session endpoints — drive the server-side selection state machine.

Each mutation returns the freshly derived view so a client can redraw
without a second round trip.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from stockview.analytics.common import sanitize_for_json
from stockview.analytics.selection import SelectionState
from stockview.api.dependencies import coerce_highlight_value, get_session
from stockview.api.response_models import HighlightRequest, SelectRequest

router = APIRouter(prefix="/api/session", tags=["session"])


def _view(session: SelectionState) -> dict:
    return sanitize_for_json(session.view().to_dict())


@router.get("")
def current_view(session: SelectionState = Depends(get_session)):
    return _view(session)


@router.post("/year")
def select_year(body: SelectRequest, session: SelectionState = Depends(get_session)):
    year = None
    if body.value is not None:
        try:
            year = int(body.value)
        except ValueError:
            raise HTTPException(400, f"Invalid year: {body.value!r}")
    session.select_year(year)
    return _view(session)


@router.post("/region")
def select_region(body: SelectRequest, session: SelectionState = Depends(get_session)):
    session.select_region(None if body.value is None else str(body.value))
    return _view(session)


@router.post("/category")
def select_category(body: SelectRequest, session: SelectionState = Depends(get_session)):
    session.select_category(None if body.value is None else str(body.value))
    return _view(session)


@router.post("/reset")
def reset(session: SelectionState = Depends(get_session)):
    session.reset()
    return _view(session)


@router.put("/highlight")
def set_highlight(body: HighlightRequest, session: SelectionState = Depends(get_session)):
    session.set_highlight(body.kind, coerce_highlight_value(body.kind, body.value))
    return _view(session)


@router.delete("/highlight")
def clear_highlight(session: SelectionState = Depends(get_session)):
    session.clear_highlight()
    return _view(session)
