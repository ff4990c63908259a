"""
Pydantic request/response schemas for the API.
"""
from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel

from stockview.data.schemas import HighlightKind


class HealthResponse(BaseModel):
    status: str
    rows: int
    years: int
    regions: int
    categories: int
    source: Optional[str] = None
    load_error: Optional[str] = None
    reload_error: Optional[str] = None


class ColumnsResponse(BaseModel):
    columns: list[str]
    visible: list[str]
    numeric: list[str]
    categorical: list[str]


class OptionsResponse(BaseModel):
    years: list[int]
    regions: list[str]
    categories: list[str]
    stocks: list[str]
    units: list[str]


class ChartPoint(BaseModel):
    label: str
    value: float


class ColumnChartResponse(BaseModel):
    category: str
    metric: str
    points: list[ChartPoint]


class SelectRequest(BaseModel):
    """``value: null`` clears that dimension."""
    value: Optional[Union[int, str]] = None


class HighlightRequest(BaseModel):
    kind: HighlightKind
    value: Union[int, str]
