"""
Raw row → StockRecord coercion: field lookup, numeric parsing, NaN sentinels.
"""
from __future__ import annotations

import math
from typing import Mapping, Sequence

import numpy as np
import pandas as pd

from stockview.config import FIELD_ALIASES
from stockview.data.schemas import StockRecord

# Leading numeric prefix, the way a lenient parseInt/parseFloat reads a field
_INT_PREFIX = r"^\s*([+-]?\d+)"
_FLOAT_PREFIX = r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"

TEXT_FIELDS = ("stock", "region", "category", "unit")


# ---------------------------------------------------------------------------
# Column lookup
# ---------------------------------------------------------------------------

def _field_column(df: pd.DataFrame, name: str) -> pd.Series:
    """Logical field column, falling back to configured aliases row by row."""
    result = pd.Series(np.nan, index=df.index, dtype="object")
    for column in (name, *FIELD_ALIASES.get(name, ())):
        if column in df.columns:
            result = result.combine_first(df[column])
    return result


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------

def _as_text(series: pd.Series) -> pd.Series:
    return series.where(series.notna(), "").astype(str)


def coerce_int(series: pd.Series) -> pd.Series:
    """Base-10 integer prefix of each value; NaN where there is none."""
    digits = _as_text(series).str.extract(_INT_PREFIX, expand=False)
    return pd.to_numeric(digits, errors="coerce").astype("float64")


def coerce_float(series: pd.Series) -> pd.Series:
    """Decimal prefix of each value; NaN where there is none."""
    number = _as_text(series).str.extract(_FLOAT_PREFIX, expand=False)
    return pd.to_numeric(number, errors="coerce").astype("float64")


def coerce_text(series: pd.Series) -> pd.Series:
    """Copy values verbatim; missing values become empty strings."""
    return series.map(lambda v: "" if v is None or (isinstance(v, float) and math.isnan(v)) else str(v))


def _year(value: float) -> int | float:
    return value if math.isnan(value) else int(value)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def normalize(raw_rows: Sequence[Mapping[str, str]]) -> list[StockRecord]:
    """Convert raw rows into StockRecords, one per row, in input order.

    Never raises for malformed input: unparseable ``year``/``value`` become
    NaN and missing text fields become ``""``.
    """
    if not raw_rows:
        return []

    df = pd.DataFrame([dict(r) for r in raw_rows], index=pd.RangeIndex(len(raw_rows)))

    years = coerce_int(_field_column(df, "year")).tolist()
    values = coerce_float(_field_column(df, "value")).tolist()
    text = {name: coerce_text(_field_column(df, name)).tolist() for name in TEXT_FIELDS}

    return [
        StockRecord(
            year=_year(years[i]),
            stock=text["stock"][i],
            region=text["region"][i],
            category=text["category"][i],
            value=float(values[i]),
            unit=text["unit"][i],
        )
        for i in range(len(raw_rows))
    ]
