"""
Aggregation engine — yearly, regional, and category→stock totals.

All functions are pure: they take a record sequence and return fresh
entries. Sums propagate NaN, so a single unparseable value poisons its
bucket. Rankings by value are stable (first occurrence wins ties) and
place NaN buckets last.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Sequence

import pandas as pd

from stockview.data.schemas import (
    HierarchyNode,
    RegionalAggregate,
    StockRecord,
    YearDetail,
    YearlyAggregate,
)

_COLUMNS = ["year", "stock", "region", "category", "value"]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def records_frame(records: Sequence[StockRecord]) -> pd.DataFrame:
    """Columnar view of the records, in input order."""
    return pd.DataFrame(
        {
            "year": [r.year for r in records],
            "stock": [r.stock for r in records],
            "region": [r.region for r in records],
            "category": [r.category for r in records],
            "value": pd.Series([r.value for r in records], dtype="float64"),
        },
        columns=_COLUMNS,
    )


def _nan_sum(values: pd.Series) -> float:
    return float(values.sum(skipna=False))


def _rank_desc(totals: pd.Series) -> pd.Series:
    """Largest first; ties keep first-occurrence order; NaN last."""
    return totals.sort_values(ascending=False, kind="stable", na_position="last")


def _with_valid_year(df: pd.DataFrame) -> pd.DataFrame:
    return df[df["year"].notna()]


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------

def aggregate_by_year(records: Sequence[StockRecord]) -> list[YearlyAggregate]:
    """Sum of value per year, ascending by year. NaN years are skipped."""
    if not records:
        return []
    df = _with_valid_year(records_frame(records))
    if df.empty:
        return []
    totals = df.groupby("year", sort=True)["value"].agg(_nan_sum)
    return [YearlyAggregate(year=int(y), value=float(v)) for y, v in totals.items()]


def aggregate_by_region(records: Sequence[StockRecord]) -> list[RegionalAggregate]:
    """Sum of value per region, largest contributor first."""
    if not records:
        return []
    df = records_frame(records)
    totals = _rank_desc(df.groupby("region", sort=False)["value"].agg(_nan_sum))
    return [RegionalAggregate(region=str(r), value=float(v)) for r, v in totals.items()]


def aggregate_hierarchy(records: Sequence[StockRecord]) -> list[HierarchyNode]:
    """Category nodes with stock children, both levels ranked by value.

    A category's value is summed from its records directly rather than
    from its children's totals.
    """
    if not records:
        return []
    df = records_frame(records)

    children: dict[str, tuple[HierarchyNode, ...]] = {}
    for category, group in df.groupby("category", sort=False):
        leaves = _rank_desc(group.groupby("stock", sort=False)["value"].agg(_nan_sum))
        children[category] = tuple(
            HierarchyNode(name=str(s), value=float(v)) for s, v in leaves.items()
        )

    totals = _rank_desc(df.groupby("category", sort=False)["value"].agg(_nan_sum))
    return [
        HierarchyNode(name=str(c), value=float(v), children=children[c])
        for c, v in totals.items()
    ]


def summarize_years(records: Sequence[StockRecord]) -> list[YearDetail]:
    """Per-year total and distinct region count (chart tooltip detail)."""
    if not records:
        return []
    df = _with_valid_year(records_frame(records))
    if df.empty:
        return []
    grouped = df.groupby("year", sort=True).agg(
        value=("value", _nan_sum),
        regions=("region", "nunique"),
    )
    return [
        YearDetail(year=int(y), value=float(row["value"]), regions=int(row["regions"]))
        for y, row in grouped.iterrows()
    ]


# ---------------------------------------------------------------------------
# Highlight merge
# ---------------------------------------------------------------------------

def merge_highlight_yearly(
    base: Sequence[YearlyAggregate],
    highlighted: Sequence[YearlyAggregate],
) -> list[YearlyAggregate]:
    """Attach highlighted sums to base buckets by year; 0.0 where absent."""
    lookup = {e.year: e.value for e in highlighted}
    return [replace(e, highlighted_value=lookup.get(e.year, 0.0)) for e in base]


def merge_highlight_regional(
    base: Sequence[RegionalAggregate],
    highlighted: Sequence[RegionalAggregate],
) -> list[RegionalAggregate]:
    """Attach highlighted sums to base buckets by region; 0.0 where absent."""
    lookup = {e.region: e.value for e in highlighted}
    return [replace(e, highlighted_value=lookup.get(e.region, 0.0)) for e in base]


def total_value(records: Sequence[StockRecord]) -> float:
    """Sum of every record's value (NaN-propagating)."""
    if not records:
        return 0.0
    return _nan_sum(records_frame(records)["value"])
