"""
Raw table helpers — column typing, default visible columns, per-column charts.
"""
from __future__ import annotations

import re
from typing import Mapping, Sequence

from stockview.config import INITIAL_VISIBLE_COLUMNS, PRIORITY_COLUMNS, UNKNOWN_LABEL

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


def is_numeric_text(value) -> bool:
    """Whole-string numeric check; blank counts as numeric (reads as 0)."""
    if value is None:
        return False
    text = str(value).strip()
    return text == "" or bool(_NUMBER_RE.match(text))


def to_number(value) -> float:
    """Numeric value of a cell, 0.0 when blank or non-numeric."""
    if value is None:
        return 0.0
    text = str(value).strip()
    if not text or not _NUMBER_RE.match(text):
        return 0.0
    return float(text)


# ---------------------------------------------------------------------------
# Column classification (sampled from the first row)
# ---------------------------------------------------------------------------

def numeric_columns(rows: Sequence[Mapping[str, str]], columns: Sequence[str]) -> list[str]:
    if not rows:
        return []
    sample = rows[0]
    return [c for c in columns if is_numeric_text(sample.get(c))]


def categorical_columns(rows: Sequence[Mapping[str, str]], columns: Sequence[str]) -> list[str]:
    if not rows:
        return []
    sample = rows[0]
    return [c for c in columns if not is_numeric_text(sample.get(c))]


def default_visible_columns(columns: Sequence[str]) -> list[str]:
    """Priority columns first (dataset order), topped up to the initial limit."""
    visible = [c for c in columns if c in PRIORITY_COLUMNS]
    if len(visible) < INITIAL_VISIBLE_COLUMNS:
        rest = [c for c in columns if c not in PRIORITY_COLUMNS]
        visible += rest[: INITIAL_VISIBLE_COLUMNS - len(visible)]
    return visible


# ---------------------------------------------------------------------------
# Column chart
# ---------------------------------------------------------------------------

def column_chart(
    rows: Sequence[Mapping[str, str]],
    category_column: str,
    metric_column: str,
) -> list[dict]:
    """Sum ``metric_column`` per value of ``category_column``.

    Blank categories collapse into "Unknown"; non-numeric metrics count as 0.
    Labels appear in first-occurrence order.
    """
    totals: dict[str, float] = {}
    for row in rows:
        label = row.get(category_column) or UNKNOWN_LABEL
        totals[label] = totals.get(label, 0.0) + to_number(row.get(metric_column))
    return [{"label": label, "value": value} for label, value in totals.items()]
