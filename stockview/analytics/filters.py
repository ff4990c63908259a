"""
Filter engine.

Two independent modes:
  - Selection filtering over typed StockRecords (feeds the aggregates).
  - Free-text search + per-column substring filters over raw rows (feeds
    the raw table view).
Neither mode mutates its input; both preserve the relative order of the
surviving items.
"""
from __future__ import annotations

from typing import Mapping, Optional, Sequence

from stockview.data.schemas import Highlight, HighlightKind, Selection, StockRecord


# ---------------------------------------------------------------------------
# Selection filtering (typed records)
# ---------------------------------------------------------------------------

def matches_selection(record: StockRecord, selection: Selection) -> bool:
    if selection.year is not None and record.year != selection.year:
        return False
    if selection.region is not None and record.region != selection.region:
        return False
    if selection.category is not None and record.category != selection.category:
        return False
    return True


def apply_selection(records: Sequence[StockRecord], selection: Selection) -> list[StockRecord]:
    """Records passing every set field of the selection (exact equality)."""
    if selection.is_empty:
        return list(records)
    return [r for r in records if matches_selection(r, selection)]


def apply_highlight(records: Sequence[StockRecord], highlight: Highlight) -> list[StockRecord]:
    """Sub-population matching the highlighted year or region."""
    if highlight.kind == HighlightKind.YEAR:
        return [r for r in records if r.year == highlight.value]
    return [r for r in records if r.region == highlight.value]


# ---------------------------------------------------------------------------
# Raw-row search (table view)
# ---------------------------------------------------------------------------

def _cell(row: Mapping[str, str], column: str) -> str:
    value = row.get(column)
    return "" if value is None else str(value)


def row_matches_search(row: Mapping[str, str], needle: str) -> bool:
    """Case-insensitive substring match against any field of the row."""
    return any(needle in _cell(row, column).lower() for column in row)


def search_rows(
    rows: Sequence[Mapping[str, str]],
    search: str = "",
    column_filters: Optional[Mapping[str, str]] = None,
) -> list[Mapping[str, str]]:
    """Rows matching the free-text search AND every per-column filter.

    Blank or whitespace-only search text and blank filter values do not
    constrain. Non-blank search text is matched untrimmed.
    """
    search = search or ""
    needle = search.lower() if search.strip() else ""
    filters = {
        column: text.lower()
        for column, text in (column_filters or {}).items()
        if text
    }
    if not needle and not filters:
        return list(rows)

    result = []
    for row in rows:
        if needle and not row_matches_search(row, needle):
            continue
        if any(text not in _cell(row, column).lower() for column, text in filters.items()):
            continue
        result.append(row)
    return result
