"""
Dashboard workbook — Summary, Yearly, Regional, and Category/Stock sheets
for one derived dashboard view.
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path

from stockview.analytics.aggregate import total_value
from stockview.analytics.selection import DashboardView
from stockview.data.schemas import HighlightKind
from stockview.excel.writer import ExcelWriter


def _yearly_rows(view: DashboardView) -> list[dict]:
    regions = {d.year: d.regions for d in view.year_details}
    return [
        {
            "year": e.year,
            "value": e.value,
            "highlighted_value": e.highlighted_value,
            "regions": regions.get(e.year, 0),
        }
        for e in view.yearly
    ]


def _hierarchy_rows(view: DashboardView) -> list[dict]:
    rows = []
    for node in view.hierarchy:
        rows.append({"category": node.name, "stock": "", "value": node.value, "level": 0})
        for child in node.children:
            rows.append({"category": "", "stock": child.name, "value": child.value, "level": 1})
    return rows


def build_workbook(view: DashboardView, source: str | None = None) -> ExcelWriter:
    """Lay out every sheet for ``view``. Nothing is written to disk."""
    xw = ExcelWriter()
    sel = view.selection
    hl = view.highlight
    total = total_value(view.filtered)
    subtitle = f"{sel.label} | Generated {datetime.now():%Y-%m-%d %H:%M}"
    if source:
        subtitle = f"{source} | {subtitle}"

    # --- Summary ---
    ws = xw.add_sheet("Summary")
    row = xw.write_title(ws, "Fish Stock Assessment Dashboard", subtitle)
    row = xw.write_kpi_row(ws, row, [
        (total, "Total Value", "value"),
        (len(view.filtered), "Records", "count"),
        (len(view.yearly), "Years", "count"),
        (len(view.regional), "Regions", "count"),
    ])
    row = xw.write_section(ws, row, "Active Filters")
    filters = [
        {"filter": "Year", "value": "All" if sel.year is None else sel.year},
        {"filter": "Region", "value": sel.region or "All"},
        {"filter": "Category", "value": sel.category or "All"},
    ]
    if hl is not None:
        filters.append({"filter": f"Highlight ({hl.kind.value})", "value": hl.value})
    xw.write_table(ws, row, [("filter", "text", "Filter"), ("value", "text", "Value")], filters, freeze=False)

    # --- Yearly ---
    ws = xw.add_sheet("By Year")
    cols = [("year", "integer", "Year"), ("value", "value", "Total Value")]
    if hl is not None:
        cols.append(("highlighted_value", "value", "Highlighted Value"))
    cols.append(("regions", "count", "Regions"))

    def _year_fill(_idx: int, r: dict) -> str | None:
        if sel.year == r["year"]:
            return "selected"
        if hl is not None and hl.kind == HighlightKind.YEAR and hl.value == r["year"]:
            return "highlight"
        return None

    # NaN-year records have no yearly bucket, so this total can differ from the grand total
    year_total = float(sum(e.value for e in view.yearly))
    xw.write_table(ws, 1, cols, _yearly_rows(view), highlight_fn=_year_fill, total={"value": year_total})

    # --- Regional ---
    ws = xw.add_sheet("By Region")
    cols = [("region", "text", "Region"), ("value", "value", "Total Value")]
    if hl is not None:
        cols.append(("highlighted_value", "value", "Highlighted Value"))

    def _region_fill(_idx: int, r: dict) -> str | None:
        if sel.region == r["region"]:
            return "selected"
        if hl is not None and hl.kind == HighlightKind.REGION and hl.value == r["region"]:
            return "highlight"
        return None

    xw.write_table(
        ws, 1, cols, [e.to_dict() for e in view.regional],
        highlight_fn=_region_fill, total={"value": total},
    )

    # --- Category / stock ---
    ws = xw.add_sheet("By Category")
    xw.write_table(
        ws, 1,
        [("category", "text", "Category"), ("stock", "child", "Stock"), ("value", "value", "Total Value")],
        _hierarchy_rows(view),
        highlight_fn=lambda _idx, r: "group" if r["level"] == 0 else None,
        total={"value": total},
    )

    return xw


def generate_excel(view: DashboardView, path: str | Path, source: str | None = None) -> Path:
    """Build and save the dashboard workbook. Returns the saved path."""
    return build_workbook(view, source).save(path)
