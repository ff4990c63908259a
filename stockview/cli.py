#!/usr/bin/env python3
"""
Stockview CLI — dashboard summaries, exports, and the API server.

USAGE:
  python -m stockview.cli summary                                 # All records
  python -m stockview.cli summary --year 2016 --region North      # Filtered
  python -m stockview.cli summary --file path/to/data.csv

  python -m stockview.cli export                                  # Excel to data/exports/
  python -m stockview.cli export --output dash.xlsx --json dash.json
  python -m stockview.cli export --highlight-kind region --highlight-value North

  python -m stockview.cli serve                                   # Start API server
  python -m stockview.cli serve --port 8000
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from datetime import datetime
from pathlib import Path

from stockview.analytics.common import fmt_value, sanitize_for_json
from stockview.analytics.selection import DashboardView, derive_view
from stockview.config import EXPORTS_FOLDER, configure_logging
from stockview.data.loader import DatasetLoadError
from stockview.data.schemas import Highlight, HighlightKind, Selection
from stockview.data.store import DataStore


def _build_selection(args) -> Selection:
    return Selection(
        year=getattr(args, "year", None),
        region=getattr(args, "region", None),
        category=getattr(args, "category", None),
    )


def _build_highlight(args) -> Highlight | None:
    kind = getattr(args, "highlight_kind", None)
    if kind is None:
        return None
    value = args.highlight_value
    if value is None:
        raise SystemExit("--highlight-value is required with --highlight-kind")
    kind = HighlightKind(kind)
    if kind == HighlightKind.YEAR:
        try:
            value = int(value)
        except ValueError:
            raise SystemExit(f"Invalid year highlight: {value!r}")
    return Highlight(kind, value)


def _load(args) -> DataStore:
    store = DataStore(args.file)
    try:
        return store.load()
    except DatasetLoadError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        raise SystemExit(1)


def _print_view(view: DashboardView) -> None:
    highlighted = view.highlight is not None

    print(f"\nBY YEAR ({len(view.yearly)}):\n")
    for e in view.yearly:
        extra = f"   highlighted {fmt_value(e.highlighted_value):>14}" if highlighted else ""
        print(f"  {e.year:<8}{fmt_value(e.value):>16}{extra}")

    print(f"\nBY REGION ({len(view.regional)}):\n")
    for i, e in enumerate(view.regional, 1):
        extra = f"   highlighted {fmt_value(e.highlighted_value):>14}" if highlighted else ""
        print(f"  {i:<4}{e.region[:40]:<42}{fmt_value(e.value):>16}{extra}")

    print(f"\nBY CATEGORY ({len(view.hierarchy)}):\n")
    for node in view.hierarchy:
        print(f"  {node.name[:44]:<46}{fmt_value(node.value):>16}")
        for child in node.children:
            print(f"      {child.name[:40]:<42}{fmt_value(child.value):>16}")


def cmd_summary(args):
    """Print yearly, regional, and category tables."""
    store = _load(args)
    selection = _build_selection(args)
    view = derive_view(store.records, selection, _build_highlight(args))

    print("\n" + "=" * 70)
    print("  STOCKVIEW — DASHBOARD SUMMARY")
    print("=" * 70)
    print(f"  Source:    {store.path}")
    print(f"  Selection: {selection.label}")
    print(f"  Records:   {len(view.filtered):,} of {store.row_count():,}")
    _print_view(view)
    print()


def cmd_export(args):
    """Write the dashboard view to Excel and/or JSON."""
    from stockview.reports.dashboard_report import generate_excel

    store = _load(args)
    view = derive_view(store.records, _build_selection(args), _build_highlight(args))

    output = args.output
    if output is None and args.json is None:
        output = EXPORTS_FOLDER / f"stockview_{datetime.now():%Y%m%d_%H%M%S}.xlsx"

    if output is not None:
        saved = generate_excel(view, output, source=store.path.name if store.path else None)
        print(f"  Excel: {saved}")

    if args.json is not None:
        path = Path(args.json)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = sanitize_for_json(view.to_dict(include_records=args.records))
        path.write_text(json.dumps(payload, indent=2))
        print(f"  JSON:  {path}")


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Stockview API on port {args.port}...")
    uvicorn.run("stockview.main:app", host="0.0.0.0", port=args.port, reload=args.reload,
                timeout_keep_alive=65)


def _add_selection_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--file", help="Dataset CSV (default: STOCKVIEW_DATA_FILE)")
    p.add_argument("--year", type=int, help="Only this year")
    p.add_argument("--region", help="Only this region")
    p.add_argument("--category", help="Only this category")
    p.add_argument("--highlight-kind", choices=[k.value for k in HighlightKind], help="Highlight dimension")
    p.add_argument("--highlight-value", help="Highlighted year or region")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stockview",
        description="Stockview — fish-stock assessment dashboard engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    summary_parser = subparsers.add_parser("summary", help="Print aggregate tables")
    _add_selection_args(summary_parser)
    summary_parser.set_defaults(func=cmd_summary)

    export_parser = subparsers.add_parser("export", help="Export the dashboard view")
    _add_selection_args(export_parser)
    export_parser.add_argument("--output", help="Excel path (default: timestamped file in exports folder)")
    export_parser.add_argument("--json", help="Also write the view as JSON to this path")
    export_parser.add_argument("--records", action="store_true", help="Include filtered records in JSON")
    export_parser.set_defaults(func=cmd_export)

    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return

    configure_logging("WARNING")
    args.func(args)


if __name__ == "__main__":
    main()
