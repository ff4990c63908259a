"""
Selection state machine — durable year/region/category selection plus an
ephemeral hover highlight, with every derived output rebuilt on demand.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from typing import Callable, Optional, Sequence, Union

from stockview.analytics.aggregate import (
    aggregate_by_region,
    aggregate_by_year,
    aggregate_hierarchy,
    merge_highlight_regional,
    merge_highlight_yearly,
    summarize_years,
)
from stockview.analytics.filters import apply_highlight, apply_selection
from stockview.data.schemas import (
    HierarchyNode,
    Highlight,
    HighlightKind,
    RegionalAggregate,
    Selection,
    StockRecord,
    YearDetail,
    YearlyAggregate,
)


@dataclass(frozen=True)
class DashboardView:
    """Snapshot of every output derived from (records, selection, highlight)."""
    selection: Selection
    highlight: Optional[Highlight]
    filtered: tuple[StockRecord, ...]
    yearly: tuple[YearlyAggregate, ...]
    regional: tuple[RegionalAggregate, ...]
    hierarchy: tuple[HierarchyNode, ...]
    year_details: tuple[YearDetail, ...]
    highlighted: Optional[tuple[StockRecord, ...]] = None

    def to_dict(self, include_records: bool = False) -> dict:
        d = {
            "selection": self.selection.to_dict(),
            "highlight": self.highlight.to_dict() if self.highlight else None,
            "filtered_count": len(self.filtered),
            "yearly": [e.to_dict() for e in self.yearly],
            "regional": [e.to_dict() for e in self.regional],
            "hierarchy": [n.to_dict() for n in self.hierarchy],
            "year_details": [e.to_dict() for e in self.year_details],
        }
        if self.highlighted is not None:
            d["highlighted_count"] = len(self.highlighted)
        if include_records:
            d["filtered"] = [r.to_dict() for r in self.filtered]
        return d


def derive_view(
    records: Sequence[StockRecord],
    selection: Selection,
    highlight: Optional[Highlight] = None,
) -> DashboardView:
    """Recompute the filtered set and all aggregates from scratch."""
    filtered = apply_selection(records, selection)
    yearly = aggregate_by_year(filtered)
    regional = aggregate_by_region(filtered)
    highlighted = None

    if highlight is not None:
        highlighted = apply_highlight(filtered, highlight)
        yearly = merge_highlight_yearly(yearly, aggregate_by_year(highlighted))
        regional = merge_highlight_regional(regional, aggregate_by_region(highlighted))

    return DashboardView(
        selection=selection,
        highlight=highlight,
        filtered=tuple(filtered),
        yearly=tuple(yearly),
        regional=tuple(regional),
        hierarchy=tuple(aggregate_hierarchy(filtered)),
        year_details=tuple(summarize_years(filtered)),
        highlighted=tuple(highlighted) if highlighted is not None else None,
    )


Listener = Callable[[DashboardView], None]


class SelectionState:
    """Explicit state container for one dashboard session.

    Mutators replace the (immutable) selection/highlight values under a lock
    and notify subscribers with a freshly derived view. Reads always re-derive
    from a consistent snapshot.
    """

    def __init__(self, records: Sequence[StockRecord] = ()) -> None:
        self._records: tuple[StockRecord, ...] = tuple(records)
        self._selection = Selection()
        self._highlight: Optional[Highlight] = None
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def records(self) -> tuple[StockRecord, ...]:
        return self._records

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def highlight(self) -> Optional[Highlight]:
        return self._highlight

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def set_records(self, records: Sequence[StockRecord]) -> None:
        """Swap in a new source record set (dataset reload)."""
        with self._lock:
            self._records = tuple(records)
        self._notify()

    def select_year(self, year: Optional[int]) -> None:
        with self._lock:
            self._selection = replace(self._selection, year=year)
        self._notify()

    def select_region(self, region: Optional[str]) -> None:
        with self._lock:
            self._selection = replace(self._selection, region=region)
        self._notify()

    def select_category(self, category: Optional[str]) -> None:
        with self._lock:
            self._selection = replace(self._selection, category=category)
        self._notify()

    def reset(self) -> None:
        """Clear year/region/category. The highlight follows the pointer, not the reset."""
        with self._lock:
            self._selection = Selection()
        self._notify()

    def set_highlight(self, kind: Union[HighlightKind, str], value: Union[int, str]) -> None:
        highlight = Highlight(kind=HighlightKind(kind), value=value)
        with self._lock:
            self._highlight = highlight
        self._notify()

    def clear_highlight(self) -> None:
        with self._lock:
            self._highlight = None
        self._notify()

    # ------------------------------------------------------------------
    # Derived outputs
    # ------------------------------------------------------------------

    def _snapshot(self) -> tuple[tuple[StockRecord, ...], Selection, Optional[Highlight]]:
        with self._lock:
            return self._records, self._selection, self._highlight

    @property
    def filtered_data(self) -> list[StockRecord]:
        records, selection, _ = self._snapshot()
        return apply_selection(records, selection)

    def view(self) -> DashboardView:
        return derive_view(*self._snapshot())

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        if not listeners:
            return
        view = self.view()
        for listener in listeners:
            listener(view)
