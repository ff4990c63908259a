"""
Typed records, selection/highlight state, and aggregate entry schemas.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StockRecord:
    """One normalized dataset row.

    ``year`` and ``value`` hold ``float('nan')`` when the raw field did not
    parse; such records are kept, never dropped.
    """
    year: Union[int, float]
    stock: str
    region: str
    category: str
    value: float
    unit: str = ""

    @property
    def has_valid_year(self) -> bool:
        return not (isinstance(self.year, float) and math.isnan(self.year))

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "stock": self.stock,
            "region": self.region,
            "category": self.category,
            "value": self.value,
            "unit": self.unit,
        }


# ---------------------------------------------------------------------------
# Selection & highlight
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Selection:
    """Durable user filter. ``None`` means the dimension is unconstrained."""
    year: Optional[int] = None
    region: Optional[str] = None
    category: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.year is None and self.region is None and self.category is None

    @property
    def label(self) -> str:
        """Human-readable label for report subtitles."""
        parts = []
        if self.year is not None:
            parts.append(str(self.year))
        if self.region is not None:
            parts.append(self.region)
        if self.category is not None:
            parts.append(self.category)
        return " / ".join(parts) if parts else "All records"

    def to_dict(self) -> dict:
        return {"year": self.year, "region": self.region, "category": self.category}


class HighlightKind(str, Enum):
    YEAR = "year"
    REGION = "region"


@dataclass(frozen=True)
class Highlight:
    """Ephemeral hover selection over one dimension."""
    kind: HighlightKind
    value: Union[int, str]

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "value": self.value}


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class YearlyAggregate:
    year: int
    value: float
    highlighted_value: Optional[float] = None

    def to_dict(self) -> dict:
        d = {"year": self.year, "value": self.value}
        if self.highlighted_value is not None:
            d["highlighted_value"] = self.highlighted_value
        return d


@dataclass(frozen=True)
class RegionalAggregate:
    region: str
    value: float
    highlighted_value: Optional[float] = None

    def to_dict(self) -> dict:
        d = {"region": self.region, "value": self.value}
        if self.highlighted_value is not None:
            d["highlighted_value"] = self.highlighted_value
        return d


@dataclass(frozen=True)
class HierarchyNode:
    """Category node (with stock children) or stock leaf (no children)."""
    name: str
    value: float
    children: tuple[HierarchyNode, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        d = {"name": self.name, "value": self.value}
        if self.children:
            d["children"] = [c.to_dict() for c in self.children]
        return d


@dataclass(frozen=True)
class YearDetail:
    """Per-year total plus the number of distinct contributing regions."""
    year: int
    value: float
    regions: int

    def to_dict(self) -> dict:
        return {"year": self.year, "value": self.value, "regions": self.regions}
