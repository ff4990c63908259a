"""
DataStore — In-memory dataset: raw rows for the table view, normalized
records for the aggregation core.

Loaded once at startup; every query re-scans the records.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional, Sequence

from stockview.config import BASE_FOLDER, DATA_FILE
from stockview.data.loader import DatasetLoadError, RawRow, discover_csvs, load_csv
from stockview.data.normalize import normalize
from stockview.data.schemas import StockRecord

logger = logging.getLogger(__name__)


class DataStore:
    """Session-owned dataset. Records are read-only once loaded."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.path: Optional[Path] = Path(path) if path else None
        self.rows: list[RawRow] = []
        self.columns: list[str] = []
        self.records: list[StockRecord] = []
        self.load_error: Optional[str] = None
        self.reload_error: Optional[str] = None
        self._loaded = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _resolve_path(self) -> Path:
        if self.path is not None:
            return self.path
        if DATA_FILE.is_file():
            return DATA_FILE
        # Fall back to the newest CSV dropped in the data folder
        candidates = discover_csvs(BASE_FOLDER)
        return candidates[0] if candidates else DATA_FILE

    def load(self) -> "DataStore":
        """Read and normalize the dataset file. Raises DatasetLoadError.

        A failed first load sets ``load_error`` and leaves the store empty.
        A failed reload keeps the last good dataset and sets ``reload_error``.
        """
        path = self._resolve_path()
        try:
            rows, columns = load_csv(path)
        except DatasetLoadError as exc:
            if self._loaded:
                self.reload_error = str(exc)
            else:
                self.load_error = str(exc)
            raise
        self.path = path
        return self.load_rows(rows, columns)

    def load_rows(
        self,
        rows: Sequence[Mapping[str, str]],
        columns: Sequence[str] | None = None,
    ) -> "DataStore":
        """Replace the dataset with already-parsed raw rows."""
        self.rows = [dict(r) for r in rows]
        if columns is None:
            seen: dict[str, None] = {}
            for r in self.rows:
                seen.update(dict.fromkeys(r))
            columns = list(seen)
        self.columns = list(columns)
        self.records = normalize(self.rows)
        self.load_error = None
        self.reload_error = None
        self._loaded = True

        bad_years = sum(1 for r in self.records if not r.has_valid_year)
        if bad_years:
            logger.warning("%s rows have a non-numeric year and fall outside yearly totals", bad_years)
        logger.info("Normalized %s records", f"{len(self.records):,}")
        return self

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    # ------------------------------------------------------------------
    # Metadata queries
    # ------------------------------------------------------------------

    def row_count(self) -> int:
        return len(self.records)

    def years(self) -> list[int]:
        """Distinct valid years, ascending."""
        return sorted({int(r.year) for r in self.records if r.has_valid_year})

    def regions(self) -> list[str]:
        return sorted({r.region for r in self.records})

    def categories(self) -> list[str]:
        return sorted({r.category for r in self.records})

    def stocks(self) -> list[str]:
        return sorted({r.stock for r in self.records})

    def units(self) -> list[str]:
        return sorted({r.unit for r in self.records if r.unit})
