"""
CSV loading — dataset file or CSV text → raw string rows.
"""
from __future__ import annotations

import io
import logging
from pathlib import Path

import pandas as pd

from stockview.config import DATA_FILE

logger = logging.getLogger(__name__)

RawRow = dict[str, str]


class DatasetLoadError(RuntimeError):
    """The dataset file could not be found or parsed."""

    def __init__(self, path: Path | str | None, reason: str) -> None:
        self.path = path
        self.reason = reason
        where = f" ({path})" if path else ""
        super().__init__(f"Failed to read CSV file{where}: {reason}")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _frame_to_rows(df: pd.DataFrame) -> tuple[list[RawRow], list[str]]:
    """Every cell as a string, columns in file order."""
    columns = [str(c) for c in df.columns]
    df.columns = columns
    return df.to_dict("records"), columns


def _read(source, path: Path | str | None) -> tuple[list[RawRow], list[str]]:
    try:
        df = pd.read_csv(source, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError:
        return [], []
    except (pd.errors.ParserError, UnicodeDecodeError, ValueError) as exc:
        raise DatasetLoadError(path, str(exc)) from exc
    return _frame_to_rows(df)


def parse_csv_text(text: str) -> tuple[list[RawRow], list[str]]:
    """Parse CSV content already in memory (e.g. an uploaded file)."""
    return _read(io.StringIO(text), None)


def load_csv(path: Path | str = DATA_FILE) -> tuple[list[RawRow], list[str]]:
    """Load one dataset file. Returns (rows, columns)."""
    path = Path(path)
    if not path.is_file():
        raise DatasetLoadError(path, "file not found")
    rows, columns = _read(path, path)
    logger.info("Loaded %s rows x %s columns from %s", f"{len(rows):,}", len(columns), path.name)
    return rows, columns


def discover_csvs(folder: Path) -> list[Path]:
    """CSV files directly under a folder, newest first."""
    if not folder.is_dir():
        return []
    return sorted(folder.glob("*.csv"), key=lambda p: p.stat().st_mtime, reverse=True)
