"""
Stockview — Configuration: paths, field names, table defaults, logging.
"""
import logging
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths, overridable with STOCKVIEW_DATA_DIR / STOCKVIEW_DATA_FILE env vars
# ---------------------------------------------------------------------------
DEFAULT_CSV_NAME = "UK_ICES_fish_stock_and_shellfish_stock_assessment_data_2017.csv"

_data_dir = Path(os.environ.get("STOCKVIEW_DATA_DIR", str(Path.cwd() / "data")))
BASE_FOLDER = _data_dir
EXPORTS_FOLDER = _data_dir / "exports"
DATA_FILE = Path(os.environ.get("STOCKVIEW_DATA_FILE", str(_data_dir / DEFAULT_CSV_NAME)))

# ---------------------------------------------------------------------------
# Logical record fields and the raw column names accepted for each
# (first match wins; the logical name itself is always tried first)
# ---------------------------------------------------------------------------
RECORD_FIELDS = ("year", "stock", "region", "category", "value", "unit")

FIELD_ALIASES = {
    "year": ("Year",),
    "stock": ("FishStock",),
    "region": ("Region",),
    "category": ("Category",),
    "value": ("StockSize",),
    "unit": ("StockSizeUnits",),
}

# ---------------------------------------------------------------------------
# Raw table view
# ---------------------------------------------------------------------------
PRIORITY_COLUMNS = [
    "SpeciesName",
    "Year",
    "StockSize",
    "StockSizeUnits",
    "FishStock",
    "StockDescription",
    "ICES Areas (tilde delimited)",
]
INITIAL_VISIBLE_COLUMNS = 6
UNKNOWN_LABEL = "Unknown"

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.environ.get("STOCKVIEW_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Attach a single stream handler to the root logger (idempotent)."""
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
