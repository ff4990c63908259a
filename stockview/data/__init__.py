"""Data loading, normalization, and the in-memory dataset store."""
from .loader import DatasetLoadError, load_csv, parse_csv_text
from .normalize import normalize
from .schemas import Highlight, HighlightKind, Selection, StockRecord
from .store import DataStore
