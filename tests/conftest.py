"""
Pytest fixtures for Stockview tests.

Provides the three-record reference dataset as raw rows, normalized records,
a CSV file on disk, a loaded DataStore, and an API client over that store.
"""
import csv
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from stockview.data.normalize import normalize
from stockview.data.store import DataStore
from stockview.main import create_app

COLUMNS = ["year", "stock", "region", "category", "value", "unit"]

SCENARIO_ROWS = [
    {"year": "2016", "stock": "Cod", "region": "North", "category": "Demersal", "value": "5", "unit": "t"},
    {"year": "2016", "stock": "Haddock", "region": "South", "category": "Demersal", "value": "3", "unit": "t"},
    {"year": "2017", "stock": "Herring", "region": "North", "category": "Pelagic", "value": "2", "unit": "t"},
]


def write_csv(path: Path, rows: list[dict], columns: list[str] = COLUMNS) -> Path:
    with path.open("w", newline="") as fh:
        writer = csv.DictWriter(fh, fieldnames=columns)
        writer.writeheader()
        writer.writerows(rows)
    return path


@pytest.fixture
def scenario_rows():
    return [dict(r) for r in SCENARIO_ROWS]


@pytest.fixture
def scenario_records(scenario_rows):
    return normalize(scenario_rows)


@pytest.fixture
def scenario_csv(tmp_path, scenario_rows):
    return write_csv(tmp_path / "stocks.csv", scenario_rows)


@pytest.fixture
def store(scenario_csv):
    return DataStore(scenario_csv).load()


@pytest.fixture
def client(store):
    with TestClient(create_app(store)) as c:
        yield c
