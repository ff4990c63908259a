"""
Raw table helpers: column typing, default visible columns, column charts.
"""
from stockview.analytics.table import (
    categorical_columns,
    column_chart,
    default_visible_columns,
    is_numeric_text,
    numeric_columns,
)


def test_is_numeric_text():
    assert is_numeric_text("2017")
    assert is_numeric_text(" 3.5 ")
    assert is_numeric_text("")
    assert not is_numeric_text("3.5kg")
    assert not is_numeric_text("nan")
    assert not is_numeric_text(None)


def test_columns_classified_from_first_row():
    rows = [
        {"Year": "2017", "SpeciesName": "Gadus morhua", "StockSize": "149000"},
        {"Year": "n/a", "SpeciesName": "Clupea harengus", "StockSize": "x"},
    ]
    columns = ["Year", "SpeciesName", "StockSize", "Missing"]
    assert numeric_columns(rows, columns) == ["Year", "StockSize"]
    assert categorical_columns(rows, columns) == ["SpeciesName", "Missing"]
    assert numeric_columns([], columns) == []


def test_default_visible_columns_prefers_priority_columns():
    columns = ["AssessmentKey", "Year", "SpeciesName", "Purpose", "StockSize", "Fmsy", "Blim", "FishStock"]
    assert default_visible_columns(columns) == [
        "Year", "SpeciesName", "StockSize", "FishStock", "AssessmentKey", "Purpose",
    ]


def test_default_visible_columns_without_priority_columns():
    columns = [f"c{i}" for i in range(10)]
    assert default_visible_columns(columns) == ["c0", "c1", "c2", "c3", "c4", "c5"]


def test_column_chart_sums_per_category():
    rows = [
        {"Area": "North Sea", "StockSize": "10"},
        {"Area": "Irish Sea", "StockSize": "2.5"},
        {"Area": "North Sea", "StockSize": "abc"},
        {"Area": "", "StockSize": "4"},
        {"StockSize": "1"},
    ]
    assert column_chart(rows, "Area", "StockSize") == [
        {"label": "North Sea", "value": 10.0},
        {"label": "Irish Sea", "value": 2.5},
        {"label": "Unknown", "value": 5.0},
    ]
