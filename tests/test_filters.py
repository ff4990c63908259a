"""
Filter engine: selection filtering over records, search over raw rows.
"""
import pytest

from stockview.analytics.aggregate import aggregate_by_year
from stockview.analytics.filters import apply_highlight, apply_selection, search_rows
from stockview.data.normalize import normalize
from stockview.data.schemas import Highlight, HighlightKind, Selection


# ── Selection filtering ──────────────────────────────────────────────────────

def test_empty_selection_returns_equal_new_list(scenario_records):
    result = apply_selection(scenario_records, Selection())
    assert result == scenario_records
    assert result is not scenario_records


def test_select_region_scenario(scenario_records):
    filtered = apply_selection(scenario_records, Selection(region="North"))
    assert [r.stock for r in filtered] == ["Cod", "Herring"]
    assert [e.to_dict() for e in aggregate_by_year(filtered)] == [
        {"year": 2016, "value": 5.0},
        {"year": 2017, "value": 2.0},
    ]


@pytest.mark.parametrize("selection, stocks", [
    (Selection(year=2016), ["Cod", "Haddock"]),
    (Selection(category="Demersal"), ["Cod", "Haddock"]),
    (Selection(year=2016, region="North"), ["Cod"]),
    (Selection(year=2017, region="North", category="Pelagic"), ["Herring"]),
    (Selection(year=2017, category="Demersal"), []),
    (Selection(region="north"), []),
])
def test_selection_is_a_conjunction_of_exact_matches(scenario_records, selection, stocks):
    assert [r.stock for r in apply_selection(scenario_records, selection)] == stocks


def test_selection_is_idempotent(scenario_records):
    selection = Selection(region="North")
    once = apply_selection(scenario_records, selection)
    assert apply_selection(once, selection) == once
    assert apply_selection(scenario_records, selection) == once


def test_nan_year_never_matches_a_selected_year():
    records = normalize([{"year": "bad", "value": "1"}, {"year": "2016", "value": "2"}])
    assert [r.value for r in apply_selection(records, Selection(year=2016))] == [2.0]
    assert len(apply_selection(records, Selection())) == 2


def test_selection_does_not_mutate_source(scenario_records):
    before = list(scenario_records)
    apply_selection(scenario_records, Selection(year=2017))
    assert scenario_records == before


def test_apply_highlight(scenario_records):
    by_year = apply_highlight(scenario_records, Highlight(HighlightKind.YEAR, 2016))
    assert [r.stock for r in by_year] == ["Cod", "Haddock"]
    by_region = apply_highlight(scenario_records, Highlight(HighlightKind.REGION, "South"))
    assert [r.stock for r in by_region] == ["Haddock"]


# ── Raw-row search ───────────────────────────────────────────────────────────

@pytest.fixture
def table_rows():
    return [
        {"SpeciesName": "Gadus morhua", "FishStock": "cod.27.47d20", "Year": "2017", "Area": "North Sea"},
        {"SpeciesName": "Clupea harengus", "FishStock": "her.27.3a47d", "Year": "2017", "Area": "North Sea"},
        {"SpeciesName": "Pleuronectes platessa", "FishStock": "ple.27.7a", "Year": "2016", "Area": "Irish Sea"},
    ]


def test_search_is_case_insensitive_across_fields(table_rows):
    assert [r["FishStock"] for r in search_rows(table_rows, "NORTH")] == ["cod.27.47d20", "her.27.3a47d"]
    assert [r["FishStock"] for r in search_rows(table_rows, "platessa")] == ["ple.27.7a"]
    assert [r["FishStock"] for r in search_rows(table_rows, "2016")] == ["ple.27.7a"]


def test_column_filters_are_anded_with_search(table_rows):
    result = search_rows(table_rows, "sea", {"Year": "2017", "SpeciesName": "GADUS"})
    assert [r["FishStock"] for r in result] == ["cod.27.47d20"]


def test_column_filter_only_checks_its_column(table_rows):
    # "2017" appears only in Year, never in Area
    assert search_rows(table_rows, column_filters={"Area": "2017"}) == []


def test_blank_search_and_filters_do_not_constrain(table_rows):
    assert search_rows(table_rows) == table_rows
    assert search_rows(table_rows, "", {"Year": ""}) == table_rows


def test_whitespace_only_search_does_not_constrain(table_rows):
    assert search_rows(table_rows, "   ") == table_rows
    assert search_rows([{"a": "x"}, {"a": "y"}], " \t") == [{"a": "x"}, {"a": "y"}]


def test_search_text_is_not_trimmed(table_rows):
    # Surrounding spaces are part of the needle
    assert len(search_rows(table_rows, "north sea")) == 2
    assert search_rows(table_rows, " north sea ") == []


def test_missing_column_reads_as_empty(table_rows):
    assert search_rows(table_rows, column_filters={"Unit": "t"}) == []


def test_search_preserves_order_and_input(table_rows):
    snapshot = [dict(r) for r in table_rows]
    result = search_rows(table_rows, "27")
    assert result == table_rows
    assert result is not table_rows
    assert table_rows == snapshot
