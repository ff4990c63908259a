"""
HTTP API contract tests — meta, dashboard, session, and table endpoints.
"""
import pytest
from fastapi.testclient import TestClient

from stockview.data.loader import DatasetLoadError
from stockview.data.store import DataStore
from stockview.main import create_app


# ── Meta ─────────────────────────────────────────────────────────────────────

def test_health(client):
    body = client.get("/api/health").json()
    assert body["status"] == "ok"
    assert body["rows"] == 3
    assert body["years"] == 2
    assert body["regions"] == 2
    assert body["categories"] == 2
    assert body["source"] == "stocks.csv"
    assert body["load_error"] is None


def test_options(client):
    body = client.get("/api/options").json()
    assert body == {
        "years": [2016, 2017],
        "regions": ["North", "South"],
        "categories": ["Demersal", "Pelagic"],
        "stocks": ["Cod", "Haddock", "Herring"],
        "units": ["t"],
    }


def test_columns(client):
    body = client.get("/api/columns").json()
    assert body["columns"] == ["year", "stock", "region", "category", "value", "unit"]
    assert body["visible"] == body["columns"]
    assert body["numeric"] == ["year", "value"]
    assert body["categorical"] == ["stock", "region", "category", "unit"]


def test_reload_rereads_file(client, scenario_csv):
    with scenario_csv.open("a") as fh:
        fh.write("2018,Sprat,East,Pelagic,4,t\n")
    body = client.post("/api/reload").json()
    assert body == {"status": "reloaded", "rows": 4}
    years = [e["year"] for e in client.get("/api/session").json()["yearly"]]
    assert years == [2016, 2017, 2018]


def test_failed_reload_serves_last_good_dataset(client, scenario_csv, scenario_rows):
    scenario_csv.unlink()
    resp = client.post("/api/reload")
    assert resp.status_code == 500
    assert "file not found" in resp.json()["detail"]

    assert client.get("/api/csv").json() == {"data": scenario_rows}
    health = client.get("/api/health").json()
    assert health["status"] == "ok"
    assert health["rows"] == 3
    assert health["load_error"] is None
    assert "file not found" in health["reload_error"]
    assert client.get("/api/session").json()["filtered_count"] == 3


# ── Raw data & stateless aggregates ──────────────────────────────────────────

def test_csv_returns_raw_rows(client, scenario_rows):
    assert client.get("/api/csv").json() == {"data": scenario_rows}


def test_csv_reports_load_failure(tmp_path):
    store = DataStore(tmp_path / "missing.csv")
    with pytest.raises(DatasetLoadError):
        store.load()
    with TestClient(create_app(store)) as c:
        resp = c.get("/api/csv")
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to read CSV file"}
        assert c.get("/api/health").json()["status"] == "empty"


def test_dashboard_unfiltered(client):
    body = client.get("/api/dashboard").json()
    assert body["filtered_count"] == 3
    assert body["highlight"] is None
    assert body["yearly"] == [{"year": 2016, "value": 8.0}, {"year": 2017, "value": 2.0}]
    assert body["regional"] == [{"region": "North", "value": 7.0}, {"region": "South", "value": 3.0}]
    assert body["hierarchy"][0]["name"] == "Demersal"
    assert "filtered" not in body


def test_dashboard_with_selection_and_highlight(client):
    body = client.get(
        "/api/dashboard",
        params={"region": "North", "highlight_kind": "year", "highlight_value": "2016", "include_records": True},
    ).json()
    assert body["selection"] == {"year": None, "region": "North", "category": None}
    assert body["highlight"] == {"kind": "year", "value": 2016}
    assert body["yearly"] == [
        {"year": 2016, "value": 5.0, "highlighted_value": 5.0},
        {"year": 2017, "value": 2.0, "highlighted_value": 0.0},
    ]
    assert [r["stock"] for r in body["filtered"]] == ["Cod", "Herring"]


def test_dashboard_rejects_bad_highlight(client):
    resp = client.get("/api/dashboard", params={"highlight_kind": "year", "highlight_value": "abc"})
    assert resp.status_code == 400
    resp = client.get("/api/dashboard", params={"highlight_kind": "region"})
    assert resp.status_code == 400
    resp = client.get("/api/dashboard", params={"highlight_kind": "stock", "highlight_value": "Cod"})
    assert resp.status_code == 422


def test_single_aggregate_endpoints(client):
    assert client.get("/api/yearly", params={"region": "North"}).json() == [
        {"year": 2016, "value": 5.0},
        {"year": 2017, "value": 2.0},
    ]
    assert client.get("/api/regional", params={"year": 2016}).json() == [
        {"region": "North", "value": 5.0},
        {"region": "South", "value": 3.0},
    ]
    assert client.get("/api/hierarchy", params={"category": "Pelagic"}).json() == [
        {"name": "Pelagic", "value": 2.0, "children": [{"name": "Herring", "value": 2.0}]},
    ]


def test_nan_totals_serialize_as_null():
    store = DataStore().load_rows([
        {"year": "2017", "region": "North", "category": "D", "stock": "Cod", "value": "10"},
        {"year": "2017", "region": "North", "category": "D", "stock": "Cod", "value": "abc"},
    ])
    with TestClient(create_app(store)) as c:
        assert c.get("/api/yearly").json() == [{"year": 2017, "value": None}]


# ── Session state machine ────────────────────────────────────────────────────

def test_session_flow(client):
    body = client.post("/api/session/region", json={"value": "North"}).json()
    assert body["selection"]["region"] == "North"
    assert body["yearly"] == [{"year": 2016, "value": 5.0}, {"year": 2017, "value": 2.0}]

    body = client.post("/api/session/year", json={"value": "2016"}).json()
    assert body["selection"] == {"year": 2016, "region": "North", "category": None}
    assert body["filtered_count"] == 1

    body = client.put("/api/session/highlight", json={"kind": "region", "value": "North"}).json()
    assert body["highlight"] == {"kind": "region", "value": "North"}
    assert body["regional"] == [{"region": "North", "value": 5.0, "highlighted_value": 5.0}]

    body = client.post("/api/session/reset").json()
    assert body["selection"] == {"year": None, "region": None, "category": None}
    assert body["highlight"] == {"kind": "region", "value": "North"}
    assert body["regional"] == [
        {"region": "North", "value": 7.0, "highlighted_value": 7.0},
        {"region": "South", "value": 3.0, "highlighted_value": 0.0},
    ]

    body = client.delete("/api/session/highlight").json()
    assert body["highlight"] is None
    assert body["regional"] == [{"region": "North", "value": 7.0}, {"region": "South", "value": 3.0}]


def test_session_category_and_clear(client):
    client.post("/api/session/category", json={"value": "Pelagic"})
    assert client.get("/api/session").json()["filtered_count"] == 1
    body = client.post("/api/session/category", json={"value": None}).json()
    assert body["filtered_count"] == 3


def test_session_rejects_bad_year(client):
    assert client.post("/api/session/year", json={"value": "abc"}).status_code == 400
    resp = client.put("/api/session/highlight", json={"kind": "year", "value": "abc"})
    assert resp.status_code == 400


# ── Raw table ────────────────────────────────────────────────────────────────

def test_table_search_and_filters(client):
    body = client.get("/api/table", params={"search": "NORTH"}).json()
    assert body["total"] == 3
    assert body["count"] == 2
    assert [r["stock"] for r in body["rows"]] == ["Cod", "Herring"]

    body = client.get("/api/table", params=[("search", "north"), ("filter", "category:pel")]).json()
    assert [r["stock"] for r in body["rows"]] == ["Herring"]


def test_table_rejects_bad_filters(client):
    assert client.get("/api/table", params={"filter": "no-colon"}).status_code == 400
    assert client.get("/api/table", params={"filter": "nope:x"}).status_code == 404


def test_table_chart(client):
    body = client.get("/api/table/chart", params={"category": "region", "metric": "value"}).json()
    assert body == {
        "category": "region",
        "metric": "value",
        "points": [{"label": "North", "value": 7.0}, {"label": "South", "value": 3.0}],
    }
    assert client.get("/api/table/chart", params={"category": "x", "metric": "value"}).status_code == 404
