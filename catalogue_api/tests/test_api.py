import json
import logging

from fastapi.testclient import TestClient

from catalogue_api import main as api_main
from catalogue_api.main import create_app
from pattern_catalogue.implementations import behavioral, creational


class Impostor:
    pattern_category = "singleton"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["service"] == "pattern-catalogue-api"
    assert "commit" in body and "version" in body


def test_request_id_is_echoed_or_generated(client):
    response = client.get("/health", headers={"X-Request-ID": "trace-123"})
    assert response.headers["X-Request-ID"] == "trace-123"
    generated = client.get("/health").headers["X-Request-ID"]
    assert generated and generated != "trace-123"
    assert "X-Process-Time" in response.headers


def test_categories_lists_every_category(client):
    response = client.get("/api/catalogue/categories")
    assert response.status_code == 200
    categories = {c["name"]: c for c in response.json()["categories"]}
    assert len(categories) == 23
    assert categories["object-pool"]["family"] == "creational"
    assert categories["redux"]["family"] == "architectural"
    assert "acquire" in categories["object-pool"]["capabilities"]
    assert all(c["entries"] >= 1 for c in categories.values())


def test_list_entries_accepts_any_category_spelling(client):
    response = client.get("/api/catalogue/ObjectPool")
    assert response.status_code == 200
    body = response.json()
    assert body["category"] == "object-pool"
    assert [e["name"] for e in body["entries"]] == ["database-connection", "image"]
    assert body["entries"][0]["checks"][0].startswith("declares the object-pool category")


def test_unknown_category_is_404_with_error_body(client):
    response = client.get("/api/catalogue/not-a-pattern", headers={"X-Request-ID": "t-404"})
    assert response.status_code == 404
    body = response.json()
    assert body["status"] == "error"
    assert body["trace_id"] == "t-404"
    assert body["error"]["code"] == "unknown_category"


def test_verify_builtin_entry(client):
    response = client.post("/api/catalogue/singleton/logger/verify")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    report = body["report"]
    assert report["passed"] is True
    assert report["failed_checks"] == 0
    assert report["checks"][0] == {"description": "construction", "ok": True, "detail": None}


def test_verify_missing_entry_is_404(client):
    response = client.post("/api/catalogue/singleton/nope/verify")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "not_found"


def test_verify_category_reports_failures_as_data(registry, custom_client):
    registry.register("singleton", "impostor", Impostor)
    registry.register("singleton", "shared", creational.singleton_factory(Impostor))

    response = custom_client.post("/api/catalogue/singleton/verify")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "failed"
    assert [r["entry"] for r in body["reports"]] == ["impostor", "shared"]
    assert [r["passed"] for r in body["reports"]] == [False, True]


def test_verify_empty_category_passes(custom_client):
    response = custom_client.post("/api/catalogue/visitor/verify")
    assert response.status_code == 200
    assert response.json()["reports"] == []
    assert response.json()["status"] == "ok"


def test_run_stock_market_scenario(registry, custom_client):
    registry.register(
        "observer",
        "stock-market",
        lambda: behavioral.StockMarket(
            observers={"obs1": behavioral.StockMarketDisplay(), "obs2": behavioral.NewsFeed()}
        ),
    )
    steps = [["subscribe", "obs1"], ["subscribe", "obs2"], ["notify", "AAPL", 150], ["received", "obs1"], ["received", "obs2"]]
    response = custom_client.post("/api/catalogue/observer/stock-market/run", json={"steps": steps})
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["outputs"][3] == [["AAPL", 150]]
    assert body["outputs"][4] == [["AAPL", 150]]


def test_run_exhausted_iterator_returns_partial_outputs(client):
    response = client.post("/api/catalogue/iterator/collection/run", json={"steps": ["next"] * 4})
    assert response.status_code == 409
    body = response.json()
    assert body["status"] == "error"
    assert body["outputs"] == ["Item 1", "Item 2", "Item 3"]
    assert body["failed_step"] == 3
    assert body["error"]["code"] == "exhausted_iterator"
    assert body["trace_id"]


def test_run_unknown_operation_is_400(client):
    response = client.post("/api/catalogue/state/fan/run", json={"steps": ["increase_speed", "explode"]})
    assert response.status_code == 400
    body = response.json()
    assert body["error"]["code"] == "unknown_operation"
    assert body["outputs"] == ["Increasing fan speed to low"]


def test_run_operation_that_raises_is_422(client):
    response = client.post(
        "/api/catalogue/factory/animal/run",
        json={"steps": [{"operation": "create", "args": ["parrot"]}]},
    )
    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "operation_failed"
    assert error["type"] == "ValueError"


def test_run_serialises_objects_with_repr(client):
    response = client.post("/api/catalogue/builder/meal/run", json={"steps": ["build"]})
    assert response.status_code == 200
    assert isinstance(response.json()["outputs"][0], str)


def test_run_invalid_step_is_422(client):
    response = client.post("/api/catalogue/state/fan/run", json={"steps": [7]})
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "invalid_script"


def test_run_missing_body_is_validation_error(client):
    response = client.post("/api/catalogue/state/fan/run", json={})
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "REQUEST_VALIDATION_ERROR"


def test_construction_failure_is_422(registry, custom_client):
    def broken():
        raise RuntimeError("no power")

    registry.register("state", "broken", broken)
    response = custom_client.post("/api/catalogue/state/broken/run", json={"steps": ["change"]})
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "construction_failed"


def test_run_api_can_be_disabled(monkeypatch):
    monkeypatch.setattr(api_main.settings, "enable_run_api", False)
    client = TestClient(create_app())
    response = client.post("/api/catalogue/state/fan/run", json={"steps": ["change"]})
    assert response.status_code == 404
    assert client.post("/api/catalogue/state/fan/verify").status_code == 200


def test_verify_and_run_write_audit_lines(client, caplog):
    caplog.set_level(logging.INFO, logger="audit")
    client.post("/api/catalogue/state/fan/verify", headers={"X-Request-ID": "audit-1"})
    client.post("/api/catalogue/state/fan/run", json={"steps": ["change"]}, headers={"X-Request-ID": "audit-2"})

    lines = [json.loads(r.getMessage()) for r in caplog.records if r.name == "audit"]
    assert [(line["action"], line["trace_id"]) for line in lines] == [("verify", "audit-1"), ("run", "audit-2")]
    assert lines[0]["entry"] == "fan"
    assert lines[1]["http_status"] == 200
