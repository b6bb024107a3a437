import logging

from fastapi.testclient import TestClient

from bid_engines.server import create_app


def test_app_mounts_engine_routes():
    client = TestClient(create_app())
    paths = set(client.get("/openapi.json").json()["paths"])

    assert {
        "/health",
        "/pricing/configs",
        "/service-costs/calculate",
        "/site-estimates/compute",
        "/bids/recalculate",
    } <= paths


def test_health():
    client = TestClient(create_app())
    assert client.get("/health").json() == {"status": "ok"}


def test_startup_logs_environment(monkeypatch, caplog):
    monkeypatch.setenv("ENV", "staging")
    with caplog.at_level(logging.INFO, logger="bid_engines.server"):
        create_app()
    assert "env=staging" in caplog.text
