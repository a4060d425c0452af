import logging

from academy.core.logging import CorrelationIdFilter
from academy.core.middleware import correlation_id_var


def test_health_generates_correlation_id(client):
    r = client.get("/api/health")

    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    assert r.headers["X-Correlation-Id"] == r.json()["request_id"]


def test_health_echoes_incoming_correlation_id(client):
    r = client.get("/api/health", headers={"X-Correlation-Id": "abc-123"})

    assert r.headers["X-Correlation-Id"] == "abc-123"
    assert r.json()["request_id"] == "abc-123"


def test_validation_errors_use_error_envelope(client):
    r = client.post("/api/register", json={"name": "Grace"})

    assert r.status_code == 400
    body = r.json()
    assert body["error"] == "Validation failed"
    assert "email" in body["details"]


def test_log_records_pick_up_active_correlation_id():
    record = logging.LogRecord("academy", logging.INFO, __file__, 1, "msg", None, None)
    token = correlation_id_var.set("cid-1")
    try:
        CorrelationIdFilter().filter(record)
    finally:
        correlation_id_var.reset(token)

    assert record.correlation_id == "cid-1"


def test_session_factory_follows_settings():
    from academy.core.config import get_settings
    from academy.db.session import SessionLocal, engine

    assert str(engine.url) == get_settings().database_url
    assert SessionLocal.kw["expire_on_commit"] is False
    assert SessionLocal.kw["autoflush"] is False
