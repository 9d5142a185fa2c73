import json
import logging
import sys

import pytest
from fastapi.testclient import TestClient

from app.observability.logging import JsonLogFormatter, _resolve_level
from app.tests.fakes import SELLER_WALLET, FakeOpenPayments


def _records(caplog: pytest.LogCaptureFixture, event_name: str) -> list[logging.LogRecord]:
    return [record for record in caplog.records if getattr(record, "event_name", None) == event_name]


def test_request_log_carries_request_id(client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    response = client.get("/api/health", headers={"X-Request-Id": "req-123"})

    assert response.headers["X-Request-Id"] == "req-123"
    http_logs = _records(caplog, "http_request")
    assert http_logs
    record = http_logs[-1]
    assert getattr(record, "request_id", None) == "req-123"
    assert getattr(record, "path", None) == "/api/health"
    assert getattr(record, "status", None) == 200
    assert getattr(record, "latency_ms", None) is not None


def test_request_id_generated_when_absent(client: TestClient) -> None:
    first = client.get("/api/health")
    second = client.get("/api/health")

    assert first.headers["X-Request-Id"]
    assert first.headers["X-Request-Id"] != second.headers["X-Request-Id"]


def test_upstream_failure_is_logged(
    client: TestClient, upstream: FakeOpenPayments, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.INFO)
    upstream.add("GET", SELLER_WALLET["id"], (503, {"error": "down"}))

    client.post("/api/wallet/info", json={"walletAddressUrl": SELLER_WALLET["id"]})

    error_logs = _records(caplog, "open_payments_error")
    assert error_logs
    record = error_logs[-1]
    assert getattr(record, "error_kind", None) == "UPSTREAM_ERROR"
    assert getattr(record, "upstream_status", None) == 503
    assert getattr(record, "status", None) == 502


def test_json_formatter_includes_extra_fields() -> None:
    record = logging.LogRecord("openpayments.test", logging.INFO, __file__, 1, "grant_received", None, None)
    record.event_name = "grant_received"
    record.grant_state = "pending"
    record.unrelated = "ignored"

    payload = json.loads(JsonLogFormatter().format(record))

    assert payload["message"] == "grant_received"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "openpayments.test"
    assert payload["grant_state"] == "pending"
    assert "unrelated" not in payload
    assert "timestamp" in payload


def test_json_formatter_renders_exception() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        exc_info = sys.exc_info()
    record = logging.LogRecord("openpayments.test", logging.ERROR, __file__, 1, "failed", None, exc_info)

    payload = json.loads(JsonLogFormatter().format(record))

    assert "RuntimeError: boom" in payload["exception"]


def test_invalid_log_level_falls_back_to_info(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING)

    assert _resolve_level("debug") == logging.DEBUG
    assert _resolve_level("chatty") == logging.INFO

    fallback = _records(caplog, "invalid_log_level_fallback")
    assert fallback
    assert getattr(fallback[-1], "configured_level", None) == "chatty"
