import httpx
import pytest
from fastapi.testclient import TestClient
from openpayments_sdk.errors import (
    BranchError,
    HttpRequestError,
    KeyNotFoundError,
    PaymentTimeoutError,
    TransportError,
)

from app.core.errors import describe_open_payments_error
from app.tests.fakes import SELLER_WALLET, FakeOpenPayments

WALLET_URL = SELLER_WALLET["id"]


def _wallet_info(client: TestClient) -> httpx.Response:
    return client.post("/api/wallet/info", json={"walletAddressUrl": WALLET_URL})


def test_upstream_client_error_keeps_status(client: TestClient, upstream: FakeOpenPayments) -> None:
    upstream.add("GET", WALLET_URL, (404, {"error": "unknown wallet"}))

    response = _wallet_info(client)

    assert response.status_code == 404
    detail = response.json()["detail"]
    assert detail["code"] == "UPSTREAM_REJECTED"
    assert detail["upstream"] == {"error": "unknown wallet"}


def test_upstream_server_error_is_bad_gateway(client: TestClient, upstream: FakeOpenPayments) -> None:
    upstream.add("GET", WALLET_URL, (503, {"error": "maintenance"}))

    response = _wallet_info(client)

    assert response.status_code == 502
    assert response.json()["detail"]["code"] == "UPSTREAM_ERROR"


def test_unreachable_upstream(client: TestClient, upstream: FakeOpenPayments) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    upstream.add("GET", WALLET_URL, refuse)

    response = _wallet_info(client)

    assert response.status_code == 502
    assert response.json()["detail"]["code"] == "UPSTREAM_UNREACHABLE"


def test_upstream_timeout(client: TestClient, upstream: FakeOpenPayments) -> None:
    def stall(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    upstream.add("GET", WALLET_URL, stall)

    response = _wallet_info(client)

    assert response.status_code == 504
    assert response.json()["detail"]["code"] == "UPSTREAM_TIMEOUT"


def test_missing_signing_key_is_server_error(
    client: TestClient, upstream: FakeOpenPayments, tmp_path
) -> None:
    upstream.add("POST", SELLER_WALLET["authServer"], (200, {"access_token": {"value": "t"}}))
    override = {
        "walletAddressUrl": "https://ilp.test/shop",
        "privateKeyPath": str(tmp_path / "absent.key"),
        "keyId": "k",
    }

    response = client.post(
        "/api/grants/quote", json={"authServerUrl": SELLER_WALLET["authServer"], "config": override}
    )

    assert response.status_code == 500
    assert response.json()["detail"]["code"] == "SIGNING_KEY_UNAVAILABLE"
    assert upstream.requests == []


@pytest.mark.parametrize(
    ("error", "status", "code"),
    [
        (HttpRequestError(method="GET", url="u", status=403, body=None), 403, "UPSTREAM_REJECTED"),
        (HttpRequestError(method="GET", url="u", status=500, body=None), 502, "UPSTREAM_ERROR"),
        (TransportError(method="GET", url="u", reason="boom", is_timeout=True), 504, "UPSTREAM_TIMEOUT"),
        (KeyNotFoundError("private.key"), 500, "SIGNING_KEY_UNAVAILABLE"),
        (PaymentTimeoutError(3, {"id": "p"}), 504, "PAYMENT_TIMEOUT"),
    ],
)
def test_describe_open_payments_error(error: Exception, status: int, code: str) -> None:
    mapped_status, detail = describe_open_payments_error(error)

    assert mapped_status == status
    assert detail["code"] == code


def test_branch_error_names_failing_branch() -> None:
    cause = HttpRequestError(method="POST", url="u", status=401, body={"error": "denied"})

    status, detail = describe_open_payments_error(BranchError("seller grant", cause))

    assert status == 502
    assert detail["code"] == "UPSTREAM_REJECTED"
    assert detail["branch"] == "seller grant"
    assert detail["message"].startswith("seller grant failed: ")


def test_branch_error_with_foreign_cause() -> None:
    status, detail = describe_open_payments_error(BranchError("quote", RuntimeError("bad")))

    assert status == 502
    assert detail == {"code": "UPSTREAM_ERROR", "message": "quote failed: bad", "branch": "quote"}
