import asyncio
import json
from pathlib import Path
from urllib.parse import parse_qs, urlparse

import pytest
from fastapi.testclient import TestClient

from app.core.dependencies import get_sales_ledger
from app.main import app
from app.modules.referral.service import ReferralSalesLedger
from app.tests.fakes import REFERRER_WALLET, SELLER_WALLET, FakeOpenPayments


def _finalized(token: str) -> dict[str, object]:
    return {"access_token": {"value": token, "manage": f"https://auth.test/token/{token}"}}


@pytest.fixture
def referral_upstream(upstream: FakeOpenPayments) -> FakeOpenPayments:
    upstream.add_wallet(SELLER_WALLET)
    upstream.add_wallet(REFERRER_WALLET)
    upstream.add("POST", SELLER_WALLET["authServer"], (200, _finalized("seller-token")))
    upstream.add("POST", REFERRER_WALLET["authServer"], (200, _finalized("referrer-token")))
    upstream.add(
        "POST",
        f"{SELLER_WALLET['resourceServer']}/incoming-payments",
        (201, {"id": f"{SELLER_WALLET['resourceServer']}/incoming-payments/ip-seller"}),
    )
    upstream.add(
        "POST",
        f"{REFERRER_WALLET['resourceServer']}/incoming-payments",
        (201, {"id": f"{REFERRER_WALLET['resourceServer']}/incoming-payments/ip-referrer"}),
    )
    return upstream


def _link_query(link: str) -> dict[str, str]:
    return {key: values[0] for key, values in parse_qs(urlparse(link).query).items()}


def test_referral_link_splits_price_between_seller_and_referrer(
    client: TestClient, referral_upstream: FakeOpenPayments, transactions_path: Path
) -> None:
    response = client.get(
        "/api/referral/link", params={"productId": "1", "refererId": REFERRER_WALLET["id"]}
    )

    assert response.status_code == 200
    payload = response.json()
    seller_query = _link_query(payload["sellerPaymentLink"])
    referral_query = _link_query(payload["referralPaymentLink"])
    assert seller_query == {
        "receiver": f"{SELLER_WALLET['resourceServer']}/incoming-payments/ip-seller",
        "amount": "950",
    }
    assert referral_query["amount"] == "50"

    seller_body = referral_upstream.json_bodies("POST", f"{SELLER_WALLET['resourceServer']}/incoming-payments")[0]
    assert seller_body["walletAddress"] == SELLER_WALLET["id"]
    assert seller_body["incomingAmount"] == {"value": "950", "assetCode": "USD", "assetScale": 2}
    assert seller_body["metadata"]["description"] == "Sale of Space helmet (seller share)"

    referral_body = referral_upstream.json_bodies(
        "POST", f"{REFERRER_WALLET['resourceServer']}/incoming-payments"
    )[0]
    assert referral_body["incomingAmount"]["value"] == "50"

    records = json.loads(transactions_path.read_text(encoding="utf-8"))
    assert len(records) == 1
    record = records[0]
    assert record["transactionId"].startswith("ref_1_")
    assert record["split"] == {"total": 1000, "sellerPercentage": 95, "referralPercentage": 5}
    assert record["refererId"] == REFERRER_WALLET["id"]
    assert "accessTokens" not in record


def test_referral_link_rounds_seller_share_down(
    client: TestClient, referral_upstream: FakeOpenPayments, transactions_path: Path
) -> None:
    response = client.get(
        "/api/referral/link", params={"productId": "2", "refererId": REFERRER_WALLET["id"]}
    )

    assert response.status_code == 200
    record = json.loads(transactions_path.read_text(encoding="utf-8"))[0]
    assert record["seller"]["amount"] == 1172
    assert record["referral"]["amount"] == 62
    assert record["seller"]["amount"] + record["referral"]["amount"] == record["split"]["total"]


def test_referral_link_uses_grant_tokens_for_each_wallet(
    client: TestClient, referral_upstream: FakeOpenPayments
) -> None:
    client.get("/api/referral/link", params={"productId": "1", "refererId": REFERRER_WALLET["id"]})

    seller_request = referral_upstream.requests_to("POST", f"{SELLER_WALLET['resourceServer']}/incoming-payments")[0]
    referral_request = referral_upstream.requests_to(
        "POST", f"{REFERRER_WALLET['resourceServer']}/incoming-payments"
    )[0]
    assert seller_request.headers["authorization"] == "GNAP seller-token"
    assert referral_request.headers["authorization"] == "GNAP referrer-token"


def test_referral_link_missing_parameters(client: TestClient) -> None:
    response = client.get("/api/referral/link", params={"productId": "1"})

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "MISSING_PARAMETERS"


def test_referral_link_unknown_product(client: TestClient) -> None:
    response = client.get(
        "/api/referral/link", params={"productId": "99", "refererId": REFERRER_WALLET["id"]}
    )

    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "PRODUCT_NOT_FOUND"


def test_referral_link_product_without_seller(client: TestClient) -> None:
    response = client.get(
        "/api/referral/link", params={"productId": "3", "refererId": REFERRER_WALLET["id"]}
    )

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "SELLER_WALLET_MISSING"


def test_referral_link_seller_wallet_lookup_failure(
    client: TestClient, upstream: FakeOpenPayments, transactions_path: Path
) -> None:
    upstream.add_wallet(REFERRER_WALLET)

    response = client.get(
        "/api/referral/link", params={"productId": "1", "refererId": REFERRER_WALLET["id"]}
    )

    assert response.status_code == 502
    detail = response.json()["detail"]
    assert detail["code"] == "WALLET_LOOKUP_FAILED"
    assert detail["branch"] == "seller wallet"
    assert not transactions_path.exists()


def test_referral_link_asset_mismatch(client: TestClient, upstream: FakeOpenPayments) -> None:
    upstream.add_wallet(SELLER_WALLET)
    upstream.add_wallet({**REFERRER_WALLET, "assetCode": "EUR"})

    response = client.get(
        "/api/referral/link", params={"productId": "1", "refererId": REFERRER_WALLET["id"]}
    )

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "ASSET_MISMATCH"


def test_referral_link_pending_grant_requires_interaction(
    client: TestClient, referral_upstream: FakeOpenPayments
) -> None:
    pending = {
        "interact": {"redirect": "https://auth.test/interact/1"},
        "continue": {"uri": "https://auth.test/continue/1", "access_token": {"value": "cont"}},
    }
    referral_upstream.add("POST", SELLER_WALLET["authServer"], (200, pending))

    response = client.get(
        "/api/referral/link", params={"productId": "1", "refererId": REFERRER_WALLET["id"]}
    )

    assert response.status_code == 409
    detail = response.json()["detail"]
    assert detail["code"] == "GRANT_INTERACTION_REQUIRED"
    assert detail["grant"] == pending
    assert referral_upstream.requests_to("POST", f"{SELLER_WALLET['resourceServer']}/incoming-payments") == []


def test_referral_link_rejects_malformed_config(client: TestClient) -> None:
    response = client.get(
        "/api/referral/link",
        params={"productId": "1", "refererId": REFERRER_WALLET["id"], "config": "{not json"},
    )

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "INVALID_CONFIG"


def test_referral_webhook_counts_sales(client: TestClient, sales_path: Path) -> None:
    params = {"productId": "1", "refereralId": "ref-7"}

    first = client.get("/api/referral/webhook", params=params)
    second = client.get("/api/referral/webhook", params=params)
    other = client.get("/api/referral/webhook", params={"productId": "2", "refereralId": "ref-7"})

    assert first.status_code == 200
    assert first.json() == {"success": True, "productId": "1", "refereralId": "ref-7", "count": 1}
    assert second.json()["count"] == 2
    assert other.json()["count"] == 1
    assert len(json.loads(sales_path.read_text(encoding="utf-8"))) == 2


def test_referral_webhook_missing_parameters(client: TestClient) -> None:
    response = client.get("/api/referral/webhook", params={"productId": "1"})

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "MISSING_PARAMETERS"


def test_referral_webhook_writes_outside_event_loop(client: TestClient, sales_path: Path) -> None:
    loop_states: list[bool] = []

    class ObservedLedger(ReferralSalesLedger):
        def record_sale(self, product_id: str, referral_id: str) -> int:
            try:
                asyncio.get_running_loop()
                loop_states.append(True)
            except RuntimeError:
                loop_states.append(False)
            return super().record_sale(product_id, referral_id)

    app.dependency_overrides[get_sales_ledger] = lambda: ObservedLedger(sales_path)

    response = client.get("/api/referral/webhook", params={"productId": "1", "refereralId": "ref-7"})

    assert response.status_code == 200
    assert loop_states == [False]
