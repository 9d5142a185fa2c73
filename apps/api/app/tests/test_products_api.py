import json
import random
from pathlib import Path

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from app.core.config import settings
from app.modules.catalog.service import ProductCatalog, product_price
from app.modules.storage.json_files import read_json_list
from app.schemas.shop import ProductDraft


def test_search_matches_title_or_description(client: TestClient) -> None:
    response = client.post("/api/products", json={"query": "night sky"})

    assert response.status_code == 200
    assert [product["id"] for product in response.json()] == [2]


def test_empty_search_lists_every_product(client: TestClient) -> None:
    response = client.post("/api/products", json={})

    assert response.status_code == 200
    assert len(response.json()) == 3


def test_get_product(client: TestClient) -> None:
    response = client.get("/api/products/1")

    assert response.status_code == 200
    assert response.json()["title"] == "Space helmet"


def test_get_unknown_product(client: TestClient) -> None:
    response = client.get("/api/products/42")

    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "PRODUCT_NOT_FOUND"


def test_add_product_assigns_next_id_and_default_seller(client: TestClient, products_path: Path) -> None:
    response = client.post(
        "/api/products/add",
        json={"product": {"title": "Moon rock", "description": "Replica", "price": "7.50", "color": "grey"}},
    )

    assert response.status_code == 200
    product = response.json()["data"]
    assert product["id"] == 4
    assert product["price"] == 7.5
    assert product["color"] == "grey"
    assert product["sellerWalletAddress"] == settings.op_wallet_address_url
    assert product["image"].startswith("https://picsum.photos/id/")

    stored = json.loads(products_path.read_text(encoding="utf-8"))
    assert stored[-1] == product


def test_add_product_rejects_non_positive_price(client: TestClient) -> None:
    response = client.post("/api/products/add", json={"product": {"title": "Free", "price": 0}})

    assert response.status_code == 422


def test_catalog_add_keeps_explicit_seller(tmp_path: Path) -> None:
    catalog = ProductCatalog(tmp_path / "products.json", rng=random.Random(7))

    product = catalog.add(
        ProductDraft(title="Comet", price="3", seller_wallet_address="https://ilp.test/comet"),
        default_seller_wallet="https://ilp.test/shop",
    )

    assert product["id"] == 1
    assert product["price"] == 3
    assert product["sellerWalletAddress"] == "https://ilp.test/comet"


@pytest.mark.parametrize("price", ["abc", -1, 0, None])
def test_product_price_rejects_invalid_values(price: object) -> None:
    with pytest.raises(HTTPException) as excinfo:
        product_price({"price": price})

    assert excinfo.value.status_code == 400
    assert excinfo.value.detail["code"] == "INVALID_PRICE"


def test_missing_or_blank_json_file_reads_as_empty(tmp_path: Path) -> None:
    blank = tmp_path / "blank.json"
    blank.write_text("  \n", encoding="utf-8")

    assert read_json_list(tmp_path / "absent.json") == []
    assert read_json_list(blank) == []


def test_login_echoes_body(client: TestClient) -> None:
    response = client.post("/api/user/login", json={"email": "a@b.test", "password": "x"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {"email": "a@b.test", "password": "x"}}


def test_health(client: TestClient) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_info_lists_endpoints_by_tag(client: TestClient) -> None:
    response = client.get("/api/info")

    assert response.status_code == 200
    endpoints = response.json()["endpoints"]
    assert "GET /api/referral/link" in endpoints["referral"]
    assert "POST /api/grants/outgoing-payment" in endpoints["grants"]
    assert "GET /api/health" in endpoints["health"]
    listed = {entry for entries in endpoints.values() for entry in entries}
    assert "DELETE /api/tokens/revoke" in listed
    assert len(listed) == sum(len(ops) for ops in client.app.openapi()["paths"].values())
