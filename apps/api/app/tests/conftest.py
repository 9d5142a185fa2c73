import json
from collections.abc import Iterator
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient
from nacl.signing import SigningKey
from openpayments_sdk.client import AsyncOpenPaymentsClient
from openpayments_sdk.keys import encode_private_key_pem
from openpayments_sdk.types import SigningConfig

from app.core.dependencies import (
    get_catalog,
    get_default_signing_config,
    get_op_client,
    get_sales_ledger,
    get_transaction_log,
)
from app.main import app
from app.modules.catalog.service import ProductCatalog
from app.modules.referral.service import ReferralSalesLedger, TransactionLog
from app.tests.fakes import CLIENT_WALLET, KEY_ID, SELLER_WALLET, FakeOpenPayments


@pytest.fixture
def signing_key() -> SigningKey:
    return SigningKey.generate()


@pytest.fixture
def signing_config(tmp_path: Path, signing_key: SigningKey) -> SigningConfig:
    key_path = tmp_path / "private.key"
    key_path.write_text(encode_private_key_pem(signing_key), encoding="utf-8")
    return SigningConfig(wallet_address_url=CLIENT_WALLET, private_key_path=str(key_path), key_id=KEY_ID)


@pytest.fixture
def upstream() -> FakeOpenPayments:
    return FakeOpenPayments()


@pytest.fixture
def products_path(tmp_path: Path) -> Path:
    path = tmp_path / "products.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": 1,
                    "title": "Space helmet",
                    "description": "Vintage astronaut helmet",
                    "price": 10,
                    "sellerWalletAddress": SELLER_WALLET["id"],
                },
                {
                    "id": 2,
                    "title": "Star map",
                    "description": "Printed poster of the night sky",
                    "price": 12.34,
                    "sellerWalletAddress": SELLER_WALLET["id"],
                },
                {"id": 3, "title": "Orphan", "description": "No seller", "price": 5},
            ]
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def transactions_path(tmp_path: Path) -> Path:
    return tmp_path / "referral_transactions.json"


@pytest.fixture
def sales_path(tmp_path: Path) -> Path:
    return tmp_path / "referral_sales.json"


@pytest.fixture
def client(
    upstream: FakeOpenPayments,
    signing_config: SigningConfig,
    products_path: Path,
    transactions_path: Path,
    sales_path: Path,
) -> Iterator[TestClient]:
    op_client = AsyncOpenPaymentsClient(transport=httpx.MockTransport(upstream.handler))
    app.dependency_overrides[get_op_client] = lambda: op_client
    app.dependency_overrides[get_default_signing_config] = lambda: signing_config
    app.dependency_overrides[get_catalog] = lambda: ProductCatalog(products_path)
    app.dependency_overrides[get_sales_ledger] = lambda: ReferralSalesLedger(sales_path)
    app.dependency_overrides[get_transaction_log] = lambda: TransactionLog(transactions_path)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
