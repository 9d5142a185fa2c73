from pathlib import Path

import pytest
from nacl.signing import SigningKey

from openpayments_sdk.keys import encode_private_key_pem
from openpayments_sdk.types import SigningConfig

KEY_ID = "a56111ec-2936-45d7-b17b-9579dc77cfed"
CLIENT_WALLET = "https://ilp.interledger-test.dev/seller_example"


@pytest.fixture
def signing_key() -> SigningKey:
    return SigningKey.generate()


@pytest.fixture
def key_path(tmp_path: Path, signing_key: SigningKey) -> Path:
    path = tmp_path / "private.key"
    path.write_text(encode_private_key_pem(signing_key), encoding="utf-8")
    return path


@pytest.fixture
def signing_config(key_path: Path) -> SigningConfig:
    return SigningConfig(
        wallet_address_url=CLIENT_WALLET,
        private_key_path=str(key_path),
        key_id=KEY_ID,
    )
