from pydantic import Field

from app.schemas.common import ConfiguredRequest


class WalletInfoRequest(ConfiguredRequest):
    wallet_address_url: str = Field(min_length=1)


class WalletValidateRequest(ConfiguredRequest):
    wallet_addresses: list[str]
