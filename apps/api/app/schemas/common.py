from typing import Any

from openpayments_sdk.types import Amount, SigningConfig
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SigningConfigOverride(ApiModel):
    wallet_address_url: str = Field(min_length=1)
    private_key_path: str = Field(min_length=1)
    key_id: str = Field(min_length=1)

    def to_signing_config(self) -> SigningConfig:
        return SigningConfig(
            wallet_address_url=self.wallet_address_url,
            private_key_path=self.private_key_path,
            key_id=self.key_id,
        )


class ConfiguredRequest(ApiModel):
    """Base for request bodies that may replace the default signing identity."""

    config: SigningConfigOverride | None = None


class AmountModel(ApiModel):
    value: str = Field(pattern=r"^\d+$")
    asset_code: str = Field(min_length=1)
    asset_scale: int = Field(ge=0, le=255)

    def to_amount(self) -> Amount:
        return {"value": self.value, "assetCode": self.asset_code, "assetScale": self.asset_scale}


class PaginationModel(ApiModel):
    first: int | None = Field(default=None, ge=1)
    last: int | None = Field(default=None, ge=1)
    cursor: str | None = None


class ApiResponse(ApiModel):
    success: bool = True
    data: Any = None
