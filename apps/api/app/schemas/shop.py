from decimal import Decimal
from typing import Any

from pydantic import ConfigDict, Field

from app.schemas.common import ApiModel, ConfiguredRequest


class ProductSearchRequest(ApiModel):
    query: str = ""


class ProductDraft(ApiModel):
    model_config = ConfigDict(extra="allow")

    title: str = Field(min_length=1)
    description: str = ""
    price: Decimal = Field(gt=0)
    seller_wallet_address: str | None = None


class ProductAddRequest(ApiModel):
    product: ProductDraft


class ReferralLinkResponse(ApiModel):
    seller_payment_link: str
    referral_payment_link: str


class ReferralSaleResponse(ApiModel):
    success: bool = True
    product_id: str
    refereral_id: str
    count: int


class CheckoutStartRequest(ConfiguredRequest):
    sender_wallet_address: str = Field(min_length=1)
    receiver_wallet_address: str | None = None
    amount: str = Field(pattern=r"^\d+$")
    finish_uri: str | None = None
    finish_nonce: str | None = None


class CheckoutFinishRequest(ConfiguredRequest):
    continue_uri: str = Field(min_length=1)
    continue_access_token: str = Field(min_length=1)
    interact_ref: str | None = None
    resource_server_url: str = Field(min_length=1)
    wallet_address: str = Field(min_length=1)
    quote_id: str = Field(min_length=1)


class LoginRequest(ApiModel):
    model_config = ConfigDict(extra="allow")

    def echo(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
