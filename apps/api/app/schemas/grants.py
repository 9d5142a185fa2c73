from typing import Literal

from openpayments_sdk.types import InteractFinish
from pydantic import Field

from app.schemas.common import AmountModel, ApiModel, ApiResponse, ConfiguredRequest


class AuthServerGrantRequest(ConfiguredRequest):
    auth_server_url: str = Field(min_length=1)


class InteractFinishModel(ApiModel):
    method: Literal["redirect"] = "redirect"
    uri: str = Field(min_length=1)
    nonce: str = Field(min_length=1)

    def to_finish(self) -> InteractFinish:
        return {"method": self.method, "uri": self.uri, "nonce": self.nonce}


class OutgoingGrantRequest(AuthServerGrantRequest):
    wallet_address_id: str = Field(min_length=1)
    debit_amount: AmountModel
    require_interaction: bool = True
    finish: InteractFinishModel | None = None


class ContinueGrantRequest(ConfiguredRequest):
    continue_uri: str = Field(min_length=1)
    continue_access_token: str = Field(min_length=1)
    interact_ref: str | None = None


class RevokeGrantRequest(ConfiguredRequest):
    grant_url: str = Field(min_length=1)
    access_token: str = Field(min_length=1)


class GrantResponse(ApiResponse):
    is_finalized: bool
    is_pending: bool
