from typing import Any

from pydantic import Field

from app.schemas.common import AmountModel, ApiModel, ConfiguredRequest, PaginationModel


class AuthorizedRequest(ConfiguredRequest):
    access_token: str = Field(min_length=1)


class IncomingPaymentDetails(ApiModel):
    wallet_address: str = Field(min_length=1)
    incoming_amount: AmountModel | None = None
    description: str | None = None
    external_ref: str | None = None
    expires_at: str | None = None


class CreateIncomingPaymentRequest(AuthorizedRequest):
    resource_server_url: str = Field(min_length=1)
    payment_details: IncomingPaymentDetails


class IncomingPaymentLookup(AuthorizedRequest):
    incoming_payment_url: str = Field(min_length=1)


class WaitForIncomingPaymentRequest(IncomingPaymentLookup):
    max_attempts: int | None = Field(default=None, ge=1, le=300)
    interval_seconds: float | None = Field(default=None, ge=0)


class ListPaymentsRequest(AuthorizedRequest):
    wallet_address_url: str = Field(min_length=1)
    pagination: PaginationModel = Field(default_factory=PaginationModel)


class QuoteDetails(ApiModel):
    wallet_address: str = Field(min_length=1)
    receiver: str = Field(min_length=1)
    method: str = "ilp"
    debit_amount: AmountModel | None = None
    receive_amount: AmountModel | None = None


class CreateQuoteRequest(AuthorizedRequest):
    resource_server_url: str = Field(min_length=1)
    quote_details: QuoteDetails


class QuoteLookup(AuthorizedRequest):
    quote_url: str = Field(min_length=1)


class FixedSendQuoteRequest(AuthorizedRequest):
    resource_server_url: str = Field(min_length=1)
    wallet_address: str = Field(min_length=1)
    receiver: str = Field(min_length=1)
    debit_amount: AmountModel


class FixedReceiveQuoteRequest(AuthorizedRequest):
    resource_server_url: str = Field(min_length=1)
    wallet_address: str = Field(min_length=1)
    receiver: str = Field(min_length=1)
    receive_amount: AmountModel


class OutgoingPaymentDetails(ApiModel):
    wallet_address: str = Field(min_length=1)
    quote_id: str = Field(min_length=1)
    metadata: dict[str, Any] | None = None


class CreateOutgoingPaymentRequest(AuthorizedRequest):
    resource_server_url: str = Field(min_length=1)
    payment_details: OutgoingPaymentDetails


class OutgoingPaymentLookup(AuthorizedRequest):
    outgoing_payment_url: str = Field(min_length=1)


class RotateTokenRequest(ConfiguredRequest):
    token_management_url: str = Field(min_length=1)
    current_access_token: str = Field(min_length=1)


class RevokeTokenRequest(AuthorizedRequest):
    token_management_url: str = Field(min_length=1)


class PaymentLinkRequest(ApiModel):
    receiver: str = Field(min_length=1)
    amount: str | None = None
