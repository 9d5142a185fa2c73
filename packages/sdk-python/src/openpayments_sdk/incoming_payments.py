from typing import Any

from openpayments_sdk.client import AsyncOpenPaymentsClient
from openpayments_sdk.pagination import pagination_params
from openpayments_sdk.types import Amount, IncomingPayment, PaymentPage, SigningConfig


async def create_incoming_payment(
    client: AsyncOpenPaymentsClient,
    resource_server_url: str,
    access_token: str,
    *,
    wallet_address: str,
    incoming_amount: Amount | None = None,
    description: str | None = None,
    external_ref: str | None = None,
    expires_at: str | None = None,
    signing_config: SigningConfig,
) -> IncomingPayment:
    body: dict[str, Any] = {"walletAddress": wallet_address}
    if incoming_amount is not None:
        body["incomingAmount"] = incoming_amount
    if description:
        body["metadata"] = {"description": description}
    if external_ref:
        body["externalRef"] = external_ref
    if expires_at:
        body["expiresAt"] = expires_at

    return await client.post(
        f"{resource_server_url.rstrip('/')}/incoming-payments",
        body,
        access_token=access_token,
        signing_config=signing_config,
    )


async def get_incoming_payment(
    client: AsyncOpenPaymentsClient,
    incoming_payment_url: str,
    access_token: str,
    *,
    signing_config: SigningConfig,
) -> IncomingPayment:
    return await client.get(
        incoming_payment_url,
        access_token=access_token,
        signing_config=signing_config,
        sign=True,
    )


async def list_incoming_payments(
    client: AsyncOpenPaymentsClient,
    resource_server_url: str,
    access_token: str,
    *,
    wallet_address: str | None = None,
    first: int | None = None,
    last: int | None = None,
    cursor: str | None = None,
    signing_config: SigningConfig,
) -> PaymentPage:
    return await client.get(
        f"{resource_server_url.rstrip('/')}/incoming-payments",
        access_token=access_token,
        signing_config=signing_config,
        sign=True,
        params=pagination_params(
            wallet_address=wallet_address, first=first, last=last, cursor=cursor
        ),
    )


async def complete_incoming_payment(
    client: AsyncOpenPaymentsClient,
    incoming_payment_url: str,
    access_token: str,
    *,
    signing_config: SigningConfig,
) -> IncomingPayment:
    return await client.post(
        f"{incoming_payment_url.rstrip('/')}/complete",
        access_token=access_token,
        signing_config=signing_config,
    )
