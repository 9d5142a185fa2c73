from typing import Any

from openpayments_sdk.client import AsyncOpenPaymentsClient
from openpayments_sdk.pagination import pagination_params
from openpayments_sdk.types import OutgoingPayment, PaymentPage, SigningConfig


async def create_outgoing_payment(
    client: AsyncOpenPaymentsClient,
    resource_server_url: str,
    access_token: str,
    *,
    wallet_address: str,
    quote_id: str,
    metadata: dict[str, Any] | None = None,
    signing_config: SigningConfig,
) -> OutgoingPayment:
    body: dict[str, Any] = {"walletAddress": wallet_address, "quoteId": quote_id}
    if metadata:
        body["metadata"] = metadata

    return await client.post(
        f"{resource_server_url.rstrip('/')}/outgoing-payments",
        body,
        access_token=access_token,
        signing_config=signing_config,
    )


async def get_outgoing_payment(
    client: AsyncOpenPaymentsClient,
    outgoing_payment_url: str,
    access_token: str,
    *,
    signing_config: SigningConfig,
) -> OutgoingPayment:
    return await client.get(
        outgoing_payment_url,
        access_token=access_token,
        signing_config=signing_config,
        sign=True,
    )


async def list_outgoing_payments(
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
        f"{resource_server_url.rstrip('/')}/outgoing-payments",
        access_token=access_token,
        signing_config=signing_config,
        sign=True,
        params=pagination_params(
            wallet_address=wallet_address, first=first, last=last, cursor=cursor
        ),
    )
