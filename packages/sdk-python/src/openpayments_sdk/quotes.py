from typing import Any

from openpayments_sdk.client import AsyncOpenPaymentsClient
from openpayments_sdk.types import Amount, Quote, SigningConfig


async def create_quote(
    client: AsyncOpenPaymentsClient,
    resource_server_url: str,
    access_token: str,
    *,
    wallet_address: str,
    receiver: str,
    method: str = "ilp",
    debit_amount: Amount | None = None,
    receive_amount: Amount | None = None,
    signing_config: SigningConfig,
) -> Quote:
    body: dict[str, Any] = {
        "walletAddress": wallet_address,
        "receiver": receiver,
        "method": method or "ilp",
    }
    # A quote fixes either side of the payment, never both.
    if debit_amount is not None:
        body["debitAmount"] = debit_amount
    elif receive_amount is not None:
        body["receiveAmount"] = receive_amount

    return await client.post(
        f"{resource_server_url.rstrip('/')}/quotes",
        body,
        access_token=access_token,
        signing_config=signing_config,
    )


async def get_quote(
    client: AsyncOpenPaymentsClient,
    quote_url: str,
    access_token: str,
    *,
    signing_config: SigningConfig,
) -> Quote:
    return await client.get(
        quote_url,
        access_token=access_token,
        signing_config=signing_config,
        sign=True,
    )


async def create_quote_with_fixed_send(
    client: AsyncOpenPaymentsClient,
    resource_server_url: str,
    access_token: str,
    *,
    wallet_address: str,
    receiver: str,
    debit_amount: Amount,
    signing_config: SigningConfig,
) -> Quote:
    return await create_quote(
        client,
        resource_server_url,
        access_token,
        wallet_address=wallet_address,
        receiver=receiver,
        debit_amount=debit_amount,
        signing_config=signing_config,
    )


async def create_quote_with_fixed_receive(
    client: AsyncOpenPaymentsClient,
    resource_server_url: str,
    access_token: str,
    *,
    wallet_address: str,
    receiver: str,
    receive_amount: Amount,
    signing_config: SigningConfig,
) -> Quote:
    return await create_quote(
        client,
        resource_server_url,
        access_token,
        wallet_address=wallet_address,
        receiver=receiver,
        receive_amount=receive_amount,
        signing_config=signing_config,
    )
