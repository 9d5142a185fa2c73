import logging
from typing import Any

from openpayments_sdk.client import AsyncOpenPaymentsClient
from openpayments_sdk.concurrency import gather_branches
from openpayments_sdk.grants import (
    Grant,
    continue_grant,
    request_incoming_payment_grant,
    request_outgoing_payment_grant,
    request_quote_grant,
)
from openpayments_sdk.incoming_payments import create_incoming_payment
from openpayments_sdk.outgoing_payments import create_outgoing_payment
from openpayments_sdk.quotes import create_quote
from openpayments_sdk.types import InteractFinish, SigningConfig
from openpayments_sdk.wallet_address import get_wallet_address, require_wallet_fields

from app.core.errors import raise_http_error

logger = logging.getLogger("openpayments.checkout")


def _require_token(grant: Grant, purpose: str) -> str:
    if not grant.is_finalized or grant.access_token is None:
        raise_http_error(
            409,
            "GRANT_INTERACTION_REQUIRED",
            f"{purpose} grant requires user interaction to finalize",
            grant=dict(grant.payload),
        )
    return grant.access_token


async def _pay(
    client: AsyncOpenPaymentsClient,
    *,
    resource_server_url: str,
    access_token: str,
    wallet_address: str,
    quote_id: str,
    signing_config: SigningConfig,
) -> dict[str, Any]:
    payment = await create_outgoing_payment(
        client,
        resource_server_url,
        access_token,
        wallet_address=wallet_address,
        quote_id=quote_id,
        signing_config=signing_config,
    )
    logger.info("checkout_finished", extra={"event_name": "checkout_finished", "grant_state": "finalized"})
    return {"status": "completed", "outgoingPayment": payment}


async def start_checkout(
    client: AsyncOpenPaymentsClient,
    *,
    sender_wallet_url: str,
    receiver_wallet_url: str,
    amount: str,
    signing_config: SigningConfig,
    finish: InteractFinish | None = None,
) -> dict[str, Any]:
    """Prepare a payment of ``amount`` receiver minor units from sender to receiver.

    The payer normally has to approve the outgoing payment grant, so the
    result carries the interaction redirect plus everything
    :func:`finish_checkout` needs afterwards. When the authorization server
    grants immediately the payment is created right away.
    """
    wallets = await gather_branches(
        {
            "sender wallet": get_wallet_address(client, sender_wallet_url),
            "receiver wallet": get_wallet_address(client, receiver_wallet_url),
        }
    )
    sender = require_wallet_fields(
        wallets["sender wallet"], sender_wallet_url, "id", "authServer", "resourceServer"
    )
    receiver = require_wallet_fields(
        wallets["receiver wallet"],
        receiver_wallet_url,
        "id",
        "authServer",
        "resourceServer",
        "assetCode",
        "assetScale",
    )

    incoming_grant = await request_incoming_payment_grant(
        client, receiver["authServer"], signing_config=signing_config
    )
    incoming_payment = await create_incoming_payment(
        client,
        receiver["resourceServer"],
        _require_token(incoming_grant, "Incoming payment"),
        wallet_address=receiver["id"],
        incoming_amount={
            "value": amount,
            "assetCode": receiver["assetCode"],
            "assetScale": receiver["assetScale"],
        },
        signing_config=signing_config,
    )

    quote_grant = await request_quote_grant(client, sender["authServer"], signing_config=signing_config)
    quote = await create_quote(
        client,
        sender["resourceServer"],
        _require_token(quote_grant, "Quote"),
        wallet_address=sender["id"],
        receiver=incoming_payment["id"],
        signing_config=signing_config,
    )

    outgoing_grant = await request_outgoing_payment_grant(
        client,
        sender["authServer"],
        sender["id"],
        quote["debitAmount"],
        signing_config=signing_config,
        finish=finish,
    )
    logger.info(
        "checkout_started",
        extra={"event_name": "checkout_started", "grant_state": outgoing_grant.state.value},
    )

    if outgoing_grant.is_finalized:
        return await _pay(
            client,
            resource_server_url=sender["resourceServer"],
            access_token=outgoing_grant.access_token,
            wallet_address=sender["id"],
            quote_id=quote["id"],
            signing_config=signing_config,
        )

    return {
        "status": "pending",
        "redirect": outgoing_grant.interact_redirect,
        "continueUri": outgoing_grant.continue_uri,
        "continueAccessToken": outgoing_grant.continue_access_token,
        "resourceServerUrl": sender["resourceServer"],
        "walletAddress": sender["id"],
        "quoteId": quote["id"],
        "debitAmount": quote["debitAmount"],
        "incomingPayment": incoming_payment["id"],
    }


async def finish_checkout(
    client: AsyncOpenPaymentsClient,
    *,
    continue_uri: str,
    continue_access_token: str,
    interact_ref: str | None,
    resource_server_url: str,
    wallet_address: str,
    quote_id: str,
    signing_config: SigningConfig,
) -> dict[str, Any]:
    grant = await continue_grant(
        client,
        continue_uri,
        continue_access_token,
        signing_config=signing_config,
        interact_ref=interact_ref,
    )
    return await _pay(
        client,
        resource_server_url=resource_server_url,
        access_token=grant.access_token,
        wallet_address=wallet_address,
        quote_id=quote_id,
        signing_config=signing_config,
    )
