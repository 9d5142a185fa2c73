from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from openpayments_sdk.client import AsyncOpenPaymentsClient
from openpayments_sdk.errors import GrantNotFinalizedError, InvalidGrantError
from openpayments_sdk.types import (
    AccessScope,
    Amount,
    GrantRequestBody,
    InteractFinish,
    InteractRequest,
    SigningConfig,
)


class GrantState(str, Enum):
    FINALIZED = "finalized"
    PENDING = "pending"


def is_finalized_grant(payload: Any) -> bool:
    if not isinstance(payload, Mapping):
        return False
    access_token = payload.get("access_token")
    return isinstance(access_token, Mapping) and bool(access_token.get("value"))


def is_pending_grant(payload: Any) -> bool:
    return isinstance(payload, Mapping) and isinstance(payload.get("continue"), Mapping)


def classify_grant(payload: Any) -> GrantState:
    # Finalized wins when a response carries both shapes.
    if is_finalized_grant(payload):
        return GrantState.FINALIZED
    if is_pending_grant(payload):
        return GrantState.PENDING
    raise InvalidGrantError(payload)


@dataclass(frozen=True)
class Grant:
    state: GrantState
    payload: Mapping[str, Any]

    @classmethod
    def from_response(cls, payload: Any) -> "Grant":
        return cls(state=classify_grant(payload), payload=payload)

    @property
    def is_finalized(self) -> bool:
        return self.state is GrantState.FINALIZED

    @property
    def is_pending(self) -> bool:
        return self.state is GrantState.PENDING

    @property
    def access_token(self) -> str | None:
        token = self.payload.get("access_token") or {}
        return token.get("value") or None

    @property
    def manage_url(self) -> str | None:
        token = self.payload.get("access_token") or {}
        return token.get("manage")

    @property
    def continue_uri(self) -> str | None:
        return (self.payload.get("continue") or {}).get("uri")

    @property
    def continue_access_token(self) -> str | None:
        continuation = self.payload.get("continue") or {}
        return (continuation.get("access_token") or {}).get("value")

    @property
    def interact_redirect(self) -> str | None:
        return (self.payload.get("interact") or {}).get("redirect")

    @property
    def finish_nonce(self) -> str | None:
        return (self.payload.get("interact") or {}).get("finish")


def build_grant_request(
    access: list[AccessScope],
    *,
    client: str,
    interact: InteractRequest | None = None,
) -> GrantRequestBody:
    body: GrantRequestBody = {
        "access_token": {"access": list(access)},
        "client": client,
    }
    if interact is not None:
        body["interact"] = interact
    return body


async def request_grant(
    client: AsyncOpenPaymentsClient,
    auth_server_url: str,
    access: list[AccessScope],
    *,
    signing_config: SigningConfig,
    interact: InteractRequest | None = None,
) -> Grant:
    body = build_grant_request(
        access,
        client=signing_config.wallet_address_url,
        interact=interact,
    )
    payload = await client.post(auth_server_url, body, signing_config=signing_config)
    return Grant.from_response(payload)


async def request_incoming_payment_grant(
    client: AsyncOpenPaymentsClient,
    auth_server_url: str,
    *,
    signing_config: SigningConfig,
) -> Grant:
    return await request_grant(
        client,
        auth_server_url,
        [{"type": "incoming-payment", "actions": ["create", "read", "list", "complete"]}],
        signing_config=signing_config,
    )


async def request_quote_grant(
    client: AsyncOpenPaymentsClient,
    auth_server_url: str,
    *,
    signing_config: SigningConfig,
) -> Grant:
    return await request_grant(
        client,
        auth_server_url,
        [{"type": "quote", "actions": ["create", "read"]}],
        signing_config=signing_config,
    )


async def request_outgoing_payment_grant(
    client: AsyncOpenPaymentsClient,
    auth_server_url: str,
    wallet_id: str,
    debit_amount: Amount,
    *,
    signing_config: SigningConfig,
    require_interaction: bool = True,
    finish: InteractFinish | None = None,
) -> Grant:
    """Request an outgoing-payment grant limited to ``debit_amount``.

    With ``require_interaction`` the authorization server is expected to answer
    with a pending grant whose ``interact.redirect`` the payer must visit before
    :func:`continue_grant` is called.
    """
    scope: AccessScope = {
        "type": "outgoing-payment",
        "actions": ["create", "read", "list"],
        "limits": {"debitAmount": debit_amount},
        "identifier": wallet_id,
    }
    interact: InteractRequest | None = None
    if require_interaction:
        interact = {"start": ["redirect"]}
        if finish is not None:
            interact["finish"] = finish

    return await request_grant(
        client,
        auth_server_url,
        [scope],
        signing_config=signing_config,
        interact=interact,
    )


async def continue_grant(
    client: AsyncOpenPaymentsClient,
    continue_uri: str,
    continue_access_token: str,
    *,
    signing_config: SigningConfig,
    interact_ref: str | None = None,
) -> Grant:
    body = {"interact_ref": interact_ref} if interact_ref else None
    payload = await client.post(
        continue_uri,
        body,
        access_token=continue_access_token,
        signing_config=signing_config,
    )
    if not is_finalized_grant(payload):
        raise GrantNotFinalizedError(payload)
    return Grant(state=GrantState.FINALIZED, payload=payload)


async def revoke_grant(
    client: AsyncOpenPaymentsClient,
    grant_management_url: str,
    access_token: str,
    *,
    signing_config: SigningConfig,
) -> None:
    await client.delete(
        grant_management_url,
        access_token=access_token,
        signing_config=signing_config,
    )
