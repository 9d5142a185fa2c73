import logging

from fastapi import APIRouter
from openpayments_sdk.grants import (
    Grant,
    continue_grant,
    request_incoming_payment_grant,
    request_outgoing_payment_grant,
    request_quote_grant,
    revoke_grant,
)

from app.core.dependencies import DefaultSigningConfig, OpClient, signing_config_for
from app.core.openapi import COMMON_ERROR_RESPONSES
from app.schemas.common import ApiResponse
from app.schemas.grants import (
    AuthServerGrantRequest,
    ContinueGrantRequest,
    GrantResponse,
    OutgoingGrantRequest,
    RevokeGrantRequest,
)

router = APIRouter(prefix="/api/grants", tags=["grants"])
logger = logging.getLogger("openpayments.grants")


def _grant_response(grant: Grant) -> GrantResponse:
    logger.info("grant_received", extra={"event_name": "grant_received", "grant_state": grant.state.value})
    return GrantResponse(
        data=grant.payload,
        is_finalized=grant.is_finalized,
        is_pending=grant.is_pending,
    )


@router.post(
    "/incoming-payment",
    response_model=GrantResponse,
    summary="Request Incoming Payment Grant",
    responses=COMMON_ERROR_RESPONSES,
)
async def incoming_payment_grant(
    payload: AuthServerGrantRequest, client: OpClient, default_config: DefaultSigningConfig
) -> GrantResponse:
    grant = await request_incoming_payment_grant(
        client,
        payload.auth_server_url,
        signing_config=signing_config_for(payload, default_config),
    )
    return _grant_response(grant)


@router.post(
    "/quote",
    response_model=GrantResponse,
    summary="Request Quote Grant",
    responses=COMMON_ERROR_RESPONSES,
)
async def quote_grant(
    payload: AuthServerGrantRequest, client: OpClient, default_config: DefaultSigningConfig
) -> GrantResponse:
    grant = await request_quote_grant(
        client,
        payload.auth_server_url,
        signing_config=signing_config_for(payload, default_config),
    )
    return _grant_response(grant)


@router.post(
    "/outgoing-payment",
    response_model=GrantResponse,
    summary="Request Outgoing Payment Grant",
    description=(
        "Requests a grant limited to `debitAmount`. With `requireInteraction` the grant "
        "comes back pending and the payer must visit `data.interact.redirect`."
    ),
    responses=COMMON_ERROR_RESPONSES,
)
async def outgoing_payment_grant(
    payload: OutgoingGrantRequest, client: OpClient, default_config: DefaultSigningConfig
) -> GrantResponse:
    grant = await request_outgoing_payment_grant(
        client,
        payload.auth_server_url,
        payload.wallet_address_id,
        payload.debit_amount.to_amount(),
        signing_config=signing_config_for(payload, default_config),
        require_interaction=payload.require_interaction,
        finish=payload.finish.to_finish() if payload.finish else None,
    )
    return _grant_response(grant)


@router.post(
    "/continue",
    response_model=GrantResponse,
    summary="Continue Grant",
    responses=COMMON_ERROR_RESPONSES,
)
async def continue_pending_grant(
    payload: ContinueGrantRequest, client: OpClient, default_config: DefaultSigningConfig
) -> GrantResponse:
    grant = await continue_grant(
        client,
        payload.continue_uri,
        payload.continue_access_token,
        signing_config=signing_config_for(payload, default_config),
        interact_ref=payload.interact_ref,
    )
    return _grant_response(grant)


@router.delete(
    "/revoke",
    response_model=ApiResponse,
    summary="Revoke Grant",
    responses=COMMON_ERROR_RESPONSES,
)
async def revoke(
    payload: RevokeGrantRequest, client: OpClient, default_config: DefaultSigningConfig
) -> ApiResponse:
    await revoke_grant(
        client,
        payload.grant_url,
        payload.access_token,
        signing_config=signing_config_for(payload, default_config),
    )
    return ApiResponse(data={"revoked": True})
