from fastapi import APIRouter
from openpayments_sdk.quotes import (
    create_quote,
    create_quote_with_fixed_receive,
    create_quote_with_fixed_send,
    get_quote,
)

from app.core.dependencies import DefaultSigningConfig, OpClient, signing_config_for
from app.core.openapi import COMMON_ERROR_RESPONSES
from app.schemas.common import ApiResponse
from app.schemas.payments import (
    CreateQuoteRequest,
    FixedReceiveQuoteRequest,
    FixedSendQuoteRequest,
    QuoteLookup,
)

router = APIRouter(prefix="/api/quotes", tags=["quotes"])


@router.post(
    "",
    response_model=ApiResponse,
    summary="Create Quote",
    description="`debitAmount` wins when both `debitAmount` and `receiveAmount` are given.",
    responses=COMMON_ERROR_RESPONSES,
)
async def create(
    payload: CreateQuoteRequest, client: OpClient, default_config: DefaultSigningConfig
) -> ApiResponse:
    details = payload.quote_details
    quote = await create_quote(
        client,
        payload.resource_server_url,
        payload.access_token,
        wallet_address=details.wallet_address,
        receiver=details.receiver,
        method=details.method,
        debit_amount=details.debit_amount.to_amount() if details.debit_amount else None,
        receive_amount=details.receive_amount.to_amount() if details.receive_amount else None,
        signing_config=signing_config_for(payload, default_config),
    )
    return ApiResponse(data=quote)


@router.post("/get", response_model=ApiResponse, summary="Get Quote", responses=COMMON_ERROR_RESPONSES)
async def get(payload: QuoteLookup, client: OpClient, default_config: DefaultSigningConfig) -> ApiResponse:
    quote = await get_quote(
        client,
        payload.quote_url,
        payload.access_token,
        signing_config=signing_config_for(payload, default_config),
    )
    return ApiResponse(data=quote)


@router.post(
    "/fixed-send", response_model=ApiResponse, summary="Create Fixed-Send Quote", responses=COMMON_ERROR_RESPONSES
)
async def fixed_send(
    payload: FixedSendQuoteRequest, client: OpClient, default_config: DefaultSigningConfig
) -> ApiResponse:
    quote = await create_quote_with_fixed_send(
        client,
        payload.resource_server_url,
        payload.access_token,
        wallet_address=payload.wallet_address,
        receiver=payload.receiver,
        debit_amount=payload.debit_amount.to_amount(),
        signing_config=signing_config_for(payload, default_config),
    )
    return ApiResponse(data=quote)


@router.post(
    "/fixed-receive",
    response_model=ApiResponse,
    summary="Create Fixed-Receive Quote",
    responses=COMMON_ERROR_RESPONSES,
)
async def fixed_receive(
    payload: FixedReceiveQuoteRequest, client: OpClient, default_config: DefaultSigningConfig
) -> ApiResponse:
    quote = await create_quote_with_fixed_receive(
        client,
        payload.resource_server_url,
        payload.access_token,
        wallet_address=payload.wallet_address,
        receiver=payload.receiver,
        receive_amount=payload.receive_amount.to_amount(),
        signing_config=signing_config_for(payload, default_config),
    )
    return ApiResponse(data=quote)
