from fastapi import APIRouter
from openpayments_sdk.outgoing_payments import (
    create_outgoing_payment,
    get_outgoing_payment,
    list_outgoing_payments,
)
from openpayments_sdk.wallet_address import resource_server_for

from app.core.dependencies import DefaultSigningConfig, OpClient, signing_config_for
from app.core.openapi import COMMON_ERROR_RESPONSES
from app.schemas.common import ApiResponse
from app.schemas.payments import (
    CreateOutgoingPaymentRequest,
    ListPaymentsRequest,
    OutgoingPaymentLookup,
)

router = APIRouter(prefix="/api/outgoing-payments", tags=["outgoing-payments"])


@router.post("", response_model=ApiResponse, summary="Create Outgoing Payment", responses=COMMON_ERROR_RESPONSES)
async def create(
    payload: CreateOutgoingPaymentRequest, client: OpClient, default_config: DefaultSigningConfig
) -> ApiResponse:
    details = payload.payment_details
    payment = await create_outgoing_payment(
        client,
        payload.resource_server_url,
        payload.access_token,
        wallet_address=details.wallet_address,
        quote_id=details.quote_id,
        metadata=details.metadata,
        signing_config=signing_config_for(payload, default_config),
    )
    return ApiResponse(data=payment)


@router.post("/get", response_model=ApiResponse, summary="Get Outgoing Payment", responses=COMMON_ERROR_RESPONSES)
async def get(
    payload: OutgoingPaymentLookup, client: OpClient, default_config: DefaultSigningConfig
) -> ApiResponse:
    payment = await get_outgoing_payment(
        client,
        payload.outgoing_payment_url,
        payload.access_token,
        signing_config=signing_config_for(payload, default_config),
    )
    return ApiResponse(data=payment)


@router.post("/list", response_model=ApiResponse, summary="List Outgoing Payments", responses=COMMON_ERROR_RESPONSES)
async def list_payments(
    payload: ListPaymentsRequest, client: OpClient, default_config: DefaultSigningConfig
) -> ApiResponse:
    resource_server, wallet_id = await resource_server_for(client, payload.wallet_address_url)
    page = await list_outgoing_payments(
        client,
        resource_server,
        payload.access_token,
        wallet_address=wallet_id,
        first=payload.pagination.first,
        last=payload.pagination.last,
        cursor=payload.pagination.cursor,
        signing_config=signing_config_for(payload, default_config),
    )
    return ApiResponse(data=page)
