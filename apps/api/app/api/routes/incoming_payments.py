from fastapi import APIRouter
from openpayments_sdk.amounts import payment_progress
from openpayments_sdk.incoming_payments import (
    complete_incoming_payment,
    create_incoming_payment,
    get_incoming_payment,
    list_incoming_payments,
)
from openpayments_sdk.polling import wait_for_payment_completion
from openpayments_sdk.wallet_address import resource_server_for

from app.core.config import settings
from app.core.dependencies import DefaultSigningConfig, OpClient, signing_config_for
from app.core.openapi import COMMON_ERROR_RESPONSES
from app.schemas.common import ApiResponse
from app.schemas.payments import (
    CreateIncomingPaymentRequest,
    IncomingPaymentLookup,
    ListPaymentsRequest,
    WaitForIncomingPaymentRequest,
)

router = APIRouter(prefix="/api/incoming-payments", tags=["incoming-payments"])


@router.post("", response_model=ApiResponse, summary="Create Incoming Payment", responses=COMMON_ERROR_RESPONSES)
async def create(
    payload: CreateIncomingPaymentRequest, client: OpClient, default_config: DefaultSigningConfig
) -> ApiResponse:
    details = payload.payment_details
    payment = await create_incoming_payment(
        client,
        payload.resource_server_url,
        payload.access_token,
        wallet_address=details.wallet_address,
        incoming_amount=details.incoming_amount.to_amount() if details.incoming_amount else None,
        description=details.description,
        external_ref=details.external_ref,
        expires_at=details.expires_at,
        signing_config=signing_config_for(payload, default_config),
    )
    return ApiResponse(data=payment)


@router.post("/get", response_model=ApiResponse, summary="Get Incoming Payment", responses=COMMON_ERROR_RESPONSES)
async def get(
    payload: IncomingPaymentLookup, client: OpClient, default_config: DefaultSigningConfig
) -> ApiResponse:
    payment = await get_incoming_payment(
        client,
        payload.incoming_payment_url,
        payload.access_token,
        signing_config=signing_config_for(payload, default_config),
    )
    return ApiResponse(data=payment)


@router.post(
    "/list",
    response_model=ApiResponse,
    summary="List Incoming Payments",
    description="Lists payments on the resource server advertised by `walletAddressUrl`.",
    responses=COMMON_ERROR_RESPONSES,
)
async def list_payments(
    payload: ListPaymentsRequest, client: OpClient, default_config: DefaultSigningConfig
) -> ApiResponse:
    resource_server, wallet_id = await resource_server_for(client, payload.wallet_address_url)
    page = await list_incoming_payments(
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


@router.post(
    "/complete", response_model=ApiResponse, summary="Complete Incoming Payment", responses=COMMON_ERROR_RESPONSES
)
async def complete(
    payload: IncomingPaymentLookup, client: OpClient, default_config: DefaultSigningConfig
) -> ApiResponse:
    payment = await complete_incoming_payment(
        client,
        payload.incoming_payment_url,
        payload.access_token,
        signing_config=signing_config_for(payload, default_config),
    )
    return ApiResponse(data=payment)


@router.post(
    "/wait",
    response_model=ApiResponse,
    summary="Wait For Incoming Payment",
    description="Polls the incoming payment until it is complete; 504 `PAYMENT_TIMEOUT` otherwise.",
    responses=COMMON_ERROR_RESPONSES,
)
async def wait(
    payload: WaitForIncomingPaymentRequest, client: OpClient, default_config: DefaultSigningConfig
) -> ApiResponse:
    signing_config = signing_config_for(payload, default_config)

    async def fetch() -> dict:
        return await get_incoming_payment(
            client, payload.incoming_payment_url, payload.access_token, signing_config=signing_config
        )

    payment = await wait_for_payment_completion(
        fetch,
        max_attempts=payload.max_attempts or settings.payment_wait_max_attempts,
        interval_seconds=(
            payload.interval_seconds
            if payload.interval_seconds is not None
            else settings.payment_wait_interval_seconds
        ),
    )
    return ApiResponse(data={"payment": payment, "progress": payment_progress(payment).to_dict()})
