from fastapi import APIRouter

from app.core.config import settings
from app.core.dependencies import DefaultSigningConfig, OpClient, signing_config_for
from app.core.openapi import COMMON_ERROR_RESPONSES
from app.modules.checkout.service import finish_checkout, start_checkout
from app.schemas.common import ApiResponse
from app.schemas.shop import CheckoutFinishRequest, CheckoutStartRequest

router = APIRouter(prefix="/api/checkout", tags=["checkout"])


@router.post(
    "/start",
    response_model=ApiResponse,
    summary="Start Checkout",
    description=(
        "Creates the incoming payment and quote, then requests the outgoing payment grant. "
        "The payer approves it at `data.redirect` before calling `/api/checkout/finish`."
    ),
    responses=COMMON_ERROR_RESPONSES,
)
async def start(
    payload: CheckoutStartRequest, client: OpClient, default_config: DefaultSigningConfig
) -> ApiResponse:
    finish = None
    if payload.finish_uri and payload.finish_nonce:
        finish = {"method": "redirect", "uri": payload.finish_uri, "nonce": payload.finish_nonce}

    result = await start_checkout(
        client,
        sender_wallet_url=payload.sender_wallet_address,
        receiver_wallet_url=payload.receiver_wallet_address or settings.op_wallet_address_url,
        amount=payload.amount,
        signing_config=signing_config_for(payload, default_config),
        finish=finish,
    )
    return ApiResponse(data=result)


@router.post("/finish", response_model=ApiResponse, summary="Finish Checkout", responses=COMMON_ERROR_RESPONSES)
async def finish(
    payload: CheckoutFinishRequest, client: OpClient, default_config: DefaultSigningConfig
) -> ApiResponse:
    result = await finish_checkout(
        client,
        continue_uri=payload.continue_uri,
        continue_access_token=payload.continue_access_token,
        interact_ref=payload.interact_ref,
        resource_server_url=payload.resource_server_url,
        wallet_address=payload.wallet_address,
        quote_id=payload.quote_id,
        signing_config=signing_config_for(payload, default_config),
    )
    return ApiResponse(data=result)
