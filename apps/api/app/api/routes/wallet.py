from fastapi import APIRouter
from openpayments_sdk.wallet_address import (
    get_wallet_address,
    get_wallet_address_keys,
    validate_wallet_addresses,
)

from app.core.dependencies import OpClient
from app.core.openapi import COMMON_ERROR_RESPONSES
from app.schemas.common import ApiResponse
from app.schemas.wallet import WalletInfoRequest, WalletValidateRequest

router = APIRouter(prefix="/api/wallet", tags=["wallet"])


@router.post(
    "/info",
    response_model=ApiResponse,
    summary="Wallet Address Info",
    description="Fetches the public wallet address document (auth server, resource server, asset).",
    responses=COMMON_ERROR_RESPONSES,
)
async def wallet_info(payload: WalletInfoRequest, client: OpClient) -> ApiResponse:
    return ApiResponse(data=await get_wallet_address(client, payload.wallet_address_url))


@router.post(
    "/keys",
    response_model=ApiResponse,
    summary="Wallet Address Keys",
    responses=COMMON_ERROR_RESPONSES,
)
async def wallet_keys(payload: WalletInfoRequest, client: OpClient) -> ApiResponse:
    return ApiResponse(data=await get_wallet_address_keys(client, payload.wallet_address_url))


@router.post(
    "/validate",
    response_model=ApiResponse,
    summary="Validate Wallet Addresses",
    description="Looks every address up concurrently and reports a result per address.",
)
async def wallet_validate(payload: WalletValidateRequest, client: OpClient) -> ApiResponse:
    results = await validate_wallet_addresses(client, payload.wallet_addresses)
    return ApiResponse(data=[result.to_dict() for result in results])
