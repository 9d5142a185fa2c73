from fastapi import APIRouter
from openpayments_sdk.tokens import revoke_access_token, rotate_access_token

from app.core.dependencies import DefaultSigningConfig, OpClient, signing_config_for
from app.core.openapi import COMMON_ERROR_RESPONSES
from app.schemas.common import ApiResponse
from app.schemas.payments import RevokeTokenRequest, RotateTokenRequest

router = APIRouter(prefix="/api/tokens", tags=["tokens"])


@router.post("/rotate", response_model=ApiResponse, summary="Rotate Access Token", responses=COMMON_ERROR_RESPONSES)
async def rotate(
    payload: RotateTokenRequest, client: OpClient, default_config: DefaultSigningConfig
) -> ApiResponse:
    token = await rotate_access_token(
        client,
        payload.token_management_url,
        payload.current_access_token,
        signing_config=signing_config_for(payload, default_config),
    )
    return ApiResponse(data=token)


@router.delete("/revoke", response_model=ApiResponse, summary="Revoke Access Token", responses=COMMON_ERROR_RESPONSES)
async def revoke(
    payload: RevokeTokenRequest, client: OpClient, default_config: DefaultSigningConfig
) -> ApiResponse:
    await revoke_access_token(
        client,
        payload.token_management_url,
        payload.access_token,
        signing_config=signing_config_for(payload, default_config),
    )
    return ApiResponse(data={"revoked": True})
