from openpayments_sdk.client import AsyncOpenPaymentsClient
from openpayments_sdk.types import AccessTokenInfo, SigningConfig


async def rotate_access_token(
    client: AsyncOpenPaymentsClient,
    token_management_url: str,
    access_token: str,
    *,
    signing_config: SigningConfig,
) -> AccessTokenInfo:
    payload = await client.post(
        token_management_url,
        access_token=access_token,
        signing_config=signing_config,
    )
    if isinstance(payload, dict) and isinstance(payload.get("access_token"), dict):
        return payload["access_token"]
    return payload


async def revoke_access_token(
    client: AsyncOpenPaymentsClient,
    token_management_url: str,
    access_token: str,
    *,
    signing_config: SigningConfig,
) -> None:
    await client.delete(
        token_management_url,
        access_token=access_token,
        signing_config=signing_config,
    )
