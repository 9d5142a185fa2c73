import asyncio
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

from openpayments_sdk.client import AsyncOpenPaymentsClient
from openpayments_sdk.errors import HttpRequestError, InvalidWalletAddressError, OpenPaymentsError
from openpayments_sdk.types import JsonWebKey, WalletAddress


@dataclass
class WalletValidation:
    url: str
    valid: bool
    data: WalletAddress | None = None
    error: str | None = None
    status: int | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"url": self.url, "valid": self.valid}
        if self.valid:
            result["data"] = self.data
        else:
            result["error"] = self.error
            if self.status is not None:
                result["status"] = self.status
        return result


async def get_wallet_address(client: AsyncOpenPaymentsClient, url: str) -> WalletAddress:
    return await client.get(url)


async def get_wallet_address_keys(
    client: AsyncOpenPaymentsClient, url: str
) -> dict[str, list[JsonWebKey]]:
    return await client.get(f"{url.rstrip('/')}/jwks.json")


def require_wallet_fields(wallet: Any, url: str, *fields: str) -> WalletAddress:
    if not isinstance(wallet, Mapping):
        raise InvalidWalletAddressError(url, [])
    missing = [field for field in fields if wallet.get(field) in (None, "")]
    if missing:
        raise InvalidWalletAddressError(url, missing)
    return wallet


async def resource_server_for(client: AsyncOpenPaymentsClient, url: str) -> tuple[str, str]:
    """Return ``(resourceServer, id)`` advertised by the wallet address at ``url``."""
    wallet = require_wallet_fields(await get_wallet_address(client, url), url, "id", "resourceServer")
    return wallet["resourceServer"], wallet["id"]


async def _validate_one(client: AsyncOpenPaymentsClient, url: str) -> WalletValidation:
    try:
        data = await get_wallet_address(client, url)
    except HttpRequestError as exc:
        return WalletValidation(url=url, valid=False, error=str(exc), status=exc.status)
    except OpenPaymentsError as exc:
        return WalletValidation(url=url, valid=False, error=str(exc))
    return WalletValidation(url=url, valid=True, data=data)


async def validate_wallet_addresses(
    client: AsyncOpenPaymentsClient, urls: list[str]
) -> list[WalletValidation]:
    """Look every wallet address up concurrently; one bad address never fails the batch."""
    return list(await asyncio.gather(*(_validate_one(client, url) for url in urls)))


def is_valid_wallet_address_format(wallet_address: str) -> bool:
    try:
        parsed = urlparse(wallet_address)
    except ValueError:
        return False
    return parsed.scheme == "https" and bool(parsed.netloc) and len(parsed.path) > 1


def wallet_name(wallet_address: str) -> str:
    parsed = urlparse(wallet_address)
    if not parsed.scheme or not parsed.netloc:
        return wallet_address
    return parsed.path[1:]


def build_wallet_address(base: str, name: str) -> str:
    return f"{base.rstrip('/')}/{name.lstrip('/')}"


def base_url(wallet_address: str) -> str:
    parsed = urlparse(wallet_address)
    if not parsed.scheme or not parsed.netloc:
        return ""
    return f"{parsed.scheme}://{parsed.netloc}"
