import asyncio
import logging
import secrets
import time
from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from openpayments_sdk.amounts import parse_amount, split_amount
from openpayments_sdk.client import AsyncOpenPaymentsClient
from openpayments_sdk.concurrency import gather_branches
from openpayments_sdk.errors import BranchError
from openpayments_sdk.grants import Grant, request_incoming_payment_grant
from openpayments_sdk.incoming_payments import create_incoming_payment
from openpayments_sdk.links import generate_payment_link
from openpayments_sdk.types import SigningConfig, WalletAddress
from openpayments_sdk.wallet_address import get_wallet_address

from app.core.errors import raise_http_error
from app.modules.catalog.service import ProductCatalog, product_price
from app.modules.storage.json_files import JsonListFile
from app.schemas.shop import ReferralLinkResponse

logger = logging.getLogger("openpayments.referral")


class ReferralSalesLedger:
    """Per (product, referrer) sale counters."""

    def __init__(self, path: Path) -> None:
        self._file = JsonListFile(path)

    def record_sale(self, product_id: str, referral_id: str) -> int:
        def bump(entries: list[dict[str, Any]]) -> int:
            for entry in entries:
                if entry.get("productId") == product_id and entry.get("refereralId") == referral_id:
                    entry["count"] = int(entry.get("count", 0)) + 1
                    return entry["count"]
            entries.append({"productId": product_id, "refereralId": referral_id, "count": 1})
            return 1

        return self._file.update(bump)


class TransactionLog:
    def __init__(self, path: Path) -> None:
        self._file = JsonListFile(path)

    def append(self, record: dict[str, Any]) -> None:
        self._file.append(record)

    def all(self) -> list[dict[str, Any]]:
        return self._file.load()


def new_transaction_id(product_id: str, *, now_ms: int | None = None) -> str:
    millis = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"ref_{product_id}_{millis}_{secrets.token_hex(5)}"


def _asset_of(wallet: Any, party: str) -> tuple[str, int]:
    if not isinstance(wallet, Mapping) or not all(
        wallet.get(key) for key in ("id", "authServer", "resourceServer")
    ):
        raise_http_error(502, "WALLET_INCOMPLETE", f"{party} wallet information could not be retrieved")

    asset_code = wallet.get("assetCode")
    asset_scale = wallet.get("assetScale")
    if not asset_code or asset_scale is None:
        raise_http_error(502, "WALLET_ASSET_INCOMPLETE", f"{party} wallet asset information is incomplete")
    if isinstance(asset_scale, bool) or not isinstance(asset_scale, int) or asset_scale < 0:
        raise_http_error(500, "INVALID_ASSET_SCALE", "Invalid asset scale returned by wallet information")
    return asset_code, asset_scale


def _finalized_token(grant: Grant, party: str) -> str:
    if not grant.is_finalized or grant.access_token is None:
        raise_http_error(
            409,
            "GRANT_INTERACTION_REQUIRED",
            f"{party} incoming payment grant requires user interaction to finalize",
            grant=dict(grant.payload),
        )
    return grant.access_token


async def _fetch_wallets(
    client: AsyncOpenPaymentsClient, seller_url: str, referrer_url: str
) -> tuple[WalletAddress, WalletAddress]:
    try:
        wallets = await gather_branches(
            {
                "seller wallet": get_wallet_address(client, seller_url),
                "referral wallet": get_wallet_address(client, referrer_url),
            }
        )
    except BranchError as exc:
        raise_http_error(
            502,
            "WALLET_LOOKUP_FAILED",
            f"Unable to fetch {exc.branch} info: {exc.cause}",
            branch=exc.branch,
        )
    return wallets["seller wallet"], wallets["referral wallet"]


async def create_referral_links(
    client: AsyncOpenPaymentsClient,
    *,
    catalog: ProductCatalog,
    transactions: TransactionLog,
    product_id: str,
    referrer_wallet_url: str,
    signing_config: SigningConfig,
    share_percent: int,
    web_base_url: str,
    deep_link_base: str,
) -> ReferralLinkResponse:
    """Split a product sale between its seller and a referrer.

    One incoming payment is created on each wallet: the seller receives the
    floored ``100 - share_percent`` part of the price in minor units and the
    referrer the remainder, so the two always add up to the full price.
    """
    product = await asyncio.to_thread(catalog.get, product_id)
    seller_url = product.get("sellerWalletAddress")
    if not seller_url:
        raise_http_error(400, "SELLER_WALLET_MISSING", "Product does not have a seller wallet configured")
    price = product_price(product)

    seller, referrer = await _fetch_wallets(client, seller_url, referrer_wallet_url)
    asset_code, asset_scale = _asset_of(seller, "Seller")
    if _asset_of(referrer, "Referral") != (asset_code, asset_scale):
        raise_http_error(
            400,
            "ASSET_MISMATCH",
            "Seller and referral wallets must share the same assetCode and assetScale",
        )

    total = int(parse_amount(price, asset_scale))
    seller_amount, referral_amount = split_amount(total, share_percent)
    if seller_amount <= 0 or referral_amount <= 0:
        raise_http_error(400, "SPLIT_TOO_SMALL", "Calculated split amounts must be greater than zero")

    transaction_id = new_transaction_id(str(product_id))

    grants = await gather_branches(
        {
            "seller grant": request_incoming_payment_grant(
                client, seller["authServer"], signing_config=signing_config
            ),
            "referral grant": request_incoming_payment_grant(
                client, referrer["authServer"], signing_config=signing_config
            ),
        }
    )
    seller_token = _finalized_token(grants["seller grant"], "Seller")
    referral_token = _finalized_token(grants["referral grant"], "Referral")

    def amount(value: int) -> dict[str, Any]:
        return {"value": str(value), "assetCode": asset_code, "assetScale": asset_scale}

    payments = await gather_branches(
        {
            "seller incoming payment": create_incoming_payment(
                client,
                seller["resourceServer"],
                seller_token,
                wallet_address=seller["id"],
                incoming_amount=amount(seller_amount),
                description=f"Sale of {product.get('title')} (seller share)",
                signing_config=signing_config,
            ),
            "referral incoming payment": create_incoming_payment(
                client,
                referrer["resourceServer"],
                referral_token,
                wallet_address=referrer["id"],
                incoming_amount=amount(referral_amount),
                description=f"Referral reward for product {product.get('title')}",
                signing_config=signing_config,
            ),
        }
    )
    seller_payment = payments["seller incoming payment"]
    referral_payment = payments["referral incoming payment"]

    seller_links = generate_payment_link(
        seller_payment["id"], str(seller_amount), web_base_url=web_base_url, deep_link_base=deep_link_base
    )
    referral_links = generate_payment_link(
        referral_payment["id"], str(referral_amount), web_base_url=web_base_url, deep_link_base=deep_link_base
    )

    await asyncio.to_thread(
        transactions.append,
        {
            "transactionId": transaction_id,
            "productId": str(product_id),
            "product": {"id": product.get("id"), "title": product.get("title"), "price": product.get("price")},
            "seller": {
                "walletAddress": seller["id"],
                "amount": seller_amount,
                "assetCode": asset_code,
                "assetScale": asset_scale,
            },
            "referral": {
                "walletAddress": referrer["id"],
                "amount": referral_amount,
                "assetCode": asset_code,
                "assetScale": asset_scale,
            },
            "refererId": referrer_wallet_url,
            "split": {
                "total": total,
                "sellerPercentage": 100 - share_percent,
                "referralPercentage": share_percent,
            },
            "createdAt": datetime.now(tz=UTC).isoformat(),
            "paymentLinks": {"seller": seller_links.to_dict(), "referral": referral_links.to_dict()},
            "incomingPayments": {"seller": seller_payment["id"], "referral": referral_payment["id"]},
        },
    )
    logger.info(
        "referral_link_created",
        extra={
            "event_name": "referral_link_created",
            "product_id": str(product_id),
            "transaction_id": transaction_id,
        },
    )

    return ReferralLinkResponse(
        seller_payment_link=seller_links.web_link,
        referral_payment_link=referral_links.web_link,
    )
