import asyncio
import json
import logging
from typing import Annotated

from fastapi import APIRouter, Query
from openpayments_sdk.types import SigningConfig
from pydantic import ValidationError

from app.core.config import settings
from app.core.dependencies import Catalog, DefaultSigningConfig, OpClient, SalesLedger, Transactions
from app.core.errors import raise_http_error
from app.core.openapi import COMMON_ERROR_RESPONSES
from app.modules.referral.service import create_referral_links
from app.schemas.common import SigningConfigOverride
from app.schemas.shop import ReferralLinkResponse, ReferralSaleResponse

router = APIRouter(prefix="/api/referral", tags=["referral"])
logger = logging.getLogger("openpayments.referral")

OptionalQuery = Annotated[str | None, Query()]


def _query_signing_config(raw: str | None, default: SigningConfig) -> SigningConfig:
    if not raw:
        return default
    try:
        return SigningConfigOverride.model_validate(json.loads(raw)).to_signing_config()
    except (ValueError, ValidationError) as exc:
        raise_http_error(400, "INVALID_CONFIG", f"config query parameter is invalid: {exc}")


@router.get(
    "/webhook",
    response_model=ReferralSaleResponse,
    summary="Record Referral Sale",
    description="Counts one sale for the (productId, refereralId) pair.",
)
async def webhook(
    sales: SalesLedger,
    product_id: Annotated[str | None, Query(alias="productId")] = None,
    refereral_id: Annotated[str | None, Query(alias="refereralId")] = None,
) -> ReferralSaleResponse:
    if not product_id or not refereral_id:
        raise_http_error(400, "MISSING_PARAMETERS", "productId and refereralId are required")

    count = await asyncio.to_thread(sales.record_sale, product_id, refereral_id)
    logger.info("referral_sale_recorded", extra={"event_name": "referral_sale_recorded", "product_id": product_id})
    return ReferralSaleResponse(product_id=product_id, refereral_id=refereral_id, count=count)


@router.get(
    "/link",
    response_model=ReferralLinkResponse,
    summary="Create Referral Payment Links",
    description=(
        "Creates one incoming payment on the seller wallet and one on the referrer wallet, "
        "splitting the product price, and returns a web payment link for each."
    ),
    responses=COMMON_ERROR_RESPONSES,
)
async def link(
    client: OpClient,
    catalog: Catalog,
    transactions: Transactions,
    default_config: DefaultSigningConfig,
    product_id: Annotated[str | None, Query(alias="productId")] = None,
    referer_id: Annotated[str | None, Query(alias="refererId")] = None,
    config: OptionalQuery = None,
) -> ReferralLinkResponse:
    if not product_id or not referer_id:
        raise_http_error(400, "MISSING_PARAMETERS", "productId and refererId are required")

    return await create_referral_links(
        client,
        catalog=catalog,
        transactions=transactions,
        product_id=product_id,
        referrer_wallet_url=referer_id,
        signing_config=_query_signing_config(config, default_config),
        share_percent=settings.referral_share_percent,
        web_base_url=settings.payment_link_web_base_url,
        deep_link_base=settings.payment_link_deep_link_base,
    )
