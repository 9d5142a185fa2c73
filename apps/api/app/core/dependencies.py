from typing import Annotated

from fastapi import Depends, Request
from openpayments_sdk.client import AsyncOpenPaymentsClient
from openpayments_sdk.types import SigningConfig

from app.core.config import settings
from app.modules.catalog.service import ProductCatalog
from app.modules.referral.service import ReferralSalesLedger, TransactionLog
from app.schemas.common import ConfiguredRequest


def get_op_client(request: Request) -> AsyncOpenPaymentsClient:
    return request.app.state.op_client


def get_catalog() -> ProductCatalog:
    return ProductCatalog(settings.catalog_path)


def get_sales_ledger() -> ReferralSalesLedger:
    return ReferralSalesLedger(settings.referral_sales_path)


def get_transaction_log() -> TransactionLog:
    return TransactionLog(settings.referral_transactions_path)


def get_default_signing_config() -> SigningConfig:
    return settings.signing_config()


def signing_config_for(payload: ConfiguredRequest | None, default: SigningConfig) -> SigningConfig:
    """A request-scoped ``config`` replaces the process default for that request only."""
    if payload is not None and payload.config is not None:
        return payload.config.to_signing_config()
    return default


OpClient = Annotated[AsyncOpenPaymentsClient, Depends(get_op_client)]
Catalog = Annotated[ProductCatalog, Depends(get_catalog)]
SalesLedger = Annotated[ReferralSalesLedger, Depends(get_sales_ledger)]
Transactions = Annotated[TransactionLog, Depends(get_transaction_log)]
DefaultSigningConfig = Annotated[SigningConfig, Depends(get_default_signing_config)]
