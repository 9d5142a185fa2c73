import asyncio
from typing import Any

from fastapi import APIRouter

from app.core.config import settings
from app.core.dependencies import Catalog
from app.schemas.common import ApiResponse
from app.schemas.shop import ProductAddRequest, ProductSearchRequest

router = APIRouter(prefix="/api/products", tags=["products"])


@router.post(
    "",
    summary="Search Products",
    description="Products whose title or description contains `query`; an empty query lists all.",
)
async def search(payload: ProductSearchRequest, catalog: Catalog) -> list[dict[str, Any]]:
    return await asyncio.to_thread(catalog.search, payload.query)


@router.post("/add", response_model=ApiResponse, summary="Add Product")
async def add(payload: ProductAddRequest, catalog: Catalog) -> ApiResponse:
    product = await asyncio.to_thread(
        catalog.add, payload.product, default_seller_wallet=settings.op_wallet_address_url
    )
    return ApiResponse(data=product)


@router.get("/{product_id}", summary="Get Product")
async def get(product_id: str, catalog: Catalog) -> dict[str, Any]:
    return await asyncio.to_thread(catalog.get, product_id)
