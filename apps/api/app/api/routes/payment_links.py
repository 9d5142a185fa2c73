from fastapi import APIRouter
from openpayments_sdk.links import generate_payment_link

from app.core.config import settings
from app.schemas.common import ApiResponse
from app.schemas.payments import PaymentLinkRequest

router = APIRouter(prefix="/api/payment-links", tags=["payment-links"])


@router.post("", response_model=ApiResponse, summary="Generate Payment Link")
async def create(payload: PaymentLinkRequest) -> ApiResponse:
    links = generate_payment_link(
        payload.receiver,
        payload.amount,
        web_base_url=settings.payment_link_web_base_url,
        deep_link_base=settings.payment_link_deep_link_base,
    )
    return ApiResponse(data=links.to_dict())
