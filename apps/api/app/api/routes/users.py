from fastapi import APIRouter

from app.schemas.common import ApiResponse
from app.schemas.shop import LoginRequest

router = APIRouter(prefix="/api/user", tags=["user"])


@router.post("/login", response_model=ApiResponse, summary="Demo Login", description="Echoes the submitted body.")
async def login(payload: LoginRequest) -> ApiResponse:
    return ApiResponse(data=payload.echo())
