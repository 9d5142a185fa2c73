from datetime import UTC, datetime

from fastapi import APIRouter, Request

from app.core.config import API_VERSION, settings

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", summary="Health Check")
async def health() -> dict[str, object]:
    return {
        "status": "healthy",
        "timestamp": datetime.now(tz=UTC).isoformat(),
        "version": API_VERSION,
    }


@router.get("/info", summary="API Info", description="Lists every endpoint grouped by tag.")
async def info(request: Request) -> dict[str, object]:
    endpoints: dict[str, list[str]] = {}
    for path, operations in request.app.openapi()["paths"].items():
        for method, operation in sorted(operations.items()):
            tag = str(operation["tags"][0]) if operation.get("tags") else "other"
            endpoints.setdefault(tag, []).append(f"{method.upper()} {path}")

    return {
        "name": settings.app_name,
        "version": API_VERSION,
        "description": "Open Payments API Integration",
        "defaultWallet": settings.op_wallet_address_url,
        "endpoints": endpoints,
    }
