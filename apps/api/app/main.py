from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from openpayments_sdk.client import AsyncOpenPaymentsClient
from openpayments_sdk.config import validate_signing_config
from openpayments_sdk.errors import OpenPaymentsError
from openpayments_sdk.keys import KeyStore
from starlette.middleware.base import BaseHTTPMiddleware

from app.api.routes.checkout import router as checkout_router
from app.api.routes.grants import router as grants_router
from app.api.routes.health import router as health_router
from app.api.routes.incoming_payments import router as incoming_payments_router
from app.api.routes.outgoing_payments import router as outgoing_payments_router
from app.api.routes.payment_links import router as payment_links_router
from app.api.routes.products import router as products_router
from app.api.routes.quotes import router as quotes_router
from app.api.routes.referral import router as referral_router
from app.api.routes.tokens import router as tokens_router
from app.api.routes.users import router as users_router
from app.api.routes.wallet import router as wallet_router
from app.core.config import API_VERSION, settings
from app.core.errors import open_payments_error_handler
from app.core.openapi import API_DESCRIPTION, install_custom_openapi
from app.observability.logging import configure_logging
from app.observability.request_logging import request_logging_middleware


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_logging()
    problems = validate_signing_config(settings.signing_config())
    if problems:
        raise RuntimeError(f"Invalid signing configuration: {'; '.join(problems)}")

    app.state.op_client = AsyncOpenPaymentsClient(
        KeyStore(),
        timeout=settings.op_http_timeout_seconds,
    )
    yield


app = FastAPI(
    title="Open Payments Referral API",
    summary="Signed Open Payments client with referral split payment links",
    description=API_DESCRIPTION,
    version=API_VERSION,
    openapi_url="/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    servers=[
        {"url": f"http://localhost:{settings.app_port}", "description": "Local development"},
    ],
    lifespan=lifespan,
)
app.openapi = install_custom_openapi(app)  # type: ignore[method-assign]
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(BaseHTTPMiddleware, dispatch=request_logging_middleware)
app.add_exception_handler(OpenPaymentsError, open_payments_error_handler)  # type: ignore[arg-type]

app.include_router(health_router)
app.include_router(wallet_router)
app.include_router(grants_router)
app.include_router(incoming_payments_router)
app.include_router(quotes_router)
app.include_router(outgoing_payments_router)
app.include_router(tokens_router)
app.include_router(payment_links_router)
app.include_router(products_router)
app.include_router(users_router)
app.include_router(referral_router)
app.include_router(checkout_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.app_port)
