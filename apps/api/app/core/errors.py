import logging
from typing import Any, NoReturn

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from openpayments_sdk.errors import (
    BranchError,
    GrantNotFinalizedError,
    HttpRequestError,
    InvalidGrantError,
    InvalidWalletAddressError,
    KeyNotFoundError,
    KeyUnreadableError,
    OpenPaymentsError,
    PaymentTimeoutError,
    SigningConfigMissingError,
    TransportError,
)

logger = logging.getLogger("openpayments.errors")


def raise_http_error(status_code: int, code: str, message: str, **extra: Any) -> NoReturn:
    raise HTTPException(status_code=status_code, detail={"code": code, "message": message, **extra})


def describe_open_payments_error(exc: OpenPaymentsError) -> tuple[int, dict[str, Any]]:
    """Map a core error to the HTTP status and ``detail`` body the API answers with."""
    branch = None
    if isinstance(exc, BranchError):
        branch = exc.branch
        cause = exc.cause
        if not isinstance(cause, OpenPaymentsError):
            return 502, {"code": "UPSTREAM_ERROR", "message": str(exc), "branch": branch}
        exc = cause

    status, detail = _describe(exc)
    if branch is not None:
        # A rejected upstream call inside a join is a gateway failure for our caller.
        if status < 500:
            status = 502
        detail["branch"] = branch
        detail["message"] = f"{branch} failed: {detail['message']}"
    return status, detail


def _describe(exc: OpenPaymentsError) -> tuple[int, dict[str, Any]]:
    if isinstance(exc, HttpRequestError):
        if exc.is_server_error:
            return 502, {"code": "UPSTREAM_ERROR", "message": str(exc), "upstream": exc.body}
        return exc.status, {"code": "UPSTREAM_REJECTED", "message": str(exc), "upstream": exc.body}
    if isinstance(exc, TransportError):
        if exc.is_timeout:
            return 504, {"code": "UPSTREAM_TIMEOUT", "message": str(exc)}
        return 502, {"code": "UPSTREAM_UNREACHABLE", "message": str(exc)}
    if isinstance(exc, (KeyNotFoundError, KeyUnreadableError)):
        return 500, {"code": "SIGNING_KEY_UNAVAILABLE", "message": str(exc)}
    if isinstance(exc, SigningConfigMissingError):
        return 500, {"code": "SIGNING_CONFIG_MISSING", "message": str(exc)}
    if isinstance(exc, GrantNotFinalizedError):
        return 502, {"code": "GRANT_NOT_FINALIZED", "message": str(exc), "grant": exc.payload}
    if isinstance(exc, InvalidGrantError):
        return 502, {"code": "GRANT_INVALID", "message": str(exc)}
    if isinstance(exc, InvalidWalletAddressError):
        return 502, {"code": "WALLET_INVALID", "message": str(exc), "missing": exc.missing}
    if isinstance(exc, PaymentTimeoutError):
        return 504, {"code": "PAYMENT_TIMEOUT", "message": str(exc), "payment": exc.last_payment}
    return 500, {"code": exc.code, "message": str(exc)}


async def open_payments_error_handler(request: Request, exc: OpenPaymentsError) -> JSONResponse:
    source = exc.cause if isinstance(exc, BranchError) else exc
    status, detail = describe_open_payments_error(exc)
    logger.warning(
        "open_payments_error",
        extra={
            "event_name": "open_payments_error",
            "method": request.method,
            "path": request.url.path,
            "status": status,
            "error_kind": detail["code"],
            "upstream_status": getattr(source, "status", None),
            "branch": detail.get("branch"),
        },
    )
    return JSONResponse(status_code=status, content={"detail": detail})
