import logging
from time import perf_counter
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

logger = logging.getLogger("openpayments.http")

REQUEST_ID_HEADER = "X-Request-Id"


def _log_request(request: Request, request_id: str, status: int, start: float, *, failed: bool = False) -> None:
    logger.info(
        "http_request",
        extra={
            "event_name": "http_request",
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status": status,
            "latency_ms": round((perf_counter() - start) * 1000, 2),
        },
        exc_info=failed,
    )


async def request_logging_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
    request.state.request_id = request_id

    start = perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        _log_request(request, request_id, 500, start, failed=True)
        raise

    _log_request(request, request_id, response.status_code, start)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response
