import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from openpayments_sdk.amounts import is_payment_complete
from openpayments_sdk.errors import HttpRequestError, PaymentTimeoutError, TransportError

T = TypeVar("T")
Sleep = Callable[[float], Awaitable[Any]]


async def wait_for_payment_completion(
    fetch_payment: Callable[[], Awaitable[dict[str, Any]]],
    *,
    max_attempts: int = 30,
    interval_seconds: float = 2.0,
    sleep: Sleep = asyncio.sleep,
) -> dict[str, Any]:
    """Poll ``fetch_payment`` until the payment completes or the attempt budget runs out.

    Errors raised by ``fetch_payment`` propagate unchanged; only exhausting
    ``max_attempts`` produces :class:`PaymentTimeoutError`.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    payment: dict[str, Any] | None = None
    for attempt in range(1, max_attempts + 1):
        payment = await fetch_payment()
        if is_payment_complete(payment):
            return payment
        if attempt < max_attempts:
            await sleep(interval_seconds)

    raise PaymentTimeoutError(max_attempts, payment)


def is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, HttpRequestError):
        return exc.is_server_error
    return isinstance(exc, TransportError)


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    *,
    max_retries: int = 3,
    initial_delay_seconds: float = 1.0,
    should_retry: Callable[[BaseException], bool] = is_retryable,
    sleep: Sleep = asyncio.sleep,
) -> T:
    for attempt in range(max_retries):
        try:
            return await operation()
        except Exception as exc:
            if attempt == max_retries - 1 or not should_retry(exc):
                raise
            await sleep(initial_delay_seconds * 2**attempt)
    raise ValueError("max_retries must be at least 1")
