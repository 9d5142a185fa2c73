from typing import Any


class OpenPaymentsError(Exception):
    """Base class for every error raised by the SDK."""

    code = "OPEN_PAYMENTS_ERROR"


class KeyNotFoundError(OpenPaymentsError):
    code = "KEY_NOT_FOUND"

    def __init__(self, path: str) -> None:
        super().__init__(f"Private key file not found at {path}")
        self.path = path


class KeyUnreadableError(OpenPaymentsError):
    code = "KEY_UNREADABLE"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Private key at {path} could not be read: {reason}")
        self.path = path
        self.reason = reason


class SigningConfigMissingError(OpenPaymentsError):
    code = "SIGNING_CONFIG_MISSING"

    def __init__(self) -> None:
        super().__init__("Signing requested but no signing config provided")


class HttpRequestError(OpenPaymentsError):
    code = "HTTP_REQUEST_FAILED"

    def __init__(self, *, method: str, url: str, status: int, body: Any) -> None:
        super().__init__(f"HTTP {method} {url} failed with status {status}")
        self.method = method
        self.url = url
        self.status = status
        self.body = body

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status < 500

    @property
    def is_server_error(self) -> bool:
        return self.status >= 500


class TransportError(OpenPaymentsError):
    """Network-level failure: no HTTP status is available."""

    code = "TRANSPORT_ERROR"

    def __init__(self, *, method: str, url: str, reason: str, is_timeout: bool = False) -> None:
        super().__init__(f"HTTP {method} {url} could not be completed: {reason}")
        self.method = method
        self.url = url
        self.reason = reason
        self.is_timeout = is_timeout


class InvalidGrantError(OpenPaymentsError):
    code = "GRANT_INVALID"

    def __init__(self, payload: Any) -> None:
        super().__init__("Grant response carries neither an access token nor a continue descriptor")
        self.payload = payload


class GrantNotFinalizedError(OpenPaymentsError):
    code = "GRANT_NOT_FINALIZED"

    def __init__(self, payload: Any) -> None:
        super().__init__("Grant continuation did not result in a finalized grant")
        self.payload = payload


class PaymentTimeoutError(OpenPaymentsError):
    code = "PAYMENT_TIMEOUT"

    def __init__(self, attempts: int, last_payment: Any = None) -> None:
        super().__init__(f"Payment did not complete after {attempts} attempts")
        self.attempts = attempts
        self.last_payment = last_payment


class BranchError(OpenPaymentsError):
    """A named branch of a concurrent join failed; the original error is ``cause``."""

    code = "BRANCH_FAILED"

    def __init__(self, branch: str, cause: BaseException) -> None:
        super().__init__(f"{branch} failed: {cause}")
        self.branch = branch
        self.cause = cause


class InvalidWalletAddressError(OpenPaymentsError):
    """Wallet address document is not an object or lacks required fields."""

    code = "WALLET_INVALID"

    def __init__(self, url: str, missing: list[str]) -> None:
        detail = ", ".join(missing) if missing else "not a JSON object"
        super().__init__(f"Wallet address {url} is unusable: {detail}")
        self.url = url
        self.missing = missing
