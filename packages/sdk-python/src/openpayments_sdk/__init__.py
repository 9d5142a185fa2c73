from openpayments_sdk.amounts import (
    PaymentProgress,
    calculate_fee,
    compare_amounts,
    format_amount,
    is_payment_complete,
    make_amount,
    parse_amount,
    payment_progress,
    split_amount,
)
from openpayments_sdk.canonical import serialize_body
from openpayments_sdk.client import (
    AsyncOpenPaymentsClient,
    parse_response_body,
    should_sign,
)
from openpayments_sdk.concurrency import gather_branches
from openpayments_sdk.config import validate_signing_config
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
from openpayments_sdk.grants import (
    Grant,
    GrantState,
    classify_grant,
    continue_grant,
    is_finalized_grant,
    is_pending_grant,
    request_grant,
    request_incoming_payment_grant,
    request_outgoing_payment_grant,
    request_quote_grant,
    revoke_grant,
)
from openpayments_sdk.incoming_payments import (
    complete_incoming_payment,
    create_incoming_payment,
    get_incoming_payment,
    list_incoming_payments,
)
from openpayments_sdk.keys import (
    KeyStore,
    encode_private_key_pem,
    generate_keys,
    load_signing_key,
    public_jwk,
)
from openpayments_sdk.links import PaymentLinks, generate_payment_link
from openpayments_sdk.outgoing_payments import (
    create_outgoing_payment,
    get_outgoing_payment,
    list_outgoing_payments,
)
from openpayments_sdk.polling import retry_with_backoff, wait_for_payment_completion
from openpayments_sdk.quotes import (
    create_quote,
    create_quote_with_fixed_receive,
    create_quote_with_fixed_send,
    get_quote,
)
from openpayments_sdk.signatures import (
    create_signature_headers,
    ensure_key_id,
    get_key_id,
    verify_signature_headers,
)
from openpayments_sdk.tokens import revoke_access_token, rotate_access_token
from openpayments_sdk.types import HttpRequestSpec, SigningConfig
from openpayments_sdk.wallet_address import (
    WalletValidation,
    get_wallet_address,
    get_wallet_address_keys,
    require_wallet_fields,
    resource_server_for,
    validate_wallet_addresses,
)

__all__ = [
    "AsyncOpenPaymentsClient",
    "HttpRequestSpec",
    "SigningConfig",
    "KeyStore",
    "should_sign",
    "parse_response_body",
    "serialize_body",
    "load_signing_key",
    "encode_private_key_pem",
    "generate_keys",
    "public_jwk",
    "create_signature_headers",
    "verify_signature_headers",
    "ensure_key_id",
    "get_key_id",
    "Grant",
    "GrantState",
    "classify_grant",
    "is_finalized_grant",
    "is_pending_grant",
    "request_grant",
    "request_incoming_payment_grant",
    "request_quote_grant",
    "request_outgoing_payment_grant",
    "continue_grant",
    "revoke_grant",
    "create_incoming_payment",
    "get_incoming_payment",
    "list_incoming_payments",
    "complete_incoming_payment",
    "create_quote",
    "get_quote",
    "create_quote_with_fixed_send",
    "create_quote_with_fixed_receive",
    "create_outgoing_payment",
    "get_outgoing_payment",
    "list_outgoing_payments",
    "rotate_access_token",
    "revoke_access_token",
    "WalletValidation",
    "get_wallet_address",
    "get_wallet_address_keys",
    "require_wallet_fields",
    "resource_server_for",
    "validate_wallet_addresses",
    "PaymentLinks",
    "generate_payment_link",
    "PaymentProgress",
    "parse_amount",
    "make_amount",
    "format_amount",
    "compare_amounts",
    "split_amount",
    "calculate_fee",
    "payment_progress",
    "is_payment_complete",
    "wait_for_payment_completion",
    "retry_with_backoff",
    "gather_branches",
    "validate_signing_config",
    "OpenPaymentsError",
    "KeyNotFoundError",
    "KeyUnreadableError",
    "SigningConfigMissingError",
    "HttpRequestError",
    "InvalidWalletAddressError",
    "TransportError",
    "InvalidGrantError",
    "GrantNotFinalizedError",
    "PaymentTimeoutError",
    "BranchError",
]
