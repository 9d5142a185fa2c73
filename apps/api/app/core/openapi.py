from collections.abc import Callable
from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

OPENAPI_TAGS_METADATA = [
    {"name": "health", "description": "Liveness check and endpoint listing."},
    {"name": "wallet", "description": "Wallet address lookup, public keys and batch validation."},
    {
        "name": "grants",
        "description": "GNAP grant requests, continuation after payer interaction, and revocation.",
    },
    {"name": "incoming-payments", "description": "Incoming payments on a resource server."},
    {"name": "quotes", "description": "Quotes for fixed-send or fixed-receive payments."},
    {"name": "outgoing-payments", "description": "Outgoing payments against an accepted quote."},
    {"name": "tokens", "description": "Access token rotation and revocation."},
    {"name": "payment-links", "description": "Web and deep links for paying an incoming payment."},
    {"name": "products", "description": "Product catalog backed by a JSON file."},
    {"name": "referral", "description": "Referral sale counters and split payment links."},
    {"name": "checkout", "description": "Two-step payer checkout with interactive grant approval."},
    {"name": "user", "description": "Demo login."},
]

API_DESCRIPTION = """
## Open Payments Referral API

Proxies Open Payments operations and sells catalog products through referral
links that split each sale between the seller and the referrer.

### Signing identity
Outbound requests are signed with the process-wide key configured through
`OP_WALLET_ADDRESS_URL`, `OP_PRIVATE_KEY_PATH` and `OP_KEY_ID`. Any request
body may carry a `config` object (`walletAddressUrl`, `privateKeyPath`,
`keyId`) to use another identity for that request only.

### Error format
Errors are returned as:

```json
{"detail": {"code": "SOME_CODE", "message": "Human readable message"}}
```

Upstream 4xx answers keep their status (`UPSTREAM_REJECTED`, upstream body in
`detail.upstream`); upstream 5xx and unreachable servers become 502, timeouts
504.

### Referral flow
1. `GET /api/referral/link?productId=..&refererId=..`
2. Share the seller and referral payment links with the buyer
3. `GET /api/referral/webhook?productId=..&refereralId=..` counts the sale
"""

COMMON_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    409: {
        "description": "A grant needs payer interaction before it can be used.",
        "content": {
            "application/json": {
                "example": {
                    "detail": {
                        "code": "GRANT_INTERACTION_REQUIRED",
                        "message": "Seller incoming payment grant requires user interaction to finalize",
                    }
                }
            }
        },
    },
    502: {
        "description": "Open Payments server failed, was unreachable, or returned an unusable grant.",
        "content": {
            "application/json": {
                "example": {
                    "detail": {
                        "code": "UPSTREAM_ERROR",
                        "message": "HTTP POST https://auth.example/ failed with status 500",
                    }
                }
            }
        },
    },
    504: {
        "description": "Open Payments server timed out.",
        "content": {
            "application/json": {
                "example": {
                    "detail": {
                        "code": "UPSTREAM_TIMEOUT",
                        "message": "HTTP GET https://wallet.example/alice could not be completed: timeout",
                    }
                }
            }
        },
    },
}


def install_custom_openapi(app: FastAPI) -> Callable[[], dict[str, Any]]:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        app.openapi_schema = get_openapi(
            title=app.title,
            version=app.version,
            summary=app.summary,
            description=app.description,
            routes=app.routes,
            tags=OPENAPI_TAGS_METADATA,
            servers=app.servers,
            license_info=app.license_info,
        )
        return app.openapi_schema

    return custom_openapi
