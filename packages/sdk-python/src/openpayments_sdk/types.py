from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, NotRequired, TypedDict

AccessType = Literal["incoming-payment", "quote", "outgoing-payment"]
AccessAction = Literal["create", "read", "list", "complete"]


@dataclass(frozen=True)
class SigningConfig:
    wallet_address_url: str
    private_key_path: str
    key_id: str

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SigningConfig":
        def pick(*keys: str) -> str:
            for key in keys:
                value = data.get(key)
                if value:
                    return str(value)
            return ""

        return cls(
            wallet_address_url=pick("walletAddressUrl", "wallet_address_url"),
            private_key_path=pick("privateKeyPath", "private_key_path"),
            key_id=pick("keyId", "key_id"),
        )


@dataclass
class HttpRequestSpec:
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None
    access_token: str | None = None
    params: dict[str, str] | None = None


class Amount(TypedDict):
    assetCode: str
    assetScale: int
    value: str


class AccessLimits(TypedDict, total=False):
    debitAmount: Amount
    receiveAmount: Amount
    interval: str


class AccessScope(TypedDict):
    type: AccessType
    actions: list[AccessAction]
    limits: NotRequired[AccessLimits]
    identifier: NotRequired[str]


class InteractFinish(TypedDict):
    method: Literal["redirect"]
    uri: str
    nonce: str


class InteractRequest(TypedDict):
    start: list[Literal["redirect"]]
    finish: NotRequired[InteractFinish]


class AccessTokenRequest(TypedDict):
    access: list[AccessScope]


class GrantRequestBody(TypedDict):
    access_token: AccessTokenRequest
    client: str
    interact: NotRequired[InteractRequest]


class AccessTokenInfo(TypedDict, total=False):
    value: str
    manage: str
    expires_in: int
    access: list[AccessScope]


class WalletAddress(TypedDict, total=False):
    id: str
    publicName: str
    assetCode: str
    assetScale: int
    authServer: str
    resourceServer: str


class JsonWebKey(TypedDict):
    kid: str
    alg: Literal["EdDSA"]
    kty: Literal["OKP"]
    crv: Literal["Ed25519"]
    x: str
    use: NotRequired[str]


class IncomingPayment(TypedDict, total=False):
    id: str
    walletAddress: str
    completed: bool
    incomingAmount: Amount
    receivedAmount: Amount
    expiresAt: str
    metadata: dict[str, Any]
    createdAt: str


class Quote(TypedDict, total=False):
    id: str
    walletAddress: str
    receiver: str
    debitAmount: Amount
    receiveAmount: Amount
    method: str
    expiresAt: str


class OutgoingPayment(TypedDict, total=False):
    id: str
    walletAddress: str
    quoteId: str
    failed: bool
    receiver: str
    debitAmount: Amount
    receiveAmount: Amount
    sentAmount: Amount
    metadata: dict[str, Any]


class PageInfo(TypedDict, total=False):
    startCursor: str
    endCursor: str
    hasNextPage: bool
    hasPreviousPage: bool


class PaymentPage(TypedDict, total=False):
    pagination: PageInfo
    result: list[dict[str, Any]]
