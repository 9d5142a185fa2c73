from dataclasses import dataclass
from urllib.parse import quote

DEFAULT_WEB_BASE_URL = "https://pay.interledger-test.dev/payment-choice"
DEFAULT_DEEP_LINK_BASE = "openpayments://pay"


@dataclass(frozen=True)
class PaymentLinks:
    deep_link: str
    web_link: str
    receiver: str

    def to_dict(self) -> dict[str, str]:
        return {"deepLink": self.deep_link, "webLink": self.web_link, "receiver": self.receiver}


def generate_payment_link(
    receiver: str,
    amount: str | None = None,
    *,
    web_base_url: str = DEFAULT_WEB_BASE_URL,
    deep_link_base: str = DEFAULT_DEEP_LINK_BASE,
) -> PaymentLinks:
    query = f"receiver={quote(receiver, safe='')}"
    if amount:
        query += f"&amount={quote(str(amount), safe='')}"
    return PaymentLinks(
        deep_link=f"{deep_link_base}?{query}",
        web_link=f"{web_base_url}?{query}",
        receiver=receiver,
    )
