from collections.abc import Mapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from openpayments_sdk.types import Amount


def parse_amount(decimal_value: Decimal | int | float | str, asset_scale: int) -> str:
    """Convert a human amount (``"12.34"``) into a minor-unit integer string."""
    if asset_scale < 0:
        raise ValueError("asset_scale must be non-negative")
    value = Decimal(str(decimal_value))
    if value < 0:
        raise ValueError("amount must be non-negative")
    return str(int(value.scaleb(asset_scale).quantize(Decimal(1), rounding=ROUND_HALF_UP)))


def make_amount(decimal_value: Decimal | int | float | str, asset_code: str, asset_scale: int) -> Amount:
    return {
        "assetCode": asset_code,
        "assetScale": asset_scale,
        "value": parse_amount(decimal_value, asset_scale),
    }


def format_amount(value: str, asset_scale: int, asset_code: str = "") -> str:
    amount = Decimal(int(value)).scaleb(-asset_scale)
    return f"{asset_code} {amount:.{asset_scale}f}".strip()


def compare_amounts(first: Amount, second: Amount) -> int:
    if first["assetCode"] != second["assetCode"]:
        raise ValueError("Cannot compare amounts with different asset codes")
    left, right = int(first["value"]), int(second["value"])
    return (left > right) - (left < right)


def split_amount(total: int, share_percent: int) -> tuple[int, int]:
    """Split ``total`` minor units; the main part is floored, the share takes the remainder."""
    if not 0 <= share_percent <= 100:
        raise ValueError("share_percent must be between 0 and 100")
    main = total * (100 - share_percent) // 100
    return main, total - main


def _percentage(part: int, whole: int) -> str:
    if whole == 0:
        return "0.00"
    return f"{Decimal(part) * 100 / Decimal(whole):.2f}"


def calculate_fee(quote: Mapping[str, Any]) -> dict[str, Any]:
    debit = quote["debitAmount"]
    debit_value = int(debit["value"])
    fee_value = debit_value - int(quote["receiveAmount"]["value"])
    return {
        "value": str(fee_value),
        "assetCode": debit["assetCode"],
        "assetScale": debit["assetScale"],
        "percentage": _percentage(fee_value, debit_value),
    }


@dataclass(frozen=True)
class PaymentProgress:
    expected: int
    received: int
    remaining: int
    percentage: str
    is_complete: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "expected": self.expected,
            "received": self.received,
            "remaining": self.remaining,
            "percentage": self.percentage,
            "isComplete": self.is_complete,
        }


def payment_progress(payment: Mapping[str, Any]) -> PaymentProgress:
    expected = int((payment.get("incomingAmount") or {}).get("value", "0"))
    received = int((payment.get("receivedAmount") or {}).get("value", "0"))
    completed = bool(payment.get("completed"))
    return PaymentProgress(
        expected=expected,
        received=received,
        remaining=max(expected - received, 0),
        percentage=_percentage(received, expected),
        is_complete=completed or (expected > 0 and received >= expected),
    )


def is_payment_complete(payment: Mapping[str, Any]) -> bool:
    return payment_progress(payment).is_complete
