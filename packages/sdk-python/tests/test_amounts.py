from decimal import Decimal

import pytest

from openpayments_sdk.amounts import (
    calculate_fee,
    compare_amounts,
    format_amount,
    is_payment_complete,
    make_amount,
    parse_amount,
    payment_progress,
    split_amount,
)
from openpayments_sdk.links import generate_payment_link


def test_parse_amount_to_minor_units() -> None:
    assert parse_amount("12.34", 2) == "1234"
    assert parse_amount(Decimal("0.005"), 2) == "1"
    assert parse_amount(7, 0) == "7"
    assert parse_amount("1.5", 9) == "1500000000"


def test_parse_amount_rejects_negative() -> None:
    with pytest.raises(ValueError):
        parse_amount("-1", 2)


def test_make_and_format_amount() -> None:
    assert make_amount("10", "USD", 2) == {"assetCode": "USD", "assetScale": 2, "value": "1000"}
    assert format_amount("1234", 2, "USD") == "USD 12.34"
    assert format_amount("5", 0) == "5"


def test_compare_amounts() -> None:
    low = {"value": "100", "assetCode": "USD", "assetScale": 2}
    high = {"value": "250", "assetCode": "USD", "assetScale": 2}
    assert compare_amounts(low, high) == -1
    assert compare_amounts(high, low) == 1
    assert compare_amounts(low, dict(low)) == 0
    with pytest.raises(ValueError):
        compare_amounts(low, {"value": "100", "assetCode": "EUR", "assetScale": 2})


@pytest.mark.parametrize(
    ("total", "percent", "expected"),
    [
        (10000, 5, (9500, 500)),
        (101, 5, (95, 6)),
        (1, 5, (0, 1)),
        (0, 5, (0, 0)),
        (999, 0, (999, 0)),
    ],
)
def test_split_amount_preserves_total(total: int, percent: int, expected: tuple[int, int]) -> None:
    assert split_amount(total, percent) == expected
    assert sum(split_amount(total, percent)) == total


def test_split_amount_rejects_out_of_range_percent() -> None:
    with pytest.raises(ValueError):
        split_amount(100, 101)


def test_calculate_fee() -> None:
    quote = {
        "debitAmount": {"value": "1050", "assetCode": "USD", "assetScale": 2},
        "receiveAmount": {"value": "1000", "assetCode": "USD", "assetScale": 2},
    }
    assert calculate_fee(quote) == {
        "value": "50",
        "assetCode": "USD",
        "assetScale": 2,
        "percentage": "4.76",
    }


def test_payment_progress() -> None:
    partial = payment_progress(
        {"incomingAmount": {"value": "1000"}, "receivedAmount": {"value": "250"}}
    )
    assert (partial.expected, partial.received, partial.remaining) == (1000, 250, 750)
    assert partial.percentage == "25.00"
    assert not partial.is_complete

    assert is_payment_complete({"incomingAmount": {"value": "10"}, "receivedAmount": {"value": "12"}})
    assert is_payment_complete({"completed": True, "receivedAmount": {"value": "0"}})
    assert not is_payment_complete({"receivedAmount": {"value": "500"}})


def test_payment_link_encodes_receiver_and_amount() -> None:
    links = generate_payment_link("https://ilp.test/incoming-payments/1", "10.00")
    query = "receiver=https%3A%2F%2Filp.test%2Fincoming-payments%2F1&amount=10.00"
    assert links.deep_link == f"openpayments://pay?{query}"
    assert links.web_link == f"https://pay.interledger-test.dev/payment-choice?{query}"
    assert links.to_dict()["receiver"] == "https://ilp.test/incoming-payments/1"


def test_payment_link_without_amount_uses_custom_bases() -> None:
    links = generate_payment_link(
        "https://ilp.test/ip/1", web_base_url="https://shop.test/pay", deep_link_base="shop://pay"
    )
    assert links.to_dict() == {
        "deepLink": "shop://pay?receiver=https%3A%2F%2Filp.test%2Fip%2F1",
        "webLink": "https://shop.test/pay?receiver=https%3A%2F%2Filp.test%2Fip%2F1",
        "receiver": "https://ilp.test/ip/1",
    }
