import pytest

from pricewatch.core.pricing import format_price, parse_price


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("₹1,299", 1299.0),
        ("1,299.", 1299.0),
        ("₹1,23,456.50", 123456.5),
        ("$49.99 USD", 49.99),
        ("  2 013 ", 2013.0),
    ],
)
def test_parse_price_strips_everything_but_digits_and_dot(raw, expected):
    assert parse_price(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "Currently unavailable", "₹", "..."])
def test_parse_price_returns_none_without_digits(raw):
    assert parse_price(raw) is None


def test_parse_price_reads_leading_number_only():
    assert parse_price("1.299.00") == 1.299


def test_parse_price_keeps_zero_for_caller_to_reject():
    assert parse_price("₹0") == 0.0


def test_format_price_rounds_to_two_decimals():
    assert format_price(949.0, "₹") == "₹949.00"
    assert format_price(123456.789) == "123,456.79"
    assert format_price(None) == "n/a"
