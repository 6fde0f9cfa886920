import re

_NOT_PRICE_CHAR = re.compile(r"[^0-9.]")
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def parse_price(raw: str | None) -> float | None:
    """
    Strip everything but digits and '.', then read the leading decimal.

    "₹1,299."        -> 1299.0
    "$1,234.56 USD"  -> 1234.56
    "Out of stock"   -> None
    """
    if not raw:
        return None

    cleaned = _NOT_PRICE_CHAR.sub("", raw)
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return None

    return float(match.group(0))


def format_price(value: float | None, symbol: str = "") -> str:
    if value is None:
        return "n/a"
    return f"{symbol}{value:,.2f}"
