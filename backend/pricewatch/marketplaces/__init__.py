from typing import Sequence
from urllib.parse import urlparse

from pricewatch.marketplaces.amazon import AMAZON
from pricewatch.marketplaces.base import SiteStrategy, first_text
from pricewatch.marketplaces.flipkart import FLIPKART

# add a retailer by adding a row
STRATEGIES: tuple[SiteStrategy, ...] = (AMAZON, FLIPKART)


def resolve_strategy(
    hostname: str, strategies: Sequence[SiteStrategy] = STRATEGIES
) -> SiteStrategy | None:
    for strategy in strategies:
        if strategy.can_handle(hostname):
            return strategy
    return None


def hostname_of(url: str) -> str | None:
    try:
        parsed = urlparse(url)
    except ValueError:
        return None
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        return None
    return parsed.hostname


__all__ = [
    "AMAZON",
    "FLIPKART",
    "STRATEGIES",
    "SiteStrategy",
    "first_text",
    "hostname_of",
    "resolve_strategy",
]
