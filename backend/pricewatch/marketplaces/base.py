from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, Sequence

from playwright.async_api import Page

PreStep = Callable[[Page], Awaitable[None]]


@dataclass(frozen=True)
class SiteStrategy:
    """
    Pure description of how to read one retailer's product page.

    Selectors are tried in order; the first one yielding non-empty
    text wins.
    """

    name: str
    base_domain: str
    title_selectors: tuple[str, ...]
    price_selectors: tuple[str, ...]
    pre_step: PreStep | None = None
    # wait for the first title selector before scanning (ms)
    title_wait_ms: int | None = None

    def can_handle(self, hostname: str) -> bool:
        return self.base_domain in hostname.lower()


async def first_text(
    page: Page, selectors: Sequence[str]
) -> tuple[str | None, str | None]:
    """Return (text, selector) for the first selector with visible text."""
    for selector in selectors:
        element = await page.query_selector(selector)
        if element is None:
            continue
        text = (await element.inner_text() or "").strip()
        if text:
            return text, selector
    return None, None
