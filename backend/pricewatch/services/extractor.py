from __future__ import annotations

from typing import Sequence

import structlog
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from pricewatch.core.config import settings
from pricewatch.core.errors import (
    ExtractionMismatch,
    NavigationFailure,
    PriceWatchError,
    UnsupportedSite,
)
from pricewatch.core.pricing import parse_price
from pricewatch.marketplaces import (
    STRATEGIES,
    SiteStrategy,
    first_text,
    hostname_of,
    resolve_strategy,
)
from pricewatch.models.extraction import (
    Extraction,
    ExtractionFailure,
    ExtractionResult,
)
from pricewatch.services.browser import RenderingSessionFactory

logger = structlog.get_logger(__name__)


class Extractor:
    """
    Renders a product page and reads {title, price} from it.

    `extract` never raises for site problems: unreachable pages, unknown
    hosts and drifted selectors all come back as an ExtractionFailure.
    """

    def __init__(
        self,
        session_factory: RenderingSessionFactory,
        strategies: Sequence[SiteStrategy] = STRATEGIES,
        navigation_timeout_ms: int = settings.NAVIGATION_TIMEOUT_MS,
    ):
        self.session_factory = session_factory
        self.strategies = strategies
        self.navigation_timeout_ms = navigation_timeout_ms

    # -------------------------
    # Public API
    # -------------------------

    async def extract(self, url: str) -> Extraction:
        try:
            strategy = self._dispatch(url)
        except UnsupportedSite as exc:
            return self._fail(exc, url)

        logger.info("extractor.start", url=url, site=strategy.name)

        try:
            async with self.session_factory.session() as page:
                await self._navigate(page, url, strategy)
                result = await self._apply(page, url, strategy)
        except PriceWatchError as exc:
            return self._fail(exc, url)
        except Exception as exc:
            # browser launch / crash: same degraded path as a dead site
            return self._fail(
                NavigationFailure(
                    f"{type(exc).__name__}: {exc}", url=url, site=strategy.name
                ),
                url,
            )

        logger.info(
            "extractor.ok",
            url=url,
            site=strategy.name,
            title=result.title,
            price=result.current_price,
        )
        return result

    # -------------------------
    # Steps
    # -------------------------

    def _dispatch(self, url: str) -> SiteStrategy:
        hostname = hostname_of(url)
        if hostname is None:
            raise UnsupportedSite("malformed url", url=url)

        strategy = resolve_strategy(hostname, self.strategies)
        if strategy is None:
            raise UnsupportedSite(f"no strategy for host {hostname}", url=url)
        return strategy

    async def _navigate(self, page: Page, url: str, strategy: SiteStrategy) -> None:
        try:
            await page.goto(
                url,
                wait_until="domcontentloaded",
                timeout=self.navigation_timeout_ms,
            )
        except PlaywrightError as exc:
            raise NavigationFailure(str(exc), url=url, site=strategy.name) from exc

    async def _apply(
        self, page: Page, url: str, strategy: SiteStrategy
    ) -> ExtractionResult:
        if strategy.pre_step is not None:
            await strategy.pre_step(page)

        if strategy.title_wait_ms:
            anchor = strategy.title_selectors[0]
            try:
                await page.wait_for_selector(anchor, timeout=strategy.title_wait_ms)
            except PlaywrightError as exc:
                raise ExtractionMismatch(
                    "title never appeared",
                    url=url,
                    site=strategy.name,
                    selector=anchor,
                ) from exc

        title, _ = await self._read(page, url, strategy, strategy.title_selectors)
        price_text, price_selector = await self._read(
            page, url, strategy, strategy.price_selectors
        )

        if not title:
            raise ExtractionMismatch(
                "no title selector matched",
                url=url,
                site=strategy.name,
                selector=", ".join(strategy.title_selectors),
            )

        price = parse_price(price_text)
        if price is None:
            raise ExtractionMismatch(
                f"unparseable price text {price_text!r}",
                url=url,
                site=strategy.name,
                selector=price_selector or ", ".join(strategy.price_selectors),
            )
        # a zero almost always means the selector hit a non-price element
        if price == 0:
            raise ExtractionMismatch(
                "price parsed as zero",
                url=url,
                site=strategy.name,
                selector=price_selector,
            )

        return ExtractionResult(title=title, current_price=price)

    @staticmethod
    async def _read(
        page: Page, url: str, strategy: SiteStrategy, selectors: Sequence[str]
    ) -> tuple[str | None, str | None]:
        # page loaded fine; a detached or closed element is a selector problem
        try:
            return await first_text(page, selectors)
        except PlaywrightError as exc:
            raise ExtractionMismatch(
                f"selector lookup failed: {exc}",
                url=url,
                site=strategy.name,
                selector=", ".join(selectors),
            ) from exc

    def _fail(self, error: PriceWatchError, url: str) -> ExtractionFailure:
        failure = ExtractionFailure.from_error(error, url)
        logger.warning(
            "extractor.failed",
            kind=failure.kind,
            reason=failure.reason,
            url=failure.url,
            site=failure.site,
            selector=failure.selector,
        )
        return failure
