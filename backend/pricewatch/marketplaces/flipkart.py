import structlog
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from pricewatch.marketplaces.base import SiteStrategy

logger = structlog.get_logger(__name__)

LOGIN_POPUP_CLOSE = "button._2KpZ6l._2doB4z"
LOGIN_POPUP_WAIT_MS = 5_000


async def dismiss_login_popup(page: Page) -> None:
    """
    Flipkart sometimes overlays a login dialog on product pages.
    Absence of the dialog is the normal case, not an error.
    """
    try:
        await page.wait_for_selector(LOGIN_POPUP_CLOSE, timeout=LOGIN_POPUP_WAIT_MS)
        await page.click(LOGIN_POPUP_CLOSE)
        logger.info("flipkart.login_popup_closed")
    except PlaywrightError:
        logger.debug("flipkart.no_login_popup")


FLIPKART = SiteStrategy(
    name="flipkart",
    base_domain="flipkart",
    title_selectors=("span.B_NuCI", "span.VU-ZEz", ".yhB1nd"),
    price_selectors=(
        "div.Nx9bqj",
        "div._30jeq3._16Jk6d",
        "div._30jeq3",
        ".C-Vz-I ._16Jk6d",
    ),
    pre_step=dismiss_login_popup,
)
