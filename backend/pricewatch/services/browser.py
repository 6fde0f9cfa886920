from __future__ import annotations

import os
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import AsyncIterator, Protocol

import structlog
from playwright.async_api import Page, async_playwright

from pricewatch.core.config import settings

logger = structlog.get_logger(__name__)

# serverless containers have no usable sandbox and a tiny /dev/shm
SERVERLESS_ARGS = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--single-process",
    "--no-zygote",
)


class RenderingSessionFactory(Protocol):
    def session(self) -> AbstractAsyncContextManager[Page]: ...


def running_serverless() -> bool:
    return bool(os.getenv("AWS_LAMBDA_FUNCTION_NAME") or os.getenv("VERCEL"))


class PlaywrightSessionFactory:
    """
    One isolated Chromium per session.

    Every `session()` launches its own browser and closes it on exit,
    including when the surrounding task is cancelled.
    """

    def __init__(
        self,
        *,
        user_agent: str,
        headless: bool = True,
        executable_path: str | None = None,
        launch_args: tuple[str, ...] = (),
    ):
        self.user_agent = user_agent
        self.headless = headless
        self.executable_path = executable_path
        self.launch_args = launch_args

    @classmethod
    def from_settings(cls) -> "PlaywrightSessionFactory":
        return cls(
            user_agent=settings.BROWSER_USER_AGENT,
            headless=settings.BROWSER_HEADLESS,
            executable_path=settings.BROWSER_EXECUTABLE_PATH,
            launch_args=SERVERLESS_ARGS if running_serverless() else (),
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[Page]:
        async with async_playwright() as pw:
            browser = await pw.chromium.launch(
                headless=self.headless,
                executable_path=self.executable_path,
                args=list(self.launch_args),
            )
            logger.debug("browser.launched", args=self.launch_args)
            try:
                context = await browser.new_context(user_agent=self.user_agent)
                page = await context.new_page()
                yield page
            finally:
                await browser.close()
                logger.debug("browser.closed")
