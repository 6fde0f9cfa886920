from __future__ import annotations

from html import escape
from typing import Protocol

import httpx
import structlog

from pricewatch.core.config import settings
from pricewatch.core.errors import NotificationDeliveryFailure
from pricewatch.core.pricing import format_price
from pricewatch.models.tracked_item import TrackedItem, TrackingMode

logger = structlog.get_logger(__name__)


class Notifier(Protocol):
    async def notify(self, item: TrackedItem, observed_price: float) -> bool: ...


def _trim(value: float) -> str:
    return f"{value:g}"


def build_message(
    item: TrackedItem, observed_price: float, currency_symbol: str = ""
) -> str:
    title = escape(item.title or item.url)
    url = escape(item.url, quote=True)
    price = format_price(observed_price, currency_symbol)

    if item.tracking_mode == TrackingMode.PERCENTAGE:
        return (
            f"<b>Price Drop!</b>\n\n"
            f"<b>{title}</b> dropped by <b>{_trim(item.desired_value)}%</b> or more!\n\n"
            f"New Price: <b>{price}</b>\n"
            f'<a href="{url}">Click here to buy!</a>'
        )

    desired = format_price(item.desired_price, currency_symbol)
    return (
        f"<b>Price Drop!</b>\n\n"
        f"<b>{title}</b> is now <b>{price}</b> (Desired: {desired}).\n\n"
        f'<a href="{url}">Click here to buy!</a>'
    )


class TelegramNotifier:
    """
    Best-effort alerts through the Telegram Bot API.

    `notify` reports delivery as a bool and never raises; the caller has
    already committed the notified price by the time it runs.
    """

    def __init__(
        self,
        bot_token: str | None,
        chat_id: str | None,
        *,
        api_base: str = "https://api.telegram.org",
        currency_symbol: str = "",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.api_base = api_base.rstrip("/")
        self.currency_symbol = currency_symbol
        self.timeout = timeout
        self._client = client

    @classmethod
    def from_settings(cls) -> "TelegramNotifier":
        return cls(
            settings.TELEGRAM_BOT_TOKEN,
            settings.TELEGRAM_CHAT_ID,
            api_base=settings.TELEGRAM_API_BASE,
            currency_symbol=settings.CURRENCY_SYMBOL,
            timeout=settings.NOTIFY_TIMEOUT_SECONDS,
        )

    async def notify(self, item: TrackedItem, observed_price: float) -> bool:
        message = build_message(item, observed_price, self.currency_symbol)
        try:
            await self.send(message)
        except NotificationDeliveryFailure as exc:
            logger.error(
                "notifier.delivery_failed",
                item_id=item.id,
                url=item.url,
                reason=exc.reason,
            )
            return False

        logger.info("notifier.sent", item_id=item.id, price=observed_price)
        return True

    async def send(self, text: str) -> None:
        if not self.bot_token or not self.chat_id:
            raise NotificationDeliveryFailure("telegram bot token or chat id missing")

        endpoint = f"{self.api_base}/bot{self.bot_token}/sendMessage"
        payload = {"chat_id": self.chat_id, "text": text, "parse_mode": "HTML"}

        try:
            if self._client is not None:
                response = await self._client.post(endpoint, data=payload)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(endpoint, data=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise NotificationDeliveryFailure(
                f"telegram answered {exc.response.status_code}: {exc.response.text[:200]}"
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise NotificationDeliveryFailure(
                f"{type(exc).__name__}: {exc}"
            ) from exc
