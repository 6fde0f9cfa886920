from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Callable, Sequence

import structlog

from pricewatch.core.errors import (
    PriceWatchError,
    ReconciliationTimeout,
    StoreUnavailable,
)
from pricewatch.db.store import Store
from pricewatch.models.tracked_item import TrackedItem
from pricewatch.services.evaluator import evaluate
from pricewatch.services.extractor import Extractor
from pricewatch.services.notifier import Notifier

logger = structlog.get_logger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BatchReconciler:
    """
    One reconciliation pass: re-check every tracked item concurrently,
    then write the whole collection back once.
    """

    def __init__(
        self,
        extractor: Extractor,
        notifier: Notifier,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.extractor = extractor
        self.notifier = notifier
        self.clock = clock

    async def monitor_one(self, item: TrackedItem) -> TrackedItem:
        log = logger.bind(item_id=item.id, url=item.url)
        log.info("monitor.check", title=item.title)

        extraction = await self.extractor.extract(item.url)
        evaluation = evaluate(item, extraction, now=self.clock())
        updated = evaluation.item

        if evaluation.should_notify:
            log.info(
                "monitor.price_drop",
                price=evaluation.observed_price,
                desired=updated.desired_price,
            )
            # notified floor is already committed; a failed send is not retried
            try:
                await self.notifier.notify(updated, evaluation.observed_price)
            except Exception as exc:
                log.error("notifier.delivery_failed", error=repr(exc))
        elif evaluation.observed_price is None:
            log.info("monitor.unavailable", kept_price=updated.current_price)
        elif evaluation.observed_price <= updated.desired_price:
            log.info(
                "monitor.already_notified",
                price=evaluation.observed_price,
                last_notified=updated.last_notified_price,
            )
        else:
            log.info(
                "monitor.above_target",
                price=evaluation.observed_price,
                desired=updated.desired_price,
            )

        return updated

    async def reconcile(self, items: Sequence[TrackedItem]) -> list[TrackedItem]:
        results = await asyncio.gather(
            *(self.monitor_one(item) for item in items), return_exceptions=True
        )

        merged: list[TrackedItem] = []
        for item, result in zip(items, results):
            if isinstance(result, BaseException):
                if isinstance(result, asyncio.CancelledError):
                    raise result
                # keep cycle alive: this item just wasn't updated this round
                logger.error(
                    "monitor.item_crashed",
                    item_id=item.id,
                    url=item.url,
                    error=repr(result),
                )
                merged.append(item.model_copy(update={"last_checked": self.clock()}))
            else:
                merged.append(result)
        return merged

    async def run_once(
        self, store: Store, timeout: float | None = None
    ) -> list[TrackedItem]:
        try:
            items = await asyncio.to_thread(store.load)
        except PriceWatchError:
            raise
        except Exception as exc:
            raise StoreUnavailable(f"load failed: {exc}") from exc

        if not items:
            logger.info("monitor.empty")
            return []

        logger.info("monitor.pass_start", items=len(items), timeout=timeout)
        try:
            updated = await asyncio.wait_for(self.reconcile(items), timeout=timeout)
        except asyncio.TimeoutError as exc:
            logger.error("monitor.pass_timeout", timeout=timeout)
            raise ReconciliationTimeout(
                f"pass exceeded {timeout}s; nothing persisted"
            ) from exc

        try:
            await asyncio.to_thread(store.save, updated)
        except PriceWatchError:
            raise
        except Exception as exc:
            raise StoreUnavailable(f"save failed: {exc}") from exc

        logger.info("monitor.pass_done", items=len(updated))
        return updated
