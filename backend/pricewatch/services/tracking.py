from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Callable

import structlog

from pricewatch.core.errors import InvalidTarget, ItemNotFound, PriceWatchError
from pricewatch.db.store import Store
from pricewatch.models.extraction import ExtractionFailure
from pricewatch.models.tracked_item import TrackedItem, TrackingMode
from pricewatch.services.extractor import Extractor
from pricewatch.services.monitor import utcnow

logger = structlog.get_logger(__name__)


class ScrapeFailed(PriceWatchError):
    kind = "scrape_failed"

    def __init__(self, failure: ExtractionFailure):
        super().__init__(
            failure.reason,
            url=failure.url,
            site=failure.site,
            selector=failure.selector,
        )
        self.failure = failure


def validate_target(mode: TrackingMode, value: float) -> None:
    if value <= 0:
        raise InvalidTarget("target value must be positive")
    if mode == TrackingMode.PERCENTAGE and value >= 100:
        raise InvalidTarget("percentage must be below 100")


class TrackingService:
    """Intake of new tracked items and explicit user edits."""

    def __init__(
        self,
        store: Store,
        extractor: Extractor,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.extractor = extractor
        self.clock = clock

    async def track(self, url: str, mode: TrackingMode, value: float) -> TrackedItem:
        validate_target(mode, value)

        extraction = await self.extractor.extract(url)
        if isinstance(extraction, ExtractionFailure):
            raise ScrapeFailed(extraction)

        now = self.clock()
        item = TrackedItem(
            id=str(int(now.timestamp() * 1000)),
            url=url,
            title=extraction.title,
            tracking_mode=mode,
            desired_value=value,
            initial_price=extraction.current_price,
            current_price=extraction.current_price,
            last_checked=now,
        )

        items = await asyncio.to_thread(self.store.load)
        items.append(item)
        await asyncio.to_thread(self.store.save, items)

        logger.info(
            "tracking.created",
            item_id=item.id,
            url=url,
            mode=mode.value,
            desired=item.desired_price,
        )
        return item

    def list(self) -> list[TrackedItem]:
        return self.store.load()

    def retarget(
        self,
        item_id: str,
        mode: TrackingMode | None = None,
        value: float | None = None,
    ) -> TrackedItem:
        items = self.store.load()
        index = self._index_of(items, item_id)

        updated = items[index].retarget(mode, value)
        validate_target(updated.tracking_mode, updated.desired_value)

        items[index] = updated
        self.store.save(items)

        logger.info(
            "tracking.retargeted",
            item_id=item_id,
            mode=updated.tracking_mode.value,
            desired=updated.desired_price,
        )
        return updated

    def delete(self, item_id: str) -> None:
        items = self.store.load()
        index = self._index_of(items, item_id)
        del items[index]
        self.store.save(items)
        logger.info("tracking.deleted", item_id=item_id)

    @staticmethod
    def _index_of(items: list[TrackedItem], item_id: str) -> int:
        for i, item in enumerate(items):
            if item.id == item_id:
                return i
        raise ItemNotFound(f"no tracked item {item_id}")
