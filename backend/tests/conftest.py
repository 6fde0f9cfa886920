"""Shared fakes: a scripted page, a session factory, a notifier and a store."""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from pricewatch.models.tracked_item import TrackedItem, TrackingMode

FIXED_NOW = datetime(2026, 10, 19, 6, 0, tzinfo=timezone.utc)


class FakeElement:
    def __init__(self, text: str) -> None:
        self.text = text

    async def inner_text(self) -> str:
        return self.text


class FakePage:
    """Answers selectors from a dict; anything missing behaves like absent DOM."""

    def __init__(
        self,
        elements: dict[str, str] | None = None,
        goto_error: Exception | None = None,
    ) -> None:
        self.elements = dict(elements or {})
        self.goto_error = goto_error
        self.visited: list[tuple[str, str, int]] = []
        self.clicked: list[str] = []
        self.queried: list[str] = []

    async def goto(self, url: str, wait_until: str, timeout: int) -> None:
        self.visited.append((url, wait_until, timeout))
        if self.goto_error is not None:
            raise self.goto_error

    async def query_selector(self, selector: str) -> FakeElement | None:
        self.queried.append(selector)
        if selector in self.elements:
            return FakeElement(self.elements[selector])
        return None

    async def wait_for_selector(self, selector: str, timeout: int) -> FakeElement:
        if selector in self.elements:
            return FakeElement(self.elements[selector])
        raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {selector}")

    async def click(self, selector: str) -> None:
        self.clicked.append(selector)


class FakeSessionFactory:
    def __init__(self, page: FakePage | None = None, launch_error: Exception | None = None):
        self.page = page or FakePage()
        self.launch_error = launch_error
        self.opened = 0
        self.closed = 0

    @asynccontextmanager
    async def session(self):
        self.opened += 1
        try:
            if self.launch_error is not None:
                raise self.launch_error
            yield self.page
        finally:
            self.closed += 1


class RecordingNotifier:
    def __init__(self, succeed: bool = True) -> None:
        self.succeed = succeed
        self.calls: list[tuple[str, float]] = []

    async def notify(self, item: TrackedItem, observed_price: float) -> bool:
        self.calls.append((item.id, observed_price))
        return self.succeed


class MemoryStore:
    def __init__(self, items: list[TrackedItem] | None = None) -> None:
        self.items = list(items or [])
        self.saves = 0

    def load(self) -> list[TrackedItem]:
        return [item.model_copy() for item in self.items]

    def save(self, items) -> None:
        self.saves += 1
        self.items = list(items)


def build_item(**overrides) -> TrackedItem:
    fields = {
        "id": "1760853600000",
        "url": "https://www.amazon.in/dp/B0TESTITEM",
        "title": "Noise Cancelling Headphones",
        "tracking_mode": TrackingMode.FIXED,
        "desired_value": 1000.0,
        "initial_price": 1200.0,
        "current_price": 1200.0,
        "last_notified_price": None,
        "last_checked": None,
    }
    fields.update(overrides)
    return TrackedItem(**fields)


@pytest.fixture
def make_item():
    return build_item


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def amazon_page() -> FakePage:
    return FakePage(
        {
            "#productTitle": "  Noise Cancelling Headphones  ",
            "span.a-price-whole": "949.",
        }
    )
