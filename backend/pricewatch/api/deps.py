from functools import lru_cache

from fastapi import Depends

from pricewatch.core.config import settings
from pricewatch.db.store import Store, store_from_settings
from pricewatch.services.browser import PlaywrightSessionFactory
from pricewatch.services.extractor import Extractor
from pricewatch.services.monitor import BatchReconciler
from pricewatch.services.notifier import TelegramNotifier
from pricewatch.services.tracking import TrackingService


@lru_cache(maxsize=1)
def get_store() -> Store:
    return store_from_settings()


@lru_cache(maxsize=1)
def get_extractor() -> Extractor:
    return Extractor(
        PlaywrightSessionFactory.from_settings(),
        navigation_timeout_ms=settings.NAVIGATION_TIMEOUT_MS,
    )


@lru_cache(maxsize=1)
def get_notifier() -> TelegramNotifier:
    return TelegramNotifier.from_settings()


def get_reconciler(
    extractor: Extractor = Depends(get_extractor),
    notifier: TelegramNotifier = Depends(get_notifier),
) -> BatchReconciler:
    return BatchReconciler(extractor, notifier)


def get_tracking(
    store: Store = Depends(get_store),
    extractor: Extractor = Depends(get_extractor),
) -> TrackingService:
    return TrackingService(store, extractor)
