import asyncio
import sys

import structlog

from pricewatch.core.config import settings
from pricewatch.core.errors import ReconciliationTimeout, StoreUnavailable
from pricewatch.core.logger import setup_logging
from pricewatch.db.store import store_from_settings
from pricewatch.services.browser import PlaywrightSessionFactory
from pricewatch.services.extractor import Extractor
from pricewatch.services.monitor import BatchReconciler
from pricewatch.services.notifier import TelegramNotifier

logger = structlog.get_logger(__name__)


def main() -> int:
    setup_logging()

    reconciler = BatchReconciler(
        Extractor(PlaywrightSessionFactory.from_settings()),
        TelegramNotifier.from_settings(),
    )

    try:
        store = store_from_settings()
        asyncio.run(reconciler.run_once(store, timeout=settings.PASS_TIMEOUT_SECONDS))
    except (StoreUnavailable, ReconciliationTimeout) as e:
        logger.error("job.failed", kind=e.kind, reason=e.reason)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
