class PriceWatchError(Exception):
    kind = "error"

    def __init__(
        self,
        reason: str,
        *,
        url: str | None = None,
        site: str | None = None,
        selector: str | None = None,
    ):
        super().__init__(reason)
        self.reason = reason
        self.url = url
        self.site = site
        self.selector = selector


# -------------------------
# Item-local, recoverable
# -------------------------


class NavigationFailure(PriceWatchError):
    kind = "navigation_failure"


class UnsupportedSite(PriceWatchError):
    kind = "unsupported_site"


class ExtractionMismatch(PriceWatchError):
    kind = "extraction_mismatch"


class NotificationDeliveryFailure(PriceWatchError):
    kind = "notification_delivery_failure"


# -------------------------
# Pass-level
# -------------------------


class StoreUnavailable(PriceWatchError):
    kind = "store_unavailable"


class ReconciliationTimeout(PriceWatchError):
    kind = "reconciliation_timeout"


# -------------------------
# Intake / user edits
# -------------------------


class ItemNotFound(PriceWatchError):
    kind = "item_not_found"


class InvalidTarget(PriceWatchError):
    kind = "invalid_target"
