from pricewatch.db.base import Base
from pricewatch.db.models.tracked_item import TrackedItemRow

__all__ = [
    "Base",
    "TrackedItemRow",
]
