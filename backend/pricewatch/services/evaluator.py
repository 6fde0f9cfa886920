from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from pricewatch.models.extraction import Extraction, ExtractionResult
from pricewatch.models.tracked_item import TrackedItem, compute_desired_price


@dataclass
class Evaluation:
    item: TrackedItem
    should_notify: bool
    observed_price: float | None = None


def evaluate(
    item: TrackedItem, extraction: Extraction, now: datetime | None = None
) -> Evaluation:
    """
    Fold one observation into a tracked item.

    A notification is due when the observed price is at or below the
    target and strictly below every price already notified. The
    notified floor only moves down.
    """
    now = now or datetime.now(timezone.utc)

    desired = compute_desired_price(
        item.tracking_mode, item.desired_value, item.initial_price
    )
    update: dict = {"desired_price": desired, "last_checked": now}

    if not isinstance(extraction, ExtractionResult):
        return Evaluation(item=item.model_copy(update=update), should_notify=False)

    observed = extraction.current_price
    update["current_price"] = observed
    if not item.title:
        update["title"] = extraction.title

    should_notify = False
    if observed <= desired:
        floor = item.last_notified_price
        if floor is None or floor > observed:
            should_notify = True
            update["last_notified_price"] = observed

    return Evaluation(
        item=item.model_copy(update=update),
        should_notify=should_notify,
        observed_price=observed,
    )
