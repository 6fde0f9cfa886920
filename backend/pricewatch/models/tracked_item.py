from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class TrackingMode(str, Enum):
    FIXED = "fixed"
    PERCENTAGE = "percentage"


def compute_desired_price(
    mode: TrackingMode, desired_value: float, initial_price: float
) -> float:
    if mode == TrackingMode.PERCENTAGE:
        return initial_price * (1 - desired_value / 100)
    return desired_value


class TrackedItem(BaseModel):
    """
    One user subscription: a product URL plus a target price condition.

    Field names serialise to the camelCase product document
    (`trackingType`, `desiredPrice`, `lastNotifiedPrice`, ...).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    url: str
    title: str | None = None

    tracking_mode: TrackingMode = Field(alias="trackingType")
    desired_value: float
    initial_price: float
    # derived from (tracking_mode, desired_value, initial_price)
    desired_price: float | None = None

    current_price: float | None = None
    last_notified_price: float | None = None
    last_checked: datetime | None = None

    @model_validator(mode="after")
    def _derive_desired_price(self) -> "TrackedItem":
        self.desired_price = compute_desired_price(
            self.tracking_mode, self.desired_value, self.initial_price
        )
        return self

    def retarget(
        self, mode: TrackingMode | None = None, desired_value: float | None = None
    ) -> "TrackedItem":
        mode = mode or self.tracking_mode
        value = self.desired_value if desired_value is None else desired_value
        return self.model_copy(
            update={
                "tracking_mode": mode,
                "desired_value": value,
                "desired_price": compute_desired_price(
                    mode, value, self.initial_price
                ),
            }
        )

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
