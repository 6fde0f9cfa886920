from pydantic import BaseModel, ConfigDict, Field

from pricewatch.models.tracked_item import TrackedItem, TrackingMode


class TrackRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str = Field(min_length=1)
    tracking_mode: TrackingMode = Field(alias="trackingType")
    value: float = Field(gt=0)


class UpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    tracking_mode: TrackingMode | None = Field(default=None, alias="trackingType")
    value: float | None = Field(default=None, gt=0)


class DeleteRequest(BaseModel):
    id: str


class TrackResponse(BaseModel):
    message: str
    product: dict

    @classmethod
    def for_item(cls, item: TrackedItem) -> "TrackResponse":
        return cls(message="Product tracking started", product=item.to_document())
