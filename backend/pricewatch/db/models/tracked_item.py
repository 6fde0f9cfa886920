from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from pricewatch.db.base import Base
from pricewatch.models.tracked_item import TrackedItem, TrackingMode


class TrackedItemRow(Base):
    __tablename__ = "tracked_items"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    # collection order
    position: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    url: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str | None] = mapped_column(Text, nullable=True)

    tracking_mode: Mapped[str] = mapped_column(String(16), nullable=False)  # fixed|percentage
    desired_value: Mapped[float] = mapped_column(Float, nullable=False)
    initial_price: Mapped[float] = mapped_column(Float, nullable=False)
    desired_price: Mapped[float] = mapped_column(Float, nullable=False)

    current_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    last_notified_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    last_checked: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    @classmethod
    def from_item(cls, item: TrackedItem, position: int) -> "TrackedItemRow":
        return cls(
            id=item.id,
            position=position,
            url=item.url,
            title=item.title,
            tracking_mode=item.tracking_mode.value,
            desired_value=item.desired_value,
            initial_price=item.initial_price,
            desired_price=item.desired_price,
            current_price=item.current_price,
            last_notified_price=item.last_notified_price,
            last_checked=item.last_checked,
        )

    def to_item(self) -> TrackedItem:
        last_checked = self.last_checked
        # sqlite drops tzinfo on the way back
        if last_checked is not None and last_checked.tzinfo is None:
            last_checked = last_checked.replace(tzinfo=timezone.utc)

        return TrackedItem(
            id=self.id,
            url=self.url,
            title=self.title,
            tracking_mode=TrackingMode(self.tracking_mode),
            desired_value=self.desired_value,
            initial_price=self.initial_price,
            current_price=self.current_price,
            last_notified_price=self.last_notified_price,
            last_checked=last_checked,
        )
