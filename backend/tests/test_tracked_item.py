from datetime import datetime, timezone

from pricewatch.models.tracked_item import (
    TrackedItem,
    TrackingMode,
    compute_desired_price,
)


def test_fixed_mode_desired_price_is_the_value(make_item):
    item = make_item(tracking_mode=TrackingMode.FIXED, desired_value=999.0)
    assert item.desired_price == 999.0


def test_percentage_mode_desired_price_uses_initial_price(make_item):
    item = make_item(
        tracking_mode=TrackingMode.PERCENTAGE,
        desired_value=15.0,
        initial_price=2000.0,
        current_price=1800.0,
    )
    assert item.desired_price == 2000.0 * (1 - 15.0 / 100)


def test_stored_desired_price_is_recomputed_on_load():
    doc = {
        "id": "1",
        "url": "https://www.flipkart.com/p/itm1",
        "trackingType": "percentage",
        "desiredValue": 10,
        "desiredPrice": 1.0,
        "initialPrice": 500,
    }
    item = TrackedItem.model_validate(doc)
    assert item.desired_price == 500 * (1 - 10 / 100)


def test_retarget_switches_mode_and_recomputes(make_item):
    item = make_item(initial_price=1500.0, desired_value=1000.0)

    updated = item.retarget(TrackingMode.PERCENTAGE, 20.0)

    assert updated.tracking_mode == TrackingMode.PERCENTAGE
    assert updated.desired_value == 20.0
    assert updated.desired_price == compute_desired_price(
        TrackingMode.PERCENTAGE, 20.0, 1500.0
    )
    assert updated.initial_price == 1500.0
    assert item.desired_price == 1000.0


def test_retarget_value_only_keeps_mode(make_item):
    item = make_item(
        tracking_mode=TrackingMode.PERCENTAGE, desired_value=10.0, initial_price=100.0
    )
    updated = item.retarget(desired_value=50.0)
    assert updated.tracking_mode == TrackingMode.PERCENTAGE
    assert updated.desired_price == 50.0


def test_document_uses_camel_case_keys(make_item):
    checked = datetime(2026, 10, 19, 6, 0, tzinfo=timezone.utc)
    doc = make_item(last_notified_price=950.0, last_checked=checked).to_document()

    assert doc["trackingType"] == "fixed"
    assert doc["desiredValue"] == 1000.0
    assert doc["desiredPrice"] == 1000.0
    assert doc["initialPrice"] == 1200.0
    assert doc["currentPrice"] == 1200.0
    assert doc["lastNotifiedPrice"] == 950.0
    assert doc["lastChecked"].startswith("2026-10-19T06:00:00")
    assert TrackedItem.model_validate(doc).last_checked == checked
