from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from pricewatch.api.deps import get_reconciler, get_store, get_tracking
from pricewatch.api.schemas import (
    DeleteRequest,
    TrackRequest,
    TrackResponse,
    UpdateRequest,
)
from pricewatch.core.config import settings
from pricewatch.core.errors import (
    InvalidTarget,
    ItemNotFound,
    ReconciliationTimeout,
    StoreUnavailable,
    UnsupportedSite,
)
from pricewatch.db.store import Store
from pricewatch.services.monitor import BatchReconciler
from pricewatch.services.tracking import ScrapeFailed, TrackingService

router = APIRouter(tags=["products"])


@router.post("/track", response_model=TrackResponse)
async def track_product(
    payload: TrackRequest,
    tracking: TrackingService = Depends(get_tracking),
):
    try:
        item = await tracking.track(payload.url, payload.tracking_mode, payload.value)
    except InvalidTarget as e:
        raise HTTPException(status_code=422, detail=e.reason)
    except ScrapeFailed as e:
        if e.failure.kind == UnsupportedSite.kind:
            raise HTTPException(
                status_code=422, detail=f"Unsupported site: {e.failure.reason}"
            )
        raise HTTPException(
            status_code=502,
            detail="Could not scrape product information. Please check the URL.",
        )
    except StoreUnavailable as e:
        raise HTTPException(status_code=500, detail=e.reason)

    return TrackResponse.for_item(item)


@router.get("/products")
def list_products(tracking: TrackingService = Depends(get_tracking)):
    try:
        return [item.to_document() for item in tracking.list()]
    except StoreUnavailable as e:
        raise HTTPException(status_code=500, detail=e.reason)


@router.put("/products")
def update_product(
    payload: UpdateRequest,
    tracking: TrackingService = Depends(get_tracking),
):
    try:
        item = tracking.retarget(payload.id, payload.tracking_mode, payload.value)
    except ItemNotFound:
        raise HTTPException(status_code=404, detail="Product not found")
    except InvalidTarget as e:
        raise HTTPException(status_code=422, detail=e.reason)
    except StoreUnavailable as e:
        raise HTTPException(status_code=500, detail=e.reason)

    return item.to_document()


@router.delete("/products")
def delete_product(
    payload: DeleteRequest,
    tracking: TrackingService = Depends(get_tracking),
):
    try:
        tracking.delete(payload.id)
    except ItemNotFound:
        raise HTTPException(status_code=404, detail="Product not found")
    except StoreUnavailable as e:
        raise HTTPException(status_code=500, detail=e.reason)

    return {"message": "Product deleted successfully"}


@router.get("/cron")
async def run_price_check(
    store: Store = Depends(get_store),
    reconciler: BatchReconciler = Depends(get_reconciler),
):
    """
    Entry point for the external scheduler: one full reconciliation pass.
    """
    try:
        updated = await reconciler.run_once(
            store, timeout=settings.PASS_TIMEOUT_SECONDS
        )
    except (StoreUnavailable, ReconciliationTimeout) as e:
        return JSONResponse(
            status_code=500, content={"status": "error", "error": e.reason}
        )

    if not updated:
        return {"status": "No products to check."}
    return {"status": "ok", "checked": len(updated)}
