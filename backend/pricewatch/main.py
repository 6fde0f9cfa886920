from fastapi import Depends, FastAPI

from pricewatch.api.deps import get_store
from pricewatch.api.routes import router as products_router
from pricewatch.core.logger import setup_logging
from pricewatch.db.store import Store

setup_logging()

app = FastAPI(
    title="pricewatch API",
    description="Product price tracking with drop alerts",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.include_router(products_router, prefix="/api")


@app.api_route("/health", methods=["GET", "HEAD"])
def health_check(store: Store = Depends(get_store)):
    try:
        count = len(store.load())
        return {
            "status": "healthy",
            "service": "pricewatch-api",
            "store": "connected",
            "tracked_items": count,
        }
    except Exception as e:
        return {
            "status": "degraded",
            "service": "pricewatch-api",
            "store": "disconnected",
            "error": str(e),
        }
