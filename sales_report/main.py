import logging
import sys
from contextlib import asynccontextmanager

from fastapi import Body, FastAPI, HTTPException

from sales_report import settings
from sales_report.engine import analyze_sales_data
from sales_report.errors import UnknownReferenceError, ValidationError
from sales_report.policies import DEFAULT_OPTIONS
from sales_report.store import store

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = settings.LOG_LEVEL) -> None:
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Auto-seed on startup so the service is immediately usable
    from scripts.seed_data import seed
    setup_logging()
    seed(store)
    logger.info("Seeded %d sellers, %d purchase records",
                len(store.sellers), len(store.purchase_records))
    yield


app = FastAPI(
    title="Sales Report Service",
    version="1.0.0",
    description="Seller revenue, profit, bonus and top-product report",
    lifespan=lifespan,
)


def _build_report(data) -> list[dict]:
    try:
        rows = analyze_sales_data(data, DEFAULT_OPTIONS)
    except ValidationError as exc:
        raise HTTPException(400, str(exc))
    except UnknownReferenceError as exc:
        raise HTTPException(422, str(exc))
    return [row.model_dump() for row in rows]


# ── Sellers ──────────────────────────────────────────────────────────────────

@app.get("/api/v1/sellers", summary="List all sellers")
def list_sellers():
    return {"sellers": [s.model_dump() for s in store.list_sellers()]}


@app.get("/api/v1/sellers/{seller_id}", summary="Get seller details")
def get_seller(seller_id: str):
    seller = store.get_seller(seller_id)
    if not seller:
        raise HTTPException(404, f"Seller '{seller_id}' not found")
    return seller.model_dump()


# ── Reports ──────────────────────────────────────────────────────────────────

@app.get("/api/v1/report", summary="Report over the stored dataset")
def get_report():
    return {"report": _build_report(store.snapshot())}


@app.get(
    "/api/v1/sellers/{seller_id}/report",
    summary="Report row and rank of a single seller",
)
def get_seller_report(seller_id: str):
    if store.get_seller(seller_id) is None:
        raise HTTPException(404, f"Seller '{seller_id}' not found")
    rows = _build_report(store.snapshot())
    for rank, row in enumerate(rows):
        if row["seller_id"] == seller_id:
            return {"rank": rank, "total": len(rows), **row}
    raise HTTPException(404, f"Seller '{seller_id}' not found")


@app.post("/api/v1/report", summary="Report over a posted dataset")
def create_report(payload: dict = Body(...)):
    return {"report": _build_report(payload)}


# ── Admin ─────────────────────────────────────────────────────────────────────

@app.post("/api/v1/admin/seed", summary="Re-seed test data")
def reseed():
    from scripts.seed_data import seed
    store.clear()
    seed(store)
    return {
        "status": "seeded",
        "sellers": len(store.sellers),
        "products": len(store.products),
        "purchase_records": len(store.purchase_records),
    }
