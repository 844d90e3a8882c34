import logging
from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from sales_report.errors import PolicyError, UnknownReferenceError, ValidationError
from sales_report.models import (
    BonusFn,
    ReportOptions,
    ReportRow,
    RevenueFn,
    SalesDataset,
    SellerStats,
    TopProduct,
)
from sales_report.settings import MONEY_QUANTUM, TOP_PRODUCTS_LIMIT

logger = logging.getLogger(__name__)

_REQUIRED_COLLECTIONS = ("sellers", "products", "purchase_records", "customers")


def _to_decimal(value: Any, policy: str) -> Decimal:
    # str() first so float policies don't leak binary noise into the sums
    if isinstance(value, bool) or not isinstance(value, (Decimal, int, float)):
        raise PolicyError(policy, value)
    result = value if isinstance(value, Decimal) else Decimal(str(value))
    if not result.is_finite():
        raise PolicyError(policy, value)
    return result


def _round_money(value: Decimal) -> Decimal:
    return value.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def _describe(exc: PydanticValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
        for err in exc.errors()[:3]
    )


# ── 1. Validation ────────────────────────────────────────────────────────────

def validate_inputs(data: Any, options: Any) -> tuple[SalesDataset, ReportOptions]:
    """
    Check the dataset and options before anything is computed.

    Raises ValidationError on the first problem found.
    """
    if data is None:
        raise ValidationError("Dataset is missing")

    if not isinstance(data, SalesDataset):
        for name in _REQUIRED_COLLECTIONS:
            if isinstance(data, Mapping):
                collection = data.get(name)
            else:
                collection = getattr(data, name, None)
            if not isinstance(collection, Sequence) or isinstance(collection, (str, bytes)):
                raise ValidationError(f"Dataset field '{name}' must be a list")
            if not collection:
                raise ValidationError(f"Dataset field '{name}' must not be empty")
        try:
            data = SalesDataset.model_validate(data, from_attributes=True)
        except PydanticValidationError as exc:
            raise ValidationError(f"Invalid dataset: {_describe(exc)}") from exc

    if options is None:
        raise ValidationError("Options are missing")

    if not isinstance(options, ReportOptions):
        if isinstance(options, (str, bytes, int, float, Decimal, Sequence)):
            raise ValidationError("Options must be a mapping, an object or ReportOptions")
        try:
            options = ReportOptions.model_validate(
                options, from_attributes=not isinstance(options, Mapping),
            )
        except PydanticValidationError as exc:
            raise ValidationError(f"Invalid options: {_describe(exc)}") from exc

    return data, options


# ── 2. Accumulation ──────────────────────────────────────────────────────────

def accumulate(dataset: SalesDataset, calculate_revenue: RevenueFn) -> dict[str, SellerStats]:
    """Fold every purchase record into per-seller stats, keyed by seller id."""
    seller_index = {
        seller.id: SellerStats(id=seller.id, name=f"{seller.first_name} {seller.last_name}")
        for seller in dataset.sellers
    }
    product_index = {product.sku: product for product in dataset.products}

    logger.debug("Initialised stats for %d sellers: %s", len(seller_index), list(seller_index))

    for record in dataset.purchase_records:
        stats = seller_index.get(record.seller_id)
        if stats is None:
            raise UnknownReferenceError("seller", record.seller_id)

        stats.sales_count += 1
        stats.revenue += record.total_amount

        for item in record.items:
            product = product_index.get(item.sku)
            if product is None:
                raise UnknownReferenceError("product", item.sku)

            cost = product.purchase_price * item.quantity
            revenue = _to_decimal(calculate_revenue(item, product), "calculate_revenue")
            stats.profit += revenue - cost
            stats.products_sold[item.sku] = stats.products_sold.get(item.sku, 0) + item.quantity

    return seller_index


# ── 3. Ranking ───────────────────────────────────────────────────────────────

def rank_sellers(stats: Iterable[SellerStats], calculate_bonus: BonusFn) -> list[SellerStats]:
    # equal profits fall back to seller id so the order is reproducible
    ranked = sorted(stats, key=lambda s: (-s.profit, s.id))
    total = len(ranked)
    for index, seller in enumerate(ranked):
        seller.bonus = _to_decimal(calculate_bonus(index, total, seller), "calculate_bonus")
    return ranked


# ── 4. Projection ────────────────────────────────────────────────────────────

def top_products(stats: SellerStats, limit: int = TOP_PRODUCTS_LIMIT) -> list[TopProduct]:
    # sorted() is stable: equal quantities keep first-seen order
    ordered = sorted(stats.products_sold.items(), key=lambda pair: -pair[1])
    return [TopProduct(sku=sku, quantity=quantity) for sku, quantity in ordered[:limit]]


def project(ranked: Iterable[SellerStats]) -> list[ReportRow]:
    return [
        ReportRow(
            seller_id=s.id,
            name=s.name,
            revenue=_round_money(s.revenue),
            profit=_round_money(s.profit),
            sales_count=s.sales_count,
            top_products=top_products(s),
            bonus=_round_money(s.bonus),
        )
        for s in ranked
    ]


def analyze_sales_data(data: Any, options: Any) -> list[ReportRow]:
    """
    Build the seller performance report: validate, accumulate, rank, project.

    Returns one row per seller ordered by profit, highest first. Raises
    ValidationError for malformed input and UnknownReferenceError when a
    purchase record names an unknown seller or sku; PolicyError when a
    policy returns something other than a finite number. No partial report
    is ever returned.
    """
    dataset, opts = validate_inputs(data, options)
    stats = accumulate(dataset, opts.calculate_revenue)
    ranked = rank_sellers(stats.values(), opts.calculate_bonus)
    rows = project(ranked)

    logger.info(
        "Report built for %d sellers from %d purchase records",
        len(rows), len(dataset.purchase_records),
    )
    return rows
