from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Optional


class InputRecord(BaseModel):
    # records may arrive as dicts or attribute objects; numeric ids and skus become strings
    model_config = ConfigDict(from_attributes=True, coerce_numbers_to_str=True)


class Seller(InputRecord):
    id: str
    first_name: str
    last_name: str
    start_date: Optional[str] = None
    position: Optional[str] = None


class Product(InputRecord):
    sku: str
    purchase_price: Decimal  # cost basis per unit
    name: Optional[str] = None
    category: Optional[str] = None
    sale_price: Optional[Decimal] = None  # catalogue price, line items carry their own


class LineItem(InputRecord):
    sku: str
    quantity: int
    sale_price: Decimal
    discount: Decimal = Field(default=Decimal("0"), ge=0, le=100)  # percent


class PurchaseRecord(InputRecord):
    seller_id: str
    total_amount: Decimal
    items: list[LineItem]
    receipt_id: Optional[str] = None
    customer_id: Optional[str] = None
    date: Optional[datetime] = None
    total_discount: Optional[Decimal] = None


class SalesDataset(InputRecord):
    sellers: list[Seller] = Field(min_length=1)
    products: list[Product] = Field(min_length=1)
    purchase_records: list[PurchaseRecord] = Field(min_length=1)
    # required by the input contract, never read by the engine
    customers: list[Any] = Field(min_length=1)

    @model_validator(mode="after")
    def _unique_keys(self) -> "SalesDataset":
        for label, keys in (
            ("seller id", [s.id for s in self.sellers]),
            ("product sku", [p.sku for p in self.products]),
        ):
            seen: set[str] = set()
            for key in keys:
                if key in seen:
                    raise ValueError(f"Duplicate {label} '{key}'")
                seen.add(key)
        return self


# ── Derived / response models ────────────────────────────────────────────────

class SellerStats(BaseModel):
    id: str
    name: str
    sales_count: int = 0
    revenue: Decimal = Decimal("0")
    profit: Decimal = Decimal("0")
    # sku -> cumulative quantity, in first-seen order
    products_sold: dict[str, int] = Field(default_factory=dict)
    bonus: Decimal = Decimal("0")


class TopProduct(BaseModel):
    model_config = ConfigDict(frozen=True)

    sku: str
    quantity: int


class ReportRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    seller_id: str
    name: str
    revenue: Decimal
    profit: Decimal
    sales_count: int
    top_products: list[TopProduct]
    bonus: Decimal


RevenueFn = Callable[[LineItem, Product], Any]
BonusFn = Callable[[int, int, SellerStats], Any]


class ReportOptions(BaseModel):
    """
    Policies injected into the engine.

    Both must be pure: no side effects and the same result for equal inputs.
    calculate_revenue(item, product) returns the line revenue after discount;
    calculate_bonus(index, total, stats) returns the bonus for the seller at
    zero-based rank ``index`` out of ``total`` sellers.
    """

    model_config = ConfigDict(extra="forbid")

    calculate_revenue: RevenueFn = Field(
        validation_alias=AliasChoices("calculate_revenue", "calculateRevenue"),
    )
    calculate_bonus: BonusFn = Field(
        validation_alias=AliasChoices("calculate_bonus", "calculateBonus"),
    )
