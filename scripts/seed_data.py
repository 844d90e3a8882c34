"""
Deterministic test-data generator.

Produces:
  - 5 sellers
  - 30 products  (cost 5-100, catalogue markup 20-80 %)
  - 20 customers
  - 200 purchase records over Jan 2026, 1-5 line items each
    - ~60 % of line items sold without discount, the rest at 5-20 % off
    - total_amount matches the reference revenue formula
"""

import random
from datetime import datetime, timedelta
from decimal import Decimal

from sales_report.models import LineItem, Product, PurchaseRecord, Seller
from sales_report.policies import calculate_simple_revenue
from sales_report.settings import MONEY_QUANTUM, SEED
from sales_report.store import DataStore

START = datetime(2026, 1, 1)
END   = datetime(2026, 1, 31, 23, 59, 59)

N_PRODUCTS  = 30
N_CUSTOMERS = 20
N_RECORDS   = 200

DISCOUNTS = [0, 0, 0, 0, 0, 0, 5, 10, 15, 20]


def _rand_dt(rng: random.Random, lo: datetime = START, hi: datetime = END) -> datetime:
    delta = hi - lo
    secs = rng.randint(0, int(delta.total_seconds()))
    return lo + timedelta(seconds=secs)


def _money(value: float) -> Decimal:
    return Decimal(str(value)).quantize(MONEY_QUANTUM)


def seed(store: DataStore) -> None:
    rng = random.Random(SEED)

    # ── sellers ──────────────────────────────────────────────────────────────
    sellers = [
        Seller(id="seller_1", first_name="Alexey", last_name="Petrov",
               start_date="2024-03-11", position="Senior Seller"),
        Seller(id="seller_2", first_name="Ekaterina", last_name="Smirnova",
               start_date="2023-09-02", position="Seller"),
        Seller(id="seller_3", first_name="Dmitry", last_name="Ivanov",
               start_date="2025-01-20", position="Junior Seller"),
        Seller(id="seller_4", first_name="Olga", last_name="Kuznetsova",
               start_date="2022-06-15", position="Team Lead"),
        Seller(id="seller_5", first_name="Sergey", last_name="Volkov",
               start_date="2024-11-01", position="Seller"),
    ]
    for s in sellers:
        store.add_seller(s)

    # ── products ─────────────────────────────────────────────────────────────
    categories = ["Electronics", "Home", "Toys", "Sports", "Books"]
    products: list[Product] = []
    for n in range(1, N_PRODUCTS + 1):
        cost = _money(rng.uniform(5, 100))
        markup = Decimal(str(round(rng.uniform(1.2, 1.8), 2)))
        product = Product(
            sku=f"SKU_{n:03d}",
            name=f"Product {n:03d}",
            category=rng.choice(categories),
            purchase_price=cost,
            sale_price=(cost * markup).quantize(MONEY_QUANTUM),
        )
        products.append(product)
        store.add_product(product)

    # ── customers (never read by the engine) ─────────────────────────────────
    customer_ids = [f"customer_{n}" for n in range(1, N_CUSTOMERS + 1)]
    for cid in customer_ids:
        store.add_customer(cid, {
            "id": cid,
            "first_name": f"Customer{cid.split('_')[1]}",
            "last_name": "Buyer",
            "phone": f"+7-900-{rng.randint(0, 9_999_999):07d}",
        })

    # ── purchase records ─────────────────────────────────────────────────────
    seller_ids = [s.id for s in sellers]
    for n in range(1, N_RECORDS + 1):
        items: list[LineItem] = []
        for product in rng.sample(products, rng.randint(1, 5)):
            items.append(LineItem(
                sku=product.sku,
                quantity=rng.randint(1, 10),
                sale_price=product.sale_price,
                discount=Decimal(rng.choice(DISCOUNTS)),
            ))

        full_price = sum((i.sale_price * i.quantity for i in items), Decimal("0"))
        total = sum(
            (calculate_simple_revenue(i, store.get_product(i.sku)) for i in items),
            Decimal("0"),
        ).quantize(MONEY_QUANTUM)

        store.add_purchase_record(PurchaseRecord(
            receipt_id=f"receipt_{n:04d}",
            seller_id=rng.choice(seller_ids),
            customer_id=rng.choice(customer_ids),
            date=_rand_dt(rng),
            items=items,
            total_amount=total,
            total_discount=full_price - total,
        ))
