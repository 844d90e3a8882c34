"""
Unit tests for the reference revenue and bonus policies.
"""

from decimal import Decimal

import pytest

from sales_report.models import LineItem, Product, SellerStats
from sales_report.policies import calculate_bonus_by_profit, calculate_simple_revenue


def stats(profit) -> SellerStats:
    return SellerStats(id="S-001", name="Test Seller", profit=Decimal(str(profit)))


class TestSimpleRevenue:
    def test_discount_applied_to_unit_price(self):
        item = LineItem(sku="SKU1", quantity=2, sale_price=Decimal("20"), discount=Decimal("10"))
        product = Product(sku="SKU1", purchase_price=Decimal("10"))
        assert calculate_simple_revenue(item, product) == Decimal("36")

    def test_no_discount(self):
        item = LineItem(sku="SKU2", quantity=5, sale_price=Decimal("10"))
        product = Product(sku="SKU2", purchase_price=Decimal("5"))
        assert calculate_simple_revenue(item, product) == Decimal("50")

    def test_full_discount_is_free(self):
        item = LineItem(sku="SKU1", quantity=3, sale_price=Decimal("99.99"), discount=Decimal("100"))
        product = Product(sku="SKU1", purchase_price=Decimal("10"))
        assert calculate_simple_revenue(item, product) == 0

    def test_ignores_catalogue_price(self):
        item = LineItem(sku="SKU1", quantity=1, sale_price=Decimal("15"))
        product = Product(sku="SKU1", purchase_price=Decimal("10"), sale_price=Decimal("30"))
        assert calculate_simple_revenue(item, product) == Decimal("15")


class TestBonusByProfit:
    @pytest.mark.parametrize("index, total, expected", [
        (0, 10, Decimal("150")),
        (1, 10, Decimal("100")),
        (2, 10, Decimal("100")),
        (3, 10, Decimal("50")),
        (8, 10, Decimal("50")),
        (9, 10, Decimal("0")),
    ])
    def test_rates_by_rank(self, index, total, expected):
        assert calculate_bonus_by_profit(index, total, stats(1000)) == expected

    @pytest.mark.parametrize("index, total", [(0, 1), (1, 2), (2, 3)])
    def test_podium_beats_last_place(self, index, total):
        # the last seller of a short roster is still on the podium
        assert calculate_bonus_by_profit(index, total, stats(1000)) > 0

    def test_last_of_four_gets_nothing(self):
        assert calculate_bonus_by_profit(3, 4, stats(1000)) == 0

    def test_negative_profit_passes_through(self):
        assert calculate_bonus_by_profit(0, 5, stats(-100)) == Decimal("-15")
