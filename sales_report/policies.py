from decimal import Decimal

from sales_report.models import LineItem, Product, ReportOptions, SellerStats
from sales_report.settings import DEFAULT_RATE, FIRST_PLACE_RATE, PODIUM_RATE


def calculate_simple_revenue(item: LineItem, product: Product) -> Decimal:
    """Line revenue: unit sale price less the percentage discount, times quantity."""
    discount = 1 - item.discount / 100
    return item.sale_price * discount * item.quantity


def calculate_bonus_by_profit(index: int, total: int, seller: SellerStats) -> Decimal:
    """
    Bonus by profit rank. The first matching rule wins, so with three sellers
    or fewer nobody falls through to the last-place rule.
    """
    profit = seller.profit

    if index == 0:
        return profit * FIRST_PLACE_RATE

    if index in (1, 2):
        return profit * PODIUM_RATE

    if index == total - 1:
        return Decimal("0")

    return profit * DEFAULT_RATE


DEFAULT_OPTIONS = ReportOptions(
    calculate_revenue=calculate_simple_revenue,
    calculate_bonus=calculate_bonus_by_profit,
)
