"""Revenue breakdowns over completed sales."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from logging import Logger

from src.domain.constants import WEEKDAY_NAMES
from src.domain.models import (
    BranchFilter,
    DailyRevenue,
    DateRange,
    PaymentMethod,
    PaymentMethodTotal,
    ProductSales,
    Sale,
    SaleStatus,
    SalesAnalytics,
    WeekdayRevenue,
)
from src.domain.services.validation import iter_valid_sales
from src.utils.decimal_utils import ZERO, coerce_decimal


def build_sales_analytics(
    sales: Iterable[Sale],
    branch_filter: BranchFilter,
    date_range: DateRange | None = None,
    *,
    top_n: int = 10,
    logger: Logger,
) -> SalesAnalytics:
    """Break completed sales revenue down by method, day, weekday, product.

    The best day is the day with the highest revenue; ties go to the
    earliest day.

    Args:
        sales: Sales of any status.
        branch_filter: Branch selection.
        date_range: Optional inclusive date range.
        top_n: Number of best-selling products to keep.
        logger: Logger used for warnings.

    Returns:
        SalesAnalytics: Revenue breakdowns and average ticket.
    """
    date_range = date_range or DateRange.all_time()
    by_method: dict[PaymentMethod, Decimal] = {}
    by_day: dict[date, Decimal] = {}
    by_weekday = [ZERO] * 7
    products: dict[str, list] = {}
    revenue = ZERO
    items_sold = ZERO
    count = 0

    for sale, sale_date, total in iter_valid_sales(sales, logger):
        if sale.status is not SaleStatus.COMPLETED:
            continue
        if not branch_filter.matches(sale.branch):
            continue
        if not date_range.contains(sale_date):
            continue
        revenue += total
        count += 1
        for portion in sale.payment_portions():
            by_method[portion.method] = by_method.get(
                portion.method, ZERO
            ) + coerce_decimal(portion.amount)
        by_day[sale_date] = by_day.get(sale_date, ZERO) + total
        by_weekday[(sale_date.weekday() + 1) % 7] += total
        for item in sale.items:
            quantity = coerce_decimal(item.quantity)
            line_total = quantity * coerce_decimal(item.unit_price)
            summary = products.setdefault(
                item.product_id,
                [item.product_name or item.product_id, ZERO, ZERO],
            )
            summary[1] += quantity
            items_sold += quantity
            summary[2] += line_total

    daily = [
        DailyRevenue(date=day, amount=amount)
        for day, amount in sorted(by_day.items())
    ]
    best_day = max(daily, key=lambda item: item.amount, default=None)

    top_products = sorted(
        (
            ProductSales(
                product_id=product_id,
                name=name,
                quantity=quantity,
                revenue=product_revenue,
            )
            for product_id, (name, quantity, product_revenue) in (
                products.items()
            )
        ),
        key=lambda item: (-item.revenue, item.product_id),
    )[: max(top_n, 0)]

    return SalesAnalytics(
        revenue=revenue,
        completed_sale_count=count,
        average_ticket=revenue / count if count else ZERO,
        by_payment_method=[
            PaymentMethodTotal(method=method, amount=amount)
            for method, amount in sorted(
                by_method.items(),
                key=lambda item: (-item[1], item[0].value),
            )
        ],
        by_day=daily,
        best_day=best_day,
        by_weekday=[
            WeekdayRevenue(
                weekday=index,
                name=WEEKDAY_NAMES[index],
                amount=amount,
            )
            for index, amount in enumerate(by_weekday)
        ],
        top_products=top_products,
        total_items_sold=items_sold,
    )


__all__ = ["build_sales_analytics"]
