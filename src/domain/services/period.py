"""Period aggregation with a carried accumulated balance."""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from logging import Logger

from src.domain.constants import SALES_CATEGORY
from src.domain.models import (
    BranchFilter,
    DateRange,
    EntryKind,
    Granularity,
    LedgerEntry,
    MetricTrend,
    PeriodComparison,
    PeriodSummary,
    Sale,
    SaleStatus,
    previous_reference,
)
from src.domain.services.dates import parse_calendar_date
from src.domain.services.validation import (
    is_legacy_sales_income,
    iter_valid_entries,
    iter_valid_sales,
)
from src.utils.decimal_utils import HUNDRED, ZERO


TREND_METRICS = (
    "revenue",
    "pending_receivables",
    "expenses",
    "net_result",
    "completed_sale_count",
)


def aggregate_period(
    reference,
    granularity: Granularity,
    branch_filter: BranchFilter,
    sales: Iterable[Sale],
    entries: Iterable[LedgerEntry],
    *,
    sales_category: str = SALES_CATEGORY,
    logger: Logger,
) -> PeriodSummary:
    """Compute the aggregates of the period containing ``reference``.

    The accumulated balance covers every income entry and completed sale
    dated strictly before the period start, minus every expense dated
    before it. It is never reset between periods.

    Args:
        reference: Any day inside the period (``date`` or ``YYYY-MM-DD``).
        granularity: Period size.
        branch_filter: Branch selection.
        sales: Sales of any status and any date.
        entries: Ledger entries of any date.
        sales_category: Category reserved for sale-derived income.
        logger: Logger used for warnings.

    Returns:
        PeriodSummary: Period aggregates.

    Raises:
        InvalidInputError: If ``reference`` is not a valid calendar date.
    """
    reference_date = parse_calendar_date(reference)
    bounds = DateRange.for_period(reference_date, granularity)

    revenue = ZERO
    pending = ZERO
    expenses = ZERO
    carried = ZERO
    completed_count = 0

    for sale, sale_date, total in iter_valid_sales(sales, logger):
        if not branch_filter.matches(sale.branch):
            continue
        if sale_date < bounds.start:
            if sale.status is SaleStatus.COMPLETED:
                carried += total
            continue
        if not bounds.contains(sale_date):
            continue
        if sale.status is SaleStatus.COMPLETED:
            revenue += total
            completed_count += 1
        elif sale.status is SaleStatus.PENDING:
            pending += total

    for entry, entry_date, amount in iter_valid_entries(entries, logger):
        if not branch_filter.matches(entry.branch):
            continue
        if is_legacy_sales_income(entry, sales_category):
            continue
        if entry_date < bounds.start:
            if entry.kind is EntryKind.INCOME:
                carried += amount
            else:
                carried -= amount
            continue
        if entry.kind is EntryKind.EXPENSE and bounds.contains(entry_date):
            expenses += amount

    return PeriodSummary(
        granularity=granularity,
        start=bounds.start,
        end=bounds.end,
        revenue=revenue,
        pending_receivables=pending,
        expenses=expenses,
        accumulated_balance=carried,
        completed_sale_count=completed_count,
    )


def compare_periods(
    reference,
    granularity: Granularity,
    branch_filter: BranchFilter,
    sales: Iterable[Sale],
    entries: Iterable[LedgerEntry],
    *,
    sales_category: str = SALES_CATEGORY,
    logger: Logger,
) -> PeriodComparison:
    """Aggregate a period and the one before it, with per-metric trends.

    Args:
        reference: Any day inside the current period.
        granularity: Period size.
        branch_filter: Branch selection.
        sales: Sales of any status and any date.
        entries: Ledger entries of any date.
        sales_category: Category reserved for sale-derived income.
        logger: Logger used for warnings.

    Returns:
        PeriodComparison: Both summaries and the trend of each metric.
    """
    sales = list(sales)
    entries = list(entries)
    reference_date = parse_calendar_date(reference)
    current = aggregate_period(
        reference_date,
        granularity,
        branch_filter,
        sales,
        entries,
        sales_category=sales_category,
        logger=logger,
    )
    previous = aggregate_period(
        previous_reference(reference_date, granularity),
        granularity,
        branch_filter,
        sales,
        entries,
        sales_category=sales_category,
        logger=logger,
    )
    trends = []
    for metric in TREND_METRICS:
        current_value = Decimal(getattr(current, metric))
        previous_value = Decimal(getattr(previous, metric))
        delta = compute_trend(current_value, previous_value)
        trends.append(
            MetricTrend(
                metric=metric,
                current=current_value,
                previous=previous_value,
                delta_pct=delta,
                label=format_trend(delta),
            )
        )
    return PeriodComparison(current=current, previous=previous, trends=trends)


def compute_trend(current: Decimal, previous: Decimal) -> Decimal:
    """Return the percentage change from ``previous`` to ``current``.

    A zero previous value yields 100 when the current value is positive and
    0 otherwise.
    """
    if previous == 0:
        return HUNDRED if current > 0 else ZERO
    return (current - previous) / previous * HUNDRED


def format_trend(delta_pct: Decimal) -> str:
    """Render a trend as ``+12.5%`` with one decimal place."""
    rounded = Decimal(delta_pct).quantize(
        Decimal("0.1"), rounding=ROUND_HALF_UP
    )
    sign = "+" if rounded > 0 else ""
    if rounded == 0:
        rounded = abs(rounded)
    return f"{sign}{rounded}%"


__all__ = [
    "TREND_METRICS",
    "aggregate_period",
    "compare_periods",
    "compute_trend",
    "format_trend",
]
