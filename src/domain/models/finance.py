"""Domain models for financial aggregates and reconciliation snapshots."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum

from src.domain.models.filters import Granularity
from src.domain.models.ledger import Branch, PaymentMethod


@dataclass(frozen=True)
class PeriodSummary:
    """Aggregates for one reporting period.

    Attributes:
        granularity: Period size.
        start: First day of the period.
        end: Last day of the period.
        revenue: Completed sale totals inside the period.
        pending_receivables: Pending sale totals inside the period.
        expenses: Expense entries inside the period.
        accumulated_balance: Net position from all history before ``start``.
        completed_sale_count: Number of completed sales inside the period.
    """

    granularity: Granularity
    start: date
    end: date
    revenue: Decimal
    pending_receivables: Decimal
    expenses: Decimal
    accumulated_balance: Decimal
    completed_sale_count: int = 0

    @property
    def net_result(self) -> Decimal:
        """Return revenue minus expenses plus the carried balance."""
        return self.revenue - self.expenses + self.accumulated_balance


@dataclass(frozen=True)
class MetricTrend:
    """Percentage change of one metric against the previous period."""

    metric: str
    current: Decimal
    previous: Decimal
    delta_pct: Decimal
    label: str


@dataclass(frozen=True)
class PeriodComparison:
    """Current period summary next to the preceding one."""

    current: PeriodSummary
    previous: PeriodSummary
    trends: list[MetricTrend]

    def trend(self, metric: str) -> MetricTrend:
        for item in self.trends:
            if item.metric == metric:
                return item
        raise KeyError(metric)


@dataclass(frozen=True)
class ExpenseLine:
    """Expense total for one description within a category."""

    description: str
    amount: Decimal


@dataclass(frozen=True)
class ExpenseCategoryTotal:
    """Expense total for one category with its description breakdown."""

    category: str
    total: Decimal
    lines: list[ExpenseLine] = field(default_factory=list)


@dataclass(frozen=True)
class IncomeStatement:
    """Management income statement (DRE) for a period."""

    gross_revenue: Decimal
    cogs: Decimal
    gross_profit: Decimal
    expenses_by_category: list[ExpenseCategoryTotal]
    total_expenses: Decimal
    net_profit: Decimal
    margin_pct: Decimal


class ClosingStatus(str, Enum):
    BALANCED = "balanced"
    SURPLUS = "surplus"
    SHORTAGE = "shortage"


@dataclass(frozen=True)
class CashClosing:
    """Immutable end-of-day reconciliation for one date and branch.

    Attributes:
        id: Closing identifier.
        date: Closed calendar day.
        branch: Reconciled branch.
        opening_balance: Counted cash of the latest earlier closing, or 0.
        total_income: Completed sale totals of the day.
        total_expense: Expense entries of the day.
        totals_by_method: Completed sale amounts per payment method.
        cash_sales: Cash portion of the day's completed sales.
        expected_in_drawer: Opening balance plus cash sales minus expenses.
        cash_in_drawer: Operator-counted cash.
        difference: Counted minus expected cash.
        notes: Operator notes.
        closed_by: Operator who closed the day.
    """

    id: str
    date: date
    branch: Branch
    opening_balance: Decimal
    total_income: Decimal
    total_expense: Decimal
    totals_by_method: dict[PaymentMethod, Decimal]
    cash_sales: Decimal
    expected_in_drawer: Decimal
    cash_in_drawer: Decimal
    difference: Decimal
    notes: str = ""
    closed_by: str = ""

    @property
    def status(self) -> ClosingStatus:
        if self.difference > 0:
            return ClosingStatus.SURPLUS
        if self.difference < 0:
            return ClosingStatus.SHORTAGE
        return ClosingStatus.BALANCED


@dataclass(frozen=True)
class CashVerification:
    """Same-day cash check shown to the operator before closing."""

    date: date
    branch: Branch
    cash_received: Decimal
    change_given: Decimal
    cash_sales: Decimal
    totals_by_method: dict[PaymentMethod, Decimal]
    day_expenses: Decimal
    completed_sale_count: int

    @property
    def net_cash(self) -> Decimal:
        """Return cash received minus change handed back."""
        return self.cash_received - self.change_given


@dataclass(frozen=True)
class RecurringIntent:
    """Request to record one expense, optionally repeated monthly.

    Attributes:
        batch_id: Identifier prefix shared by the generated entries.
        description: Base description.
        amount: Amount of every generated entry.
        category: Expense category.
        branch: Branch charged.
        start_date: Date of the first entry.
        installments: Number of monthly entries (1 for a single entry).
        payment_method: Optional payment method.
    """

    batch_id: str
    description: str
    amount: Decimal
    category: str
    branch: Branch
    start_date: date | str
    installments: int = 1
    payment_method: PaymentMethod | None = None


@dataclass(frozen=True)
class PaymentMethodTotal:
    method: PaymentMethod
    amount: Decimal


@dataclass(frozen=True)
class DailyRevenue:
    date: date
    amount: Decimal


@dataclass(frozen=True)
class WeekdayRevenue:
    weekday: int
    name: str
    amount: Decimal


@dataclass(frozen=True)
class ProductSales:
    product_id: str
    name: str
    quantity: Decimal
    revenue: Decimal


@dataclass(frozen=True)
class SalesAnalytics:
    """Revenue breakdowns over completed sales."""

    revenue: Decimal
    completed_sale_count: int
    average_ticket: Decimal
    by_payment_method: list[PaymentMethodTotal]
    by_day: list[DailyRevenue]
    by_weekday: list[WeekdayRevenue]
    top_products: list[ProductSales]
    total_items_sold: Decimal
    best_day: DailyRevenue | None


__all__ = [
    "PeriodSummary",
    "MetricTrend",
    "PeriodComparison",
    "ExpenseLine",
    "ExpenseCategoryTotal",
    "IncomeStatement",
    "ClosingStatus",
    "CashClosing",
    "CashVerification",
    "RecurringIntent",
    "PaymentMethodTotal",
    "DailyRevenue",
    "WeekdayRevenue",
    "ProductSales",
    "SalesAnalytics",
]
