"""Domain models package."""

from .filters import (
    BranchFilter,
    DateRange,
    DateRangePreset,
    Granularity,
    previous_reference,
    resolve_date_range,
)
from .finance import (
    CashClosing,
    CashVerification,
    ClosingStatus,
    DailyRevenue,
    ExpenseCategoryTotal,
    ExpenseLine,
    IncomeStatement,
    MetricTrend,
    PaymentMethodTotal,
    PeriodComparison,
    PeriodSummary,
    ProductSales,
    RecurringIntent,
    SalesAnalytics,
    WeekdayRevenue,
)
from .ledger import (
    Branch,
    EntryKind,
    LedgerEntry,
    PaymentMethod,
    PaymentSplit,
    Product,
    RecordSource,
    Sale,
    SaleItem,
    SaleStatus,
    UnifiedRecord,
)

__all__ = [
    "Branch",
    "EntryKind",
    "SaleStatus",
    "PaymentMethod",
    "RecordSource",
    "LedgerEntry",
    "PaymentSplit",
    "SaleItem",
    "Sale",
    "Product",
    "UnifiedRecord",
    "Granularity",
    "DateRangePreset",
    "BranchFilter",
    "DateRange",
    "previous_reference",
    "resolve_date_range",
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
