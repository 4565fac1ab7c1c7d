"""Domain package for ledger rules and core models."""

from .constants import DEFAULT_EXPENSE_CATEGORY, SALES_CATEGORY
from .errors import InvalidInputError, LedgerError
from .models import (
    Branch,
    BranchFilter,
    CashClosing,
    CashVerification,
    DateRange,
    DateRangePreset,
    EntryKind,
    Granularity,
    IncomeStatement,
    LedgerEntry,
    PaymentMethod,
    PaymentSplit,
    PeriodComparison,
    PeriodSummary,
    Product,
    RecurringIntent,
    Sale,
    SaleItem,
    SaleStatus,
    SalesAnalytics,
    UnifiedRecord,
)
from .services import (
    aggregate_period,
    build_income_statement,
    build_sales_analytics,
    close_day,
    compare_periods,
    expand_recurring,
    unify_ledger,
    verify_day,
)

__all__ = [
    "DEFAULT_EXPENSE_CATEGORY",
    "SALES_CATEGORY",
    "InvalidInputError",
    "LedgerError",
    "Branch",
    "BranchFilter",
    "CashClosing",
    "CashVerification",
    "DateRange",
    "DateRangePreset",
    "EntryKind",
    "Granularity",
    "IncomeStatement",
    "LedgerEntry",
    "PaymentMethod",
    "PaymentSplit",
    "PeriodComparison",
    "PeriodSummary",
    "Product",
    "RecurringIntent",
    "Sale",
    "SaleItem",
    "SaleStatus",
    "SalesAnalytics",
    "UnifiedRecord",
    "aggregate_period",
    "build_income_statement",
    "build_sales_analytics",
    "close_day",
    "compare_periods",
    "expand_recurring",
    "unify_ledger",
    "verify_day",
]
