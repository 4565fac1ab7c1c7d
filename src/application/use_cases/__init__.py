"""Application use cases package."""

from .add_recurring_expense import AddRecurringExpenseUseCase
from .close_cash_day import CloseCashDayUseCase, VerifyCashDayUseCase
from .get_income_statement import GetIncomeStatementUseCase, IncomeStatement
from .get_period_summary import GetPeriodSummaryUseCase, PeriodComparison
from .get_sales_analytics import GetSalesAnalyticsUseCase, SalesAnalytics
from .get_unified_ledger import GetUnifiedLedgerUseCase

__all__ = [
    "AddRecurringExpenseUseCase",
    "CloseCashDayUseCase",
    "VerifyCashDayUseCase",
    "GetIncomeStatementUseCase",
    "IncomeStatement",
    "GetPeriodSummaryUseCase",
    "PeriodComparison",
    "GetSalesAnalyticsUseCase",
    "SalesAnalytics",
    "GetUnifiedLedgerUseCase",
]
