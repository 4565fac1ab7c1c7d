"""Domain services package."""

from .dates import add_months, parse_calendar_date
from .income_statement import build_income_statement
from .ledger import sale_record_id, sort_records, unify_ledger
from .normalization import normalize_category, normalize_description
from .period import (
    aggregate_period,
    compare_periods,
    compute_trend,
    format_trend,
)
from .reconciliation import close_day, select_prior_closing, verify_day
from .recurring import expand_recurring
from .sales_analytics import build_sales_analytics
from .validation import (
    is_legacy_sales_income,
    validate_amount,
    validate_entry,
    validate_sale,
)

__all__ = [
    "add_months",
    "parse_calendar_date",
    "build_income_statement",
    "sale_record_id",
    "sort_records",
    "unify_ledger",
    "normalize_category",
    "normalize_description",
    "aggregate_period",
    "compare_periods",
    "compute_trend",
    "format_trend",
    "close_day",
    "select_prior_closing",
    "verify_day",
    "expand_recurring",
    "build_sales_analytics",
    "is_legacy_sales_income",
    "validate_amount",
    "validate_entry",
    "validate_sale",
]
