"""CLI adapter printing the period summary and the income statement."""

import os

from src.adapters.env_inputs import parse_env_date
from src.application.use_cases.get_income_statement import (
    GetIncomeStatementUseCase,
)
from src.application.use_cases.get_period_summary import (
    GetPeriodSummaryUseCase,
)
from src.domain.models import Branch, BranchFilter, DateRange, Granularity
from src.infrastructure.container import (
    build_ledger_repository,
    build_settings,
)
from src.infrastructure.logging.logger import get_app_logger


def _parse_granularity(value: str | None, logger) -> Granularity:
    if not value:
        return Granularity.MONTH
    try:
        return Granularity(value.strip().lower())
    except ValueError:
        logger.warning(
            f"Invalid granularity '{value}'. Falling back to month."
        )
        return Granularity.MONTH


def _parse_branch_filter(value: str | None, logger) -> BranchFilter:
    if not value or value.strip().upper() == "ALL":
        return BranchFilter.all()
    try:
        return BranchFilter.only(Branch.parse(value))
    except ValueError:
        logger.warning(f"Invalid branch '{value}'. Using all branches.")
        return BranchFilter.all()


def main() -> None:
    """Print the period aggregates, their trends and the period DRE."""
    logger = get_app_logger()
    settings = build_settings()

    reference = parse_env_date(os.getenv("REPORT_DATE"), logger)
    if reference is None:
        reference = settings.today(logger)
    granularity = _parse_granularity(os.getenv("REPORT_GRANULARITY"), logger)
    branch_filter = _parse_branch_filter(os.getenv("REPORT_BRANCH"), logger)

    repository = build_ledger_repository()
    comparison = GetPeriodSummaryUseCase(
        repository,
        logger=logger,
        sales_category=settings.sales_category,
    ).execute(reference, granularity, branch_filter)
    bounds = DateRange(
        start=comparison.current.start,
        end=comparison.current.end,
    )
    statement = GetIncomeStatementUseCase(repository, logger=logger).execute(
        branch_filter,
        bounds,
    )

    current = comparison.current
    print(
        f"Period {current.start} to {current.end} "
        f"({granularity.value}, branch={branch_filter})"
    )
    print(
        f"Revenue={current.revenue}, "
        f"pending={current.pending_receivables}, "
        f"expenses={current.expenses}, "
        f"net={current.net_result}, "
        f"accumulated={current.accumulated_balance}"
    )
    for trend in comparison.trends:
        print(
            f"  {trend.metric}: {trend.current} "
            f"(previous {trend.previous}, {trend.label})"
        )
    print(
        f"DRE: revenue={statement.gross_revenue}, cogs={statement.cogs}, "
        f"gross={statement.gross_profit}, "
        f"expenses={statement.total_expenses}, "
        f"net={statement.net_profit}, margin={statement.margin_pct:.1f}%"
    )
    for category in statement.expenses_by_category:
        print(f"  {category.category}: {category.total}")
        for line in category.lines:
            print(f"    {line.description}: {line.amount}")


if __name__ == "__main__":  # pragma: no cover
    main()
