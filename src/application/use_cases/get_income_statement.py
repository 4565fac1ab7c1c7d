"""Use case to build the management income statement (DRE)."""

from src.application.ports.ledger_repository import LedgerReadPort
from src.domain.models import BranchFilter, DateRange, IncomeStatement
from src.domain.services.income_statement import build_income_statement
from src.infrastructure.logging.logger import get_app_logger


class GetIncomeStatementUseCase:
    """Compute revenue, cost of goods sold, expenses and margin."""

    def __init__(self, ledger_repository: LedgerReadPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing sales, entries and products.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        branch_filter: BranchFilter | None = None,
        date_range: DateRange | None = None,
    ) -> IncomeStatement:
        """Return the income statement for the selection.

        Args:
            branch_filter: Branch selection; every branch when omitted.
            date_range: Optional inclusive date range.

        Returns:
            IncomeStatement: Statement for the period.
        """
        branch_filter = branch_filter or BranchFilter.all()
        date_range = date_range or DateRange.all_time()
        sales = self._ledger_repository.fetch_sales(
            branch_filter.branch,
            date_range.start,
            date_range.end,
        )
        entries = self._ledger_repository.fetch_entries(
            branch_filter.branch,
            date_range.start,
            date_range.end,
        )
        products = self._ledger_repository.fetch_products()
        statement = build_income_statement(
            sales,
            entries,
            products,
            branch_filter,
            date_range,
            logger=self._logger,
        )
        self._logger.info(
            f"Income statement computed: revenue={statement.gross_revenue}, "
            f"cogs={statement.cogs}, net={statement.net_profit}, "
            f"margin={statement.margin_pct}"
        )
        return statement


__all__ = ["GetIncomeStatementUseCase", "IncomeStatement"]
