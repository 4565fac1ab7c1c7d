"""Use case to break completed sales revenue down for reports."""

from src.application.ports.ledger_repository import LedgerReadPort
from src.domain.models import BranchFilter, DateRange, SalesAnalytics
from src.domain.services.sales_analytics import build_sales_analytics
from src.infrastructure.logging.logger import get_app_logger


class GetSalesAnalyticsUseCase:
    """Compute revenue by payment method, day, weekday and product."""

    def __init__(self, ledger_repository: LedgerReadPort, logger=None) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        branch_filter: BranchFilter | None = None,
        date_range: DateRange | None = None,
        top_n: int = 10,
    ) -> SalesAnalytics:
        branch_filter = branch_filter or BranchFilter.all()
        date_range = date_range or DateRange.all_time()
        sales = self._ledger_repository.fetch_sales(
            branch_filter.branch,
            date_range.start,
            date_range.end,
        )
        analytics = build_sales_analytics(
            sales,
            branch_filter,
            date_range,
            top_n=top_n,
            logger=self._logger,
        )
        self._logger.info(
            f"Sales analytics computed over {analytics.completed_sale_count} "
            f"completed sales: revenue={analytics.revenue}"
        )
        return analytics


__all__ = ["GetSalesAnalyticsUseCase", "SalesAnalytics"]
