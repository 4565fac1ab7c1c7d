"""Use case to compute period aggregates and their trends."""

from src.application.ports.ledger_repository import LedgerReadPort
from src.domain.constants import SALES_CATEGORY
from src.domain.models import (
    BranchFilter,
    DateRange,
    Granularity,
    PeriodComparison,
)
from src.domain.services.dates import parse_calendar_date
from src.domain.services.period import compare_periods
from src.infrastructure.logging.logger import get_app_logger


class GetPeriodSummaryUseCase:
    """Compute revenue, receivables, expenses and carried balance."""

    def __init__(
        self,
        ledger_repository: LedgerReadPort,
        logger=None,
        sales_category: str = SALES_CATEGORY,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing entries and sales.
            logger: Optional logger compatible with logging.Logger-like API.
            sales_category: Category reserved for sale-derived income.
        """
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()
        self._sales_category = sales_category

    def execute(
        self,
        reference,
        granularity: Granularity = Granularity.MONTH,
        branch_filter: BranchFilter | None = None,
    ) -> PeriodComparison:
        """Return the period summary next to the previous period.

        The carried balance needs every record before the period, so the
        whole history up to the period end is read.

        Args:
            reference: Any day inside the period.
            granularity: Period size.
            branch_filter: Branch selection; every branch when omitted.

        Returns:
            PeriodComparison: Current and previous summaries with trends.
        """
        branch_filter = branch_filter or BranchFilter.all()
        reference_date = parse_calendar_date(reference)
        bounds = DateRange.for_period(reference_date, granularity)
        entries = self._ledger_repository.fetch_entries(
            branch_filter.branch,
            None,
            bounds.end,
        )
        sales = self._ledger_repository.fetch_sales(
            branch_filter.branch,
            None,
            bounds.end,
        )
        self._logger.info(
            f"Fetched {len(entries)} entries and {len(sales)} sales up to "
            f"{bounds.end} for branch={branch_filter}"
        )
        comparison = compare_periods(
            reference_date,
            granularity,
            branch_filter,
            sales,
            entries,
            sales_category=self._sales_category,
            logger=self._logger,
        )
        current = comparison.current
        self._logger.info(
            f"Period {current.start}..{current.end} computed: "
            f"revenue={current.revenue}, expenses={current.expenses}, "
            f"carried={current.accumulated_balance}"
        )
        return comparison


__all__ = ["GetPeriodSummaryUseCase", "PeriodComparison"]
