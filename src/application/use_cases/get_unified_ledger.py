"""Use case to build the unified ledger view for a branch selection."""

from src.application.ports.ledger_repository import LedgerReadPort
from src.domain.constants import SALES_CATEGORY
from src.domain.models import BranchFilter, DateRange, UnifiedRecord
from src.domain.services.ledger import unify_ledger
from src.infrastructure.logging.logger import get_app_logger


class GetUnifiedLedgerUseCase:
    """Merge ledger entries and completed sales into one ordered ledger."""

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
        branch_filter: BranchFilter | None = None,
        date_range: DateRange | None = None,
    ) -> list[UnifiedRecord]:
        """Return the unified ledger records.

        Args:
            branch_filter: Branch selection; every branch when omitted.
            date_range: Optional inclusive date range.

        Returns:
            list[UnifiedRecord]: Records sorted newest first.
        """
        branch_filter = branch_filter or BranchFilter.all()
        date_range = date_range or DateRange.all_time()
        entries = self._ledger_repository.fetch_entries(
            branch_filter.branch,
            date_range.start,
            date_range.end,
        )
        sales = self._ledger_repository.fetch_sales(
            branch_filter.branch,
            date_range.start,
            date_range.end,
        )
        self._logger.info(
            f"Fetched {len(entries)} entries and {len(sales)} sales "
            f"for branch={branch_filter}"
        )
        records = unify_ledger(
            entries,
            sales,
            branch_filter,
            date_range,
            sales_category=self._sales_category,
            logger=self._logger,
        )
        self._logger.info(f"Unified ledger holds {len(records)} records")
        return records


__all__ = ["GetUnifiedLedgerUseCase"]
