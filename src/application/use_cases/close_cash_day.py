"""Use cases for the end-of-day cash reconciliation.

``VerifyCashDayUseCase`` shows the operator the day's cash tenders before
anything is stored. ``CloseCashDayUseCase`` computes the closing against the
latest earlier closing of the branch and persists it.

Closings for the same date and branch must not be written concurrently;
the repository enforces one closing per key.
"""

from collections.abc import Callable
import uuid

from src.application.ports.ledger_repository import (
    LedgerReadPort,
    LedgerWritePort,
)
from src.domain.models import Branch, CashClosing, CashVerification
from src.domain.services.dates import parse_calendar_date
from src.domain.services.reconciliation import close_day, verify_day
from src.infrastructure.logging.logger import get_app_logger, get_audit_logger


def _new_closing_id() -> str:
    return uuid.uuid4().hex


class VerifyCashDayUseCase:
    """Summarize cash received and change given for one day."""

    def __init__(self, ledger_repository: LedgerReadPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing sales and entries.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(self, closing_date, branch: Branch) -> CashVerification:
        """Return the same-day cash verification.

        Args:
            closing_date: Day to check.
            branch: Branch to check.

        Returns:
            CashVerification: Cash tenders and method totals of the day.
        """
        target_date = parse_calendar_date(closing_date)
        branch = Branch.parse(branch)
        sales = self._ledger_repository.fetch_sales(
            branch, target_date, target_date
        )
        entries = self._ledger_repository.fetch_entries(
            branch, target_date, target_date
        )
        verification = verify_day(
            target_date,
            branch,
            sales,
            entries,
            logger=self._logger,
        )
        self._logger.info(
            f"Cash verification for {branch.value} on {target_date}: "
            f"received={verification.cash_received}, "
            f"change={verification.change_given}"
        )
        return verification


class CloseCashDayUseCase:
    """Compute and persist the cash closing of one date and branch."""

    def __init__(
        self,
        ledger_repository: LedgerReadPort,
        ledger_writer: LedgerWritePort,
        logger=None,
        audit_logger=None,
        id_factory: Callable[[], str] = _new_closing_id,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing sales, entries and closings.
            ledger_writer: Port persisting the new closing.
            logger: Optional logger compatible with logging.Logger-like API.
            audit_logger: Optional logger for the audit trail.
            id_factory: Callable producing new closing ids.
        """
        self._ledger_repository = ledger_repository
        self._ledger_writer = ledger_writer
        self._logger = logger or get_app_logger()
        self._audit_logger = audit_logger or get_audit_logger()
        self._id_factory = id_factory

    def execute(
        self,
        closing_date,
        branch: Branch,
        counted_cash,
        closed_by: str = "",
        notes: str = "",
    ) -> CashClosing:
        """Close the day and persist the closing.

        Args:
            closing_date: Day being closed.
            branch: Branch being closed.
            counted_cash: Cash counted by the operator.
            closed_by: Operator name.
            notes: Operator notes.

        Returns:
            CashClosing: Persisted closing.
        """
        target_date = parse_calendar_date(closing_date)
        branch = Branch.parse(branch)
        prior_closings = self._ledger_repository.fetch_closings(
            branch, target_date
        )
        sales = self._ledger_repository.fetch_sales(
            branch, target_date, target_date
        )
        entries = self._ledger_repository.fetch_entries(
            branch, target_date, target_date
        )
        closing = close_day(
            target_date,
            branch,
            sales,
            entries,
            prior_closings,
            counted_cash,
            closing_id=self._id_factory(),
            closed_by=closed_by,
            notes=notes,
            logger=self._logger,
        )
        self._ledger_writer.save_closing(closing)

        summary = (
            f"Closing {closing.id} for {branch.value} on {target_date}: "
            f"opening={closing.opening_balance}, "
            f"expected={closing.expected_in_drawer}, "
            f"counted={closing.cash_in_drawer}, "
            f"difference={closing.difference}"
        )
        if closing.difference != 0:
            self._logger.warning(
                f"Cash {closing.status.value} of {abs(closing.difference)} "
                f"for {branch.value} on {target_date}"
            )
        self._logger.info(summary)
        self._audit_logger.info(f"{summary}, closed_by={closed_by or '-'}")
        return closing


__all__ = ["VerifyCashDayUseCase", "CloseCashDayUseCase"]
