"""Use case to record an expense, optionally repeated monthly."""

from collections.abc import Callable
from decimal import Decimal
import uuid

from src.application.ports.ledger_repository import LedgerWritePort
from src.domain.constants import DEFAULT_EXPENSE_CATEGORY
from src.domain.models import (
    Branch,
    LedgerEntry,
    PaymentMethod,
    RecurringIntent,
)
from src.domain.services.recurring import expand_recurring
from src.infrastructure.logging.logger import get_app_logger, get_audit_logger


def _new_batch_id() -> str:
    return f"f-{uuid.uuid4().hex}"


class AddRecurringExpenseUseCase:
    """Expand an expense intent and persist the whole batch at once."""

    def __init__(
        self,
        ledger_writer: LedgerWritePort,
        logger=None,
        audit_logger=None,
        id_factory: Callable[[], str] = _new_batch_id,
        default_category: str = DEFAULT_EXPENSE_CATEGORY,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_writer: Port persisting ledger entries.
            logger: Optional logger compatible with logging.Logger-like API.
            audit_logger: Optional logger for the audit trail.
            id_factory: Callable producing new batch ids.
            default_category: Category used when none is given.
        """
        self._ledger_writer = ledger_writer
        self._logger = logger or get_app_logger()
        self._audit_logger = audit_logger or get_audit_logger()
        self._id_factory = id_factory
        self._default_category = default_category

    def execute(
        self,
        description: str,
        amount: Decimal,
        start_date,
        installments: int = 1,
        category: str | None = None,
        branch: Branch = Branch.PRIMARY,
        payment_method: PaymentMethod | None = None,
    ) -> list[LedgerEntry]:
        """Generate and store the expense entries.

        Args:
            description: Base description.
            amount: Amount of each entry.
            start_date: Date of the first entry.
            installments: Number of monthly entries.
            category: Expense category; the default category when blank.
            branch: Branch charged.
            payment_method: Optional payment method.

        Returns:
            list[LedgerEntry]: Stored entries.
        """
        intent = RecurringIntent(
            batch_id=self._id_factory(),
            description=description,
            amount=amount,
            category=(
                category
                if category and category.strip()
                else self._default_category
            ),
            branch=Branch.parse(branch),
            start_date=start_date,
            installments=installments,
            payment_method=payment_method,
        )
        entries = expand_recurring(intent)
        saved = self._ledger_writer.save_entries(entries)
        self._logger.info(
            f"Stored {saved} expense entries for batch {intent.batch_id}"
        )
        self._audit_logger.info(
            f"Expense batch {intent.batch_id}: '{intent.description}' "
            f"amount={entries[0].amount} x{len(entries)} "
            f"from {entries[0].date} branch={intent.branch.value}"
        )
        return entries


__all__ = ["AddRecurringExpenseUseCase"]
