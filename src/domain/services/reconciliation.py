"""End-of-day cash reconciliation chained across closings."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from logging import Logger

from src.domain.errors import InvalidInputError
from src.domain.models import (
    Branch,
    CashClosing,
    CashVerification,
    EntryKind,
    LedgerEntry,
    PaymentMethod,
    Sale,
    SaleStatus,
)
from src.domain.services.dates import parse_calendar_date
from src.domain.services.validation import (
    iter_valid_entries,
    iter_valid_sales,
    validate_amount,
)
from src.utils.decimal_utils import ZERO, coerce_decimal


def select_prior_closing(
    closings: Iterable[CashClosing],
    target_date: date,
    branch: Branch | str,
) -> CashClosing | None:
    """Return the latest closing strictly before ``target_date``.

    Gaps are skipped: without a closing for the previous day the search keeps
    going back. Several closings on the same date resolve to the greatest id.

    Args:
        closings: Closings of any branch and date.
        target_date: Day being closed.
        branch: Branch being closed, as a member or its name.

    Returns:
        CashClosing | None: Prior closing, if any.
    """
    branch = _parse_branch(branch)
    candidates = [
        closing
        for closing in closings
        if closing.branch is branch and closing.date < target_date
    ]
    if not candidates:
        return None
    return max(candidates, key=lambda closing: (closing.date, closing.id))


def close_day(
    closing_date,
    branch: Branch | str,
    sales: Iterable[Sale],
    entries: Iterable[LedgerEntry],
    prior_closings: Iterable[CashClosing],
    counted_cash,
    *,
    closing_id: str,
    closed_by: str = "",
    notes: str = "",
    logger: Logger,
) -> CashClosing:
    """Compute the cash closing for one date and branch.

    Expected cash is the opening balance plus the day's cash sales minus the
    day's expenses. A difference between counted and expected cash is
    recorded as-is; it never blocks the closing.

    Args:
        closing_date: Day being closed (``date`` or ``YYYY-MM-DD``).
        branch: Branch being closed, as a member or its name.
        sales: Sales of any status and date.
        entries: Ledger entries of any date.
        prior_closings: Previously persisted closings.
        counted_cash: Cash counted by the operator.
        closing_id: Identifier of the new closing.
        closed_by: Operator name.
        notes: Operator notes.
        logger: Logger used for warnings.

    Returns:
        CashClosing: New immutable closing; nothing is persisted here.

    Raises:
        InvalidInputError: If the date, counted cash, branch
            or id is malformed.
    """
    target_date = parse_calendar_date(closing_date)
    branch = _parse_branch(branch)
    counted = validate_amount(counted_cash, "counted cash")
    if not closing_id or not closing_id.strip():
        raise InvalidInputError("A closing id is required")

    prior = select_prior_closing(prior_closings, target_date, branch)
    opening_balance = (
        coerce_decimal(prior.cash_in_drawer) if prior is not None else ZERO
    )

    totals_by_method, total_income, _ = _day_sales_totals(
        sales, target_date, branch, logger
    )
    cash_sales = totals_by_method.get(PaymentMethod.CASH, ZERO)
    day_expenses = _day_expenses(entries, target_date, branch, logger)

    expected = opening_balance + cash_sales - day_expenses
    return CashClosing(
        id=closing_id,
        date=target_date,
        branch=branch,
        opening_balance=opening_balance,
        total_income=total_income,
        total_expense=day_expenses,
        totals_by_method=totals_by_method,
        cash_sales=cash_sales,
        expected_in_drawer=expected,
        cash_in_drawer=counted,
        difference=counted - expected,
        notes=notes,
        closed_by=closed_by,
    )


def verify_day(
    closing_date,
    branch: Branch | str,
    sales: Iterable[Sale],
    entries: Iterable[LedgerEntry],
    *,
    logger: Logger,
) -> CashVerification:
    """Summarize the day's cash tenders without the closing chain.

    Args:
        closing_date: Day to check.
        branch: Branch to check, as a member or its name.
        sales: Sales of any status and date.
        entries: Ledger entries of any date.
        logger: Logger used for warnings.

    Returns:
        CashVerification: Cash received, change given and method totals.

    Raises:
        InvalidInputError: If the date or branch is malformed.
    """
    target_date = parse_calendar_date(closing_date)
    branch = _parse_branch(branch)
    sales = list(sales)
    totals_by_method, _, completed_count = _day_sales_totals(
        sales, target_date, branch, logger
    )

    cash_received = ZERO
    change_given = ZERO
    for sale in _day_completed_sales(sales, target_date, branch, logger):
        cash_portion = sum(
            (
                coerce_decimal(portion.amount)
                for portion in sale.payment_portions()
                if portion.method is PaymentMethod.CASH
            ),
            ZERO,
        )
        if cash_portion == 0 and sale.cash_received is None:
            continue
        received = (
            coerce_decimal(sale.cash_received)
            if sale.cash_received is not None
            else cash_portion
        )
        if sale.change_amount is not None:
            change = coerce_decimal(sale.change_amount)
        else:
            change = max(ZERO, received - cash_portion)
        cash_received += received
        change_given += change

    return CashVerification(
        date=target_date,
        branch=branch,
        cash_received=cash_received,
        change_given=change_given,
        cash_sales=totals_by_method.get(PaymentMethod.CASH, ZERO),
        totals_by_method=totals_by_method,
        day_expenses=_day_expenses(entries, target_date, branch, logger),
        completed_sale_count=completed_count,
    )


def _parse_branch(value) -> Branch:
    try:
        return Branch.parse(value)
    except ValueError as exc:
        raise InvalidInputError(str(exc)) from exc


def _day_completed_sales(
    sales: Iterable[Sale],
    target_date: date,
    branch: Branch,
    logger: Logger,
) -> list[Sale]:
    return [
        sale
        for sale, sale_date, _ in iter_valid_sales(sales, logger)
        if sale.status is SaleStatus.COMPLETED
        and sale.branch is branch
        and sale_date == target_date
    ]


def _day_sales_totals(
    sales: Iterable[Sale],
    target_date: date,
    branch: Branch,
    logger: Logger,
) -> tuple[dict[PaymentMethod, Decimal], Decimal, int]:
    totals: dict[PaymentMethod, Decimal] = {}
    total_income = ZERO
    day_sales = _day_completed_sales(sales, target_date, branch, logger)
    for sale in day_sales:
        total_income += coerce_decimal(sale.total)
        for portion in sale.payment_portions():
            totals[portion.method] = totals.get(
                portion.method, ZERO
            ) + coerce_decimal(portion.amount)
    return totals, total_income, len(day_sales)


def _day_expenses(
    entries: Iterable[LedgerEntry],
    target_date: date,
    branch: Branch,
    logger: Logger,
) -> Decimal:
    return sum(
        (
            amount
            for entry, entry_date, amount in iter_valid_entries(
                entries, logger
            )
            if entry.kind is EntryKind.EXPENSE
            and entry.branch is branch
            and entry_date == target_date
        ),
        ZERO,
    )


__all__ = ["select_prior_closing", "close_day", "verify_day"]
