"""Expansion of recurring expense intents into dated ledger entries."""

from src.domain.errors import InvalidInputError
from src.domain.models import EntryKind, LedgerEntry, RecurringIntent
from src.domain.services.dates import add_months, parse_calendar_date
from src.domain.services.normalization import normalize_category
from src.domain.services.validation import validate_amount


def expand_recurring(intent: RecurringIntent) -> list[LedgerEntry]:
    """Turn one expense intent into its monthly installments.

    Entry ``i`` is dated ``start_date + i`` calendar months and, when there
    is more than one installment, labeled ``"<description> (i+1/N)"``.

    Args:
        intent: Expense to record and how many times.

    Returns:
        list[LedgerEntry]: Exactly ``intent.installments`` expense entries.

    Raises:
        InvalidInputError: If the count, amount, description, batch id or
            start date is malformed.
    """
    installments = intent.installments
    if isinstance(installments, bool) or not isinstance(installments, int):
        raise InvalidInputError(
            f"Installments must be an integer, got {installments!r}"
        )
    if installments < 1:
        raise InvalidInputError(
            f"Installments must be at least 1, got {installments}"
        )
    if not intent.description or not intent.description.strip():
        raise InvalidInputError("An expense description is required")
    if not intent.batch_id:
        raise InvalidInputError("A batch id is required")
    amount = validate_amount(intent.amount)
    start_date = parse_calendar_date(intent.start_date)
    category = normalize_category(intent.category)

    if installments == 1:
        return [
            LedgerEntry(
                id=intent.batch_id,
                date=start_date,
                description=intent.description,
                amount=amount,
                kind=EntryKind.EXPENSE,
                category=category,
                branch=intent.branch,
                payment_method=intent.payment_method,
            )
        ]
    return [
        LedgerEntry(
            id=f"{intent.batch_id}-{index}",
            date=add_months(start_date, index),
            description=f"{intent.description} ({index + 1}/{installments})",
            amount=amount,
            kind=EntryKind.EXPENSE,
            category=category,
            branch=intent.branch,
            payment_method=intent.payment_method,
        )
        for index in range(installments)
    ]


__all__ = ["expand_recurring"]
