"""Domain validation helpers."""

from collections.abc import Iterable, Iterator
from datetime import date
from decimal import Decimal
from logging import Logger

from src.domain.errors import InvalidInputError
from src.domain.models import EntryKind, LedgerEntry, Sale
from src.domain.services.dates import parse_calendar_date
from src.utils.decimal_utils import coerce_decimal, sum_decimals


def validate_amount(value, field_name: str = "amount") -> Decimal:
    """Return a non-negative Decimal amount.

    Args:
        value: Raw amount.
        field_name: Name used in error messages.

    Returns:
        Decimal: Normalized amount.

    Raises:
        InvalidInputError: If the amount is not numeric or is negative.
    """
    try:
        amount = coerce_decimal(value)
    except ValueError as exc:
        raise InvalidInputError(f"Invalid {field_name}: {value!r}") from exc
    if amount < 0:
        raise InvalidInputError(f"Negative {field_name}: {amount}")
    return amount


def validate_entry(entry: LedgerEntry) -> tuple[date, Decimal]:
    """Validate a ledger entry.

    Args:
        entry: Entry to check.

    Returns:
        tuple[date, Decimal]: Parsed date and amount.

    Raises:
        InvalidInputError: If the date or amount is malformed.
    """
    entry_date = parse_calendar_date(entry.date)
    amount = validate_amount(entry.amount)
    return entry_date, amount


def validate_sale(sale: Sale) -> tuple[date, Decimal]:
    """Validate a sale, its payment splits and its line items.

    Args:
        sale: Sale to check.

    Returns:
        tuple[date, Decimal]: Parsed date and total.

    Raises:
        InvalidInputError: If the date or amounts are malformed, or the
            split amounts do not add up to the total.
    """
    sale_date = parse_calendar_date(sale.date)
    total = validate_amount(sale.total, "total")
    for item in sale.items:
        validate_amount(item.quantity, f"quantity of {item.product_id}")
        validate_amount(item.unit_price, f"unit price of {item.product_id}")
    if sale.payment_splits:
        for split in sale.payment_splits:
            validate_amount(split.amount, "split amount")
        split_total = sum_decimals(
            split.amount for split in sale.payment_splits
        )
        if split_total != total:
            raise InvalidInputError(
                f"Payment splits of sale {sale.id} add up to {split_total}, "
                f"expected {total}"
            )
    return sale_date, total


def is_legacy_sales_income(entry: LedgerEntry, sales_category: str) -> bool:
    """Return True for income entries that duplicate sale-derived income."""
    return entry.kind is EntryKind.INCOME and entry.category == sales_category


def iter_valid_entries(
    entries: Iterable[LedgerEntry],
    logger: Logger,
) -> Iterator[tuple[LedgerEntry, date, Decimal]]:
    """Yield entries with parsed dates and amounts, skipping invalid ones.

    Args:
        entries: Raw ledger entries.
        logger: Logger used for warnings.

    Yields:
        tuple[LedgerEntry, date, Decimal]: Entry, date and amount.
    """
    for entry in entries:
        try:
            entry_date, amount = validate_entry(entry)
        except InvalidInputError as exc:
            logger.warning(f"Skipping ledger entry {entry.id}: {exc}")
            continue
        yield entry, entry_date, amount


def iter_valid_sales(
    sales: Iterable[Sale],
    logger: Logger,
) -> Iterator[tuple[Sale, date, Decimal]]:
    """Yield sales with parsed dates and totals, skipping invalid ones.

    Args:
        sales: Raw sales.
        logger: Logger used for warnings.

    Yields:
        tuple[Sale, date, Decimal]: Sale, date and total.
    """
    for sale in sales:
        try:
            sale_date, total = validate_sale(sale)
        except InvalidInputError as exc:
            logger.warning(f"Skipping sale {sale.id}: {exc}")
            continue
        yield sale, sale_date, total


__all__ = [
    "validate_amount",
    "validate_entry",
    "validate_sale",
    "is_legacy_sales_income",
    "iter_valid_entries",
    "iter_valid_sales",
]
