"""Unification of ledger entries and completed sales into one ledger view."""

from collections.abc import Iterable
from logging import Logger

from src.domain.constants import SALE_RECORD_PREFIX, SALES_CATEGORY
from src.domain.models import (
    BranchFilter,
    DateRange,
    EntryKind,
    LedgerEntry,
    RecordSource,
    Sale,
    SaleStatus,
    UnifiedRecord,
)
from src.domain.services.validation import (
    is_legacy_sales_income,
    iter_valid_entries,
    iter_valid_sales,
)
from src.utils.decimal_utils import coerce_decimal


def unify_ledger(
    entries: Iterable[LedgerEntry],
    sales: Iterable[Sale],
    branch_filter: BranchFilter,
    date_range: DateRange | None = None,
    *,
    sales_category: str = SALES_CATEGORY,
    logger: Logger,
) -> list[UnifiedRecord]:
    """Merge ledger entries and completed sales into one ordered ledger.

    Income entries filed under the sales category are dropped because the
    completed sales already account for that income. Each completed sale
    becomes one income record, or one per payment split.

    Args:
        entries: Manually recorded ledger entries.
        sales: Sales of any status.
        branch_filter: Branch selection.
        date_range: Optional inclusive date range; ``None`` keeps all dates.
        sales_category: Category reserved for sale-derived income.
        logger: Logger used for warnings.

    Returns:
        list[UnifiedRecord]: Records sorted by date then id, both descending.
    """
    date_range = date_range or DateRange.all_time()
    records: list[UnifiedRecord] = []

    for entry, entry_date, amount in iter_valid_entries(entries, logger):
        if is_legacy_sales_income(entry, sales_category):
            continue
        if not branch_filter.matches(entry.branch):
            continue
        if not date_range.contains(entry_date):
            continue
        records.append(
            UnifiedRecord(
                id=entry.id,
                date=entry_date,
                description=entry.description,
                amount=amount,
                kind=entry.kind,
                category=entry.category,
                branch=entry.branch,
                payment_method=entry.payment_method,
                source=RecordSource.ENTRY,
                source_id=entry.id,
            )
        )

    for sale, sale_date, _ in iter_valid_sales(sales, logger):
        if sale.status is not SaleStatus.COMPLETED:
            continue
        if not branch_filter.matches(sale.branch):
            continue
        if not date_range.contains(sale_date):
            continue
        records.extend(
            _sale_records(sale, sale_date, sales_category=sales_category)
        )

    return sort_records(records)


def sale_record_id(sale_id: str, split_index: int | None = None) -> str:
    """Return the stable id of a synthetic sale record.

    Args:
        sale_id: Source sale id.
        split_index: Position of the payment split, if split-paid.

    Returns:
        str: Deterministic record id.
    """
    if split_index is None:
        return f"{SALE_RECORD_PREFIX}-{sale_id}"
    return f"{SALE_RECORD_PREFIX}-{sale_id}-{split_index}"


def sort_records(records: Iterable[UnifiedRecord]) -> list[UnifiedRecord]:
    """Sort records by date descending, then id descending."""
    return sorted(
        records,
        key=lambda record: (record.date, record.id, record.source.value),
        reverse=True,
    )


def _sale_records(
    sale: Sale,
    sale_date,
    *,
    sales_category: str,
) -> list[UnifiedRecord]:
    description = f"Venda #{sale.id}"
    if sale.customer_name:
        description += f" - {sale.customer_name}"
    if not sale.payment_splits:
        return [
            UnifiedRecord(
                id=sale_record_id(sale.id),
                date=sale_date,
                description=description,
                amount=coerce_decimal(sale.total),
                kind=EntryKind.INCOME,
                category=sales_category,
                branch=sale.branch,
                payment_method=sale.payment_method,
                source=RecordSource.SALE,
                source_id=sale.id,
            )
        ]
    return [
        UnifiedRecord(
            id=sale_record_id(sale.id, index),
            date=sale_date,
            description=f"{description} ({split.method.value})",
            amount=coerce_decimal(split.amount),
            kind=EntryKind.INCOME,
            category=sales_category,
            branch=sale.branch,
            payment_method=split.method,
            source=RecordSource.SALE,
            source_id=sale.id,
        )
        for index, split in enumerate(sale.payment_splits)
    ]


__all__ = ["unify_ledger", "sale_record_id", "sort_records"]
