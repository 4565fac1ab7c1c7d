"""Tests for the unified ledger view."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from src.domain.models import (
    Branch,
    BranchFilter,
    DateRange,
    EntryKind,
    PaymentMethod,
    RecordSource,
    SaleStatus,
)
from src.domain.services.ledger import sale_record_id, unify_ledger
from tests.builders import make_entry, make_sale


def _dataset():
    entries = [
        make_entry("e1", "2024-03-05", "30", description="Aluguel"),
        make_entry(
            "e2", "2024-03-10", "100", EntryKind.INCOME, "Vendas", description="Legacy"
        ),
        make_entry(
            "e3", "2024-03-08", "20", EntryKind.INCOME, "Juros", branch=Branch.SECONDARY
        ),
    ]
    sales = [
        make_sale("s1", "2024-03-10", "100", customer_name="Ana"),
        make_sale("s2", "2024-03-09", "50", status=SaleStatus.PENDING),
        make_sale("s3", "2024-03-09", "70", status=SaleStatus.CANCELLED),
        make_sale(
            "s4",
            "2024-03-07",
            "90",
            method=PaymentMethod.SPLIT,
            splits=((PaymentMethod.CASH, "40"), (PaymentMethod.PIX, "50")),
            branch=Branch.SECONDARY,
        ),
    ]
    return entries, sales


def test_unify_ledger_merges_sales_and_drops_legacy_income() -> None:
    entries, sales = _dataset()

    records = unify_ledger(entries, sales, BranchFilter.all(), logger=MagicMock())

    assert [record.id for record in records] == [
        "sale-s1",
        "e3",
        "sale-s4-1",
        "sale-s4-0",
        "e1",
    ]
    sale_record = records[0]
    assert sale_record.source is RecordSource.SALE
    assert sale_record.source_id == "s1"
    assert sale_record.kind is EntryKind.INCOME
    assert sale_record.category == "Vendas"
    assert sale_record.amount == Decimal("100")
    assert sale_record.description == "Venda #s1 - Ana"
    assert sale_record.date == date(2024, 3, 10)


def test_split_sales_produce_one_record_per_split() -> None:
    entries, sales = _dataset()

    records = unify_ledger(entries, sales, BranchFilter.all(), logger=MagicMock())
    split_records = [record for record in records if record.source_id == "s4"]

    assert {record.id: record.amount for record in split_records} == {
        "sale-s4-0": Decimal("40"),
        "sale-s4-1": Decimal("50"),
    }
    assert {record.payment_method for record in split_records} == {
        PaymentMethod.CASH,
        PaymentMethod.PIX,
    }
    assert split_records[0].description.endswith("(Pix)")


def test_completed_sales_are_counted_exactly_once() -> None:
    entries, sales = _dataset()

    records = unify_ledger(entries, sales, BranchFilter.all(), logger=MagicMock())
    sales_income = sum(
        record.amount for record in records if record.source is RecordSource.SALE
    )

    assert sales_income == Decimal("190")


def test_unify_ledger_is_deterministic() -> None:
    entries, sales = _dataset()

    first = unify_ledger(entries, sales, BranchFilter.all(), logger=MagicMock())
    second = unify_ledger(
        list(reversed(entries)),
        list(reversed(sales)),
        BranchFilter.all(),
        logger=MagicMock(),
    )

    assert first == second


def test_unify_ledger_applies_branch_and_date_filters() -> None:
    entries, sales = _dataset()

    records = unify_ledger(
        entries,
        sales,
        BranchFilter.only(Branch.SECONDARY),
        DateRange(start=date(2024, 3, 8), end=date(2024, 3, 31)),
        logger=MagicMock(),
    )

    assert [record.id for record in records] == ["e3"]


def test_unify_ledger_honors_custom_sales_category() -> None:
    entries = [
        make_entry("e1", "2024-03-01", "10", EntryKind.INCOME, "Vendas"),
        make_entry("e2", "2024-03-01", "10", EntryKind.INCOME, "Sales"),
    ]

    records = unify_ledger(
        entries,
        [],
        BranchFilter.all(),
        sales_category="Sales",
        logger=MagicMock(),
    )

    assert [record.id for record in records] == ["e1"]


def test_sale_record_id_is_stable() -> None:
    assert sale_record_id("42") == "sale-42"
    assert sale_record_id("42", 1) == "sale-42-1"
