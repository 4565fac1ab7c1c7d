"""Tests for the SQLAlchemy ledger repository against in-memory SQLite."""

from datetime import date
from decimal import Decimal
import json
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.exc import IntegrityError

from src.domain.models import (
    Branch,
    CashClosing,
    EntryKind,
    PaymentMethod,
    SaleStatus,
)
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.ledger_repository import SqlAlchemyLedgerRepository
from tests.builders import make_entry


INSERT_SALE = text(
    """
    INSERT INTO sales (
        id, sale_date, customer_name, total, branch, status, payment_method,
        payment_splits, items, cash_received, change_amount
    )
    VALUES (
        :id, :sale_date, :customer_name, :total, :branch, :status,
        :payment_method, :payment_splits, :items, :cash_received,
        :change_amount
    )
    """
)

INSERT_PRODUCT = text(
    """
    INSERT INTO products (id, name, cost, price_primary, price_secondary)
    VALUES (:id, :name, :cost, :price_primary, :price_secondary)
    """
)


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", future=True)
    yield engine
    engine.dispose()


@pytest.fixture
def repository(engine):
    repo = SqlAlchemyLedgerRepository(
        SqlAlchemyDatabaseEngineAdapter(engine),
        logger=MagicMock(),
    )
    repo.prepare_schema()
    return repo


def _insert_sale(engine, **overrides) -> None:
    row = {
        "id": "s1",
        "sale_date": "2024-03-10",
        "customer_name": "Ana",
        "total": "100.00",
        "branch": "Matriz",
        "status": "Completed",
        "payment_method": "Cash",
        "payment_splits": None,
        "items": None,
        "cash_received": None,
        "change_amount": None,
    }
    row.update(overrides)
    with engine.begin() as conn:
        conn.execute(INSERT_SALE, row)


def _closing(closing_id, closing_date, cash_in_drawer) -> CashClosing:
    cash = Decimal(cash_in_drawer)
    return CashClosing(
        id=closing_id,
        date=closing_date,
        branch=Branch.PRIMARY,
        opening_balance=Decimal("0"),
        total_income=cash,
        total_expense=Decimal("0"),
        totals_by_method={PaymentMethod.CASH: cash},
        cash_sales=cash,
        expected_in_drawer=cash,
        cash_in_drawer=cash,
        difference=Decimal("0"),
        notes="ok",
        closed_by="Ana",
    )


def test_prepare_schema_is_idempotent(repository) -> None:
    repository.prepare_schema()

    assert repository.fetch_entries(None, None, None) == []


def test_save_and_fetch_entries_with_filters(repository) -> None:
    saved = repository.save_entries(
        [
            make_entry("e1", date(2024, 3, 5), "30.50"),
            make_entry(
                "e2",
                date(2024, 3, 20),
                "10",
                EntryKind.INCOME,
                "Juros",
                payment_method=PaymentMethod.PIX,
            ),
            make_entry("e3", date(2024, 3, 6), "5", branch=Branch.SECONDARY),
            make_entry("e4", date(2024, 4, 1), "70"),
        ]
    )

    entries = repository.fetch_entries(
        Branch.PRIMARY, date(2024, 3, 1), date(2024, 3, 31)
    )

    assert saved == 4
    assert [entry.id for entry in entries] == ["e1", "e2"]
    first, second = entries
    assert first.date == "2024-03-05"
    assert first.amount == Decimal("30.50")
    assert first.kind is EntryKind.EXPENSE
    assert first.payment_method is None
    assert second.payment_method is PaymentMethod.PIX
    assert second.branch is Branch.PRIMARY


def test_save_entries_is_all_or_nothing(repository) -> None:
    repository.save_entries([make_entry("dup", date(2024, 3, 1), "1")])

    with pytest.raises(IntegrityError):
        repository.save_entries(
            [
                make_entry("fresh", date(2024, 3, 2), "1"),
                make_entry("dup", date(2024, 3, 3), "1"),
            ]
        )

    ids = [entry.id for entry in repository.fetch_entries(None, None, None)]
    assert ids == ["dup"]


def test_save_entries_with_empty_batch(repository) -> None:
    assert repository.save_entries([]) == 0


def test_fetch_sales_decodes_splits_and_items(engine, repository) -> None:
    _insert_sale(
        engine,
        id="split",
        total="90",
        payment_method="Split",
        payment_splits=json.dumps(
            [{"method": "Cash", "amount": 40}, {"method": "Pix", "amount": "50"}]
        ),
        items=json.dumps(
            [
                {
                    "productId": "p1",
                    "productName": "Tomate",
                    "quantity": 3,
                    "priceAtSale": "30",
                }
            ]
        ),
        cash_received="50",
        change_amount="10",
    )
    _insert_sale(engine, id="pending", status="Pending")

    sales = repository.fetch_sales(None, date(2024, 3, 10), date(2024, 3, 10))

    assert [sale.id for sale in sales] == ["pending", "split"]
    split = sales[1]
    assert split.status is SaleStatus.COMPLETED
    assert split.total == Decimal("90")
    assert [(s.method, s.amount) for s in split.payment_splits] == [
        (PaymentMethod.CASH, Decimal("40")),
        (PaymentMethod.PIX, Decimal("50")),
    ]
    assert split.items[0].product_id == "p1"
    assert split.items[0].quantity == Decimal("3")
    assert split.cash_received == Decimal("50")
    assert split.change_amount == Decimal("10")
    assert sales[0].status is SaleStatus.PENDING
    assert sales[0].cash_received is None


def test_fetch_sales_skips_unreadable_rows(engine) -> None:
    logger = MagicMock()
    repo = SqlAlchemyLedgerRepository(
        SqlAlchemyDatabaseEngineAdapter(engine),
        logger=logger,
    )
    repo.prepare_schema()
    _insert_sale(engine, id="ok")
    _insert_sale(engine, id="unknown-status", status="Refunded")
    _insert_sale(engine, id="broken-json", payment_splits="{not json")

    sales = repo.fetch_sales(None, None, None)

    assert [sale.id for sale in sales] == ["ok"]
    assert logger.warning.call_count == 2


def test_fetch_products(engine, repository) -> None:
    with engine.begin() as conn:
        conn.execute(
            INSERT_PRODUCT,
            {
                "id": "p1",
                "name": "Tomate",
                "cost": "2.5",
                "price_primary": "5",
                "price_secondary": "6",
            },
        )

    products = repository.fetch_products()

    assert len(products) == 1
    assert products[0].cost == Decimal("2.5")
    assert products[0].price_for(Branch.SECONDARY) == Decimal("6")


def test_save_and_fetch_closings_strictly_before(repository) -> None:
    repository.save_closing(_closing("c1", date(2024, 3, 1), "500"))
    repository.save_closing(_closing("c3", date(2024, 3, 3), "700"))

    closings = repository.fetch_closings(Branch.PRIMARY, date(2024, 3, 3))

    assert [closing.id for closing in closings] == ["c1"]
    closing = closings[0]
    assert closing.date == date(2024, 3, 1)
    assert closing.cash_in_drawer == Decimal("500")
    assert closing.totals_by_method == {PaymentMethod.CASH: Decimal("500")}
    assert closing.closed_by == "Ana"
    assert repository.fetch_closings(Branch.SECONDARY, None) == []


def test_save_closing_rejects_second_closing_for_same_day(repository) -> None:
    repository.save_closing(_closing("c1", date(2024, 3, 1), "500"))

    with pytest.raises(IntegrityError):
        repository.save_closing(_closing("c2", date(2024, 3, 1), "600"))
