"""Tests for the income statement builder."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from src.domain.models import (
    BranchFilter,
    DateRange,
    EntryKind,
    Product,
    SaleItem,
    SaleStatus,
)
from src.domain.services.income_statement import build_income_statement
from tests.builders import make_entry, make_sale

MARCH = DateRange(start=date(2024, 3, 1), end=date(2024, 3, 31))


def _products():
    return [
        Product(id="p1", name="Tomate", cost=Decimal("10")),
        Product(id="p2", name="Queijo", cost=Decimal("15")),
    ]


def _sales():
    return [
        make_sale(
            "s1",
            "2024-03-10",
            "100",
            items=(
                SaleItem("p1", Decimal("2"), Decimal("30")),
                SaleItem("p2", Decimal("1"), Decimal("40")),
            ),
        ),
        make_sale(
            "s2",
            "2024-03-11",
            "80",
            status=SaleStatus.PENDING,
            items=(SaleItem("p1", Decimal("5"), Decimal("16")),),
        ),
        make_sale(
            "s3",
            "2024-03-12",
            "50",
            items=(SaleItem("ghost", Decimal("1"), Decimal("50")),),
        ),
        make_sale(
            "s4",
            "2024-03-13",
            "0",
            items=(SaleItem("ghost", Decimal("1"), Decimal("0")),),
        ),
        make_sale("feb", "2024-02-28", "999"),
    ]


def _entries():
    return [
        make_entry("e1", "2024-03-05", "30", category="Aluguel", description="Aluguel março"),
        make_entry("e2", "2024-03-06", "10", category="Aluguel", description="Aluguel  março"),
        make_entry("e3", "2024-03-07", "20", category="  ", description="Luz"),
        make_entry("e4", "2024-03-08", "5", category="Outros", description="  Luz "),
        make_entry("e5", "2024-03-09", "300", EntryKind.INCOME, "Juros"),
        make_entry("e6", "2024-04-01", "70", category="Aluguel"),
    ]


def test_build_income_statement_computes_dre() -> None:
    logger = MagicMock()

    statement = build_income_statement(
        _sales(), _entries(), _products(), BranchFilter.all(), MARCH, logger=logger
    )

    assert statement.gross_revenue == Decimal("150")
    assert statement.cogs == Decimal("35")
    assert statement.gross_profit == Decimal("115")
    assert statement.total_expenses == Decimal("65")
    assert statement.net_profit == Decimal("50")
    assert statement.gross_profit - statement.total_expenses == statement.net_profit
    assert statement.margin_pct.quantize(Decimal("0.01")) == Decimal("33.33")


def test_expenses_are_grouped_by_category_and_description() -> None:
    statement = build_income_statement(
        _sales(), _entries(), _products(), BranchFilter.all(), MARCH, logger=MagicMock()
    )

    assert [(item.category, item.total) for item in statement.expenses_by_category] == [
        ("Aluguel", Decimal("40")),
        ("Outros", Decimal("25")),
    ]
    rent = statement.expenses_by_category[0]
    assert [(line.description, line.amount) for line in rent.lines] == [
        ("Aluguel março", Decimal("40")),
    ]
    other = statement.expenses_by_category[1]
    assert [(line.description, line.amount) for line in other.lines] == [
        ("Luz", Decimal("25")),
    ]


def test_missing_products_cost_zero_and_warn_once() -> None:
    logger = MagicMock()

    build_income_statement(
        _sales(), [], _products(), BranchFilter.all(), MARCH, logger=logger
    )

    assert logger.warning.call_count == 1
    assert "ghost" in logger.warning.call_args[0][0]


def test_products_can_be_given_as_mapping() -> None:
    products = {product.id: product for product in _products()}

    statement = build_income_statement(
        _sales(), [], products, BranchFilter.all(), MARCH, logger=MagicMock()
    )

    assert statement.cogs == Decimal("35")


def test_zero_revenue_yields_zero_margin() -> None:
    statement = build_income_statement(
        [],
        [make_entry("e1", "2024-03-05", "30")],
        [],
        BranchFilter.all(),
        logger=MagicMock(),
    )

    assert statement.gross_revenue == Decimal("0")
    assert statement.net_profit == Decimal("-30")
    assert statement.margin_pct == Decimal("0")


def test_sales_with_malformed_items_are_skipped() -> None:
    logger = MagicMock()
    sales = [
        make_sale(
            "ok",
            "2024-03-10",
            "10",
            items=(SaleItem("p1", Decimal("1"), Decimal("10")),),
        ),
        make_sale(
            "text-quantity",
            "2024-03-11",
            "10",
            items=(SaleItem("p1", "abc", Decimal("10")),),
        ),
        make_sale(
            "negative-quantity",
            "2024-03-12",
            "10",
            items=(SaleItem("p1", Decimal("-5"), Decimal("2")),),
        ),
    ]

    statement = build_income_statement(
        sales, [], _products(), BranchFilter.all(), MARCH, logger=logger
    )

    assert statement.gross_revenue == Decimal("10")
    assert statement.cogs == Decimal("10")
    assert statement.gross_profit == Decimal("0")
    assert logger.warning.call_count == 2
