"""SQLAlchemy-backed repository for ledger entries, sales and closings."""

from datetime import date
import json

from sqlalchemy import Numeric, bindparam, text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.ledger_repository import (
    LedgerReadPort,
    LedgerWritePort,
)
from src.domain.errors import InvalidInputError
from src.domain.models import (
    Branch,
    CashClosing,
    EntryKind,
    LedgerEntry,
    PaymentMethod,
    PaymentSplit,
    Product,
    Sale,
    SaleItem,
    SaleStatus,
)
from src.domain.services.dates import parse_calendar_date
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal


MONEY = Numeric(14, 2, asdecimal=True)
COST = Numeric(14, 4, asdecimal=True)

CREATE_TABLES_SQL = (
    """
    CREATE TABLE IF NOT EXISTS ledger_entries (
        id TEXT PRIMARY KEY,
        entry_date TEXT NOT NULL,
        description TEXT NOT NULL,
        amount NUMERIC(14, 2) NOT NULL,
        kind TEXT NOT NULL,
        category TEXT NOT NULL,
        branch TEXT NOT NULL,
        payment_method TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS sales (
        id TEXT PRIMARY KEY,
        sale_date TEXT NOT NULL,
        customer_name TEXT,
        total NUMERIC(14, 2) NOT NULL,
        branch TEXT NOT NULL,
        status TEXT NOT NULL,
        payment_method TEXT NOT NULL,
        payment_splits TEXT,
        items TEXT,
        cash_received NUMERIC(14, 2),
        change_amount NUMERIC(14, 2)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS products (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        cost NUMERIC(14, 4) NOT NULL,
        price_primary NUMERIC(14, 2),
        price_secondary NUMERIC(14, 2)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS cash_closings (
        id TEXT PRIMARY KEY,
        closing_date TEXT NOT NULL,
        branch TEXT NOT NULL,
        opening_balance NUMERIC(14, 2) NOT NULL,
        total_income NUMERIC(14, 2) NOT NULL,
        total_expense NUMERIC(14, 2) NOT NULL,
        cash_sales NUMERIC(14, 2) NOT NULL,
        expected_in_drawer NUMERIC(14, 2) NOT NULL,
        cash_in_drawer NUMERIC(14, 2) NOT NULL,
        difference NUMERIC(14, 2) NOT NULL,
        totals_by_method TEXT NOT NULL,
        notes TEXT,
        closed_by TEXT,
        UNIQUE (closing_date, branch)
    )
    """,
)

INSERT_ENTRY_SQL = text(
    """
    INSERT INTO ledger_entries (
        id,
        entry_date,
        description,
        amount,
        kind,
        category,
        branch,
        payment_method
    )
    VALUES (
        :id,
        :entry_date,
        :description,
        :amount,
        :kind,
        :category,
        :branch,
        :payment_method
    )
    """
).bindparams(bindparam("amount", type_=MONEY))

INSERT_CLOSING_SQL = text(
    """
    INSERT INTO cash_closings (
        id,
        closing_date,
        branch,
        opening_balance,
        total_income,
        total_expense,
        cash_sales,
        expected_in_drawer,
        cash_in_drawer,
        difference,
        totals_by_method,
        notes,
        closed_by
    )
    VALUES (
        :id,
        :closing_date,
        :branch,
        :opening_balance,
        :total_income,
        :total_expense,
        :cash_sales,
        :expected_in_drawer,
        :cash_in_drawer,
        :difference,
        :totals_by_method,
        :notes,
        :closed_by
    )
    """
).bindparams(
    bindparam("opening_balance", type_=MONEY),
    bindparam("total_income", type_=MONEY),
    bindparam("total_expense", type_=MONEY),
    bindparam("cash_sales", type_=MONEY),
    bindparam("expected_in_drawer", type_=MONEY),
    bindparam("cash_in_drawer", type_=MONEY),
    bindparam("difference", type_=MONEY),
)

SELECT_PRODUCTS_SQL = text(
    """
    SELECT id, name, cost, price_primary, price_secondary
    FROM products
    ORDER BY id
    """
).columns(cost=COST, price_primary=MONEY, price_secondary=MONEY)


class SqlAlchemyLedgerRepository(LedgerReadPort, LedgerWritePort):
    """Repository backed by SQLAlchemy for ledger reads and writes."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def prepare_schema(self) -> None:
        """Create the ledger tables when missing."""
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            for statement in CREATE_TABLES_SQL:
                conn.exec_driver_sql(statement)

    def fetch_entries(
        self,
        branch: Branch | None,
        start_date: date | None,
        end_date: date | None,
    ) -> list[LedgerEntry]:
        query = self._build_filtered_query(
            """
            SELECT id, entry_date, description, amount, kind, category,
                   branch, payment_method
            FROM ledger_entries
            WHERE 1=1
            """,
            date_column="entry_date",
            branch=branch,
            start_date=start_date,
            end_date=end_date,
        ).columns(amount=MONEY)
        params = self._build_params(branch, start_date, end_date)
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(query, params).all()
        entries = []
        for row in rows:
            try:
                entries.append(
                    LedgerEntry(
                        id=row.id,
                        date=row.entry_date,
                        description=row.description,
                        amount=coerce_decimal(row.amount),
                        kind=EntryKind(row.kind),
                        category=row.category,
                        branch=Branch.parse(row.branch),
                        payment_method=self._optional_method(
                            row.payment_method
                        ),
                    )
                )
            except ValueError as exc:
                self._logger.warning(f"Skipping ledger row {row.id}: {exc}")
        return entries

    def fetch_sales(
        self,
        branch: Branch | None,
        start_date: date | None,
        end_date: date | None,
    ) -> list[Sale]:
        query = self._build_filtered_query(
            """
            SELECT id, sale_date, customer_name, total, branch, status,
                   payment_method, payment_splits, items, cash_received,
                   change_amount
            FROM sales
            WHERE 1=1
            """,
            date_column="sale_date",
            branch=branch,
            start_date=start_date,
            end_date=end_date,
        ).columns(total=MONEY, cash_received=MONEY, change_amount=MONEY)
        params = self._build_params(branch, start_date, end_date)
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(query, params).all()
        sales = []
        for row in rows:
            try:
                sales.append(self._sale_from_row(row))
            except (ValueError, KeyError, TypeError) as exc:
                self._logger.warning(f"Skipping sale row {row.id}: {exc}")
        return sales

    def fetch_products(self) -> list[Product]:
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(SELECT_PRODUCTS_SQL).all()
        return [
            Product(
                id=row.id,
                name=row.name,
                cost=coerce_decimal(row.cost),
                price_primary=coerce_decimal(row.price_primary),
                price_secondary=coerce_decimal(row.price_secondary),
            )
            for row in rows
        ]

    def fetch_closings(
        self,
        branch: Branch | None,
        before: date | None,
    ) -> list[CashClosing]:
        base_sql = """
        SELECT id, closing_date, branch, opening_balance, total_income,
               total_expense, cash_sales, expected_in_drawer, cash_in_drawer,
               difference, totals_by_method, notes, closed_by
        FROM cash_closings
        WHERE 1=1
        """
        params: dict[str, str] = {}
        if branch is not None:
            base_sql += " AND branch = :branch"
            params["branch"] = branch.value
        if before is not None:
            base_sql += " AND closing_date < :before"
            params["before"] = before.isoformat()
        base_sql += " ORDER BY closing_date, id"
        query = text(base_sql).columns(
            opening_balance=MONEY,
            total_income=MONEY,
            total_expense=MONEY,
            cash_sales=MONEY,
            expected_in_drawer=MONEY,
            cash_in_drawer=MONEY,
            difference=MONEY,
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(query, params).all()
        closings = []
        for row in rows:
            try:
                closings.append(self._closing_from_row(row))
            except (ValueError, TypeError) as exc:
                self._logger.warning(f"Skipping closing row {row.id}: {exc}")
        return closings

    def save_entries(self, entries: list[LedgerEntry]) -> int:
        """Insert all entries in one transaction.

        Args:
            entries: Entries to store.

        Returns:
            int: Number of entries inserted.
        """
        payload = [
            {
                "id": entry.id,
                "entry_date": self._date_text(entry.date),
                "description": entry.description,
                "amount": coerce_decimal(entry.amount),
                "kind": entry.kind.value,
                "category": entry.category,
                "branch": entry.branch.value,
                "payment_method": (
                    entry.payment_method.value
                    if entry.payment_method is not None
                    else None
                ),
            }
            for entry in entries
        ]
        if not payload:
            return 0
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            conn.execute(INSERT_ENTRY_SQL, payload)
        return len(payload)

    def save_closing(self, closing: CashClosing) -> None:
        """Insert one closing.

        Raises:
            sqlalchemy.exc.IntegrityError: If the date and branch already
                have a closing.
        """
        payload = {
            "id": closing.id,
            "closing_date": closing.date.isoformat(),
            "branch": closing.branch.value,
            "opening_balance": closing.opening_balance,
            "total_income": closing.total_income,
            "total_expense": closing.total_expense,
            "cash_sales": closing.cash_sales,
            "expected_in_drawer": closing.expected_in_drawer,
            "cash_in_drawer": closing.cash_in_drawer,
            "difference": closing.difference,
            "totals_by_method": json.dumps(
                {
                    method.value: str(amount)
                    for method, amount in closing.totals_by_method.items()
                },
                sort_keys=True,
            ),
            "notes": closing.notes,
            "closed_by": closing.closed_by,
        }
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            conn.execute(INSERT_CLOSING_SQL, payload)

    def _sale_from_row(self, row) -> Sale:
        splits = tuple(
            PaymentSplit(
                method=PaymentMethod(split["method"]),
                amount=coerce_decimal(split["amount"]),
            )
            for split in json.loads(row.payment_splits or "[]")
        )
        items = tuple(
            SaleItem(
                product_id=str(item["productId"]),
                quantity=coerce_decimal(item["quantity"]),
                unit_price=coerce_decimal(item.get("priceAtSale")),
                product_name=item.get("productName", ""),
            )
            for item in json.loads(row.items or "[]")
        )
        return Sale(
            id=row.id,
            date=row.sale_date,
            customer_name=row.customer_name or "",
            total=coerce_decimal(row.total),
            branch=Branch.parse(row.branch),
            status=SaleStatus(row.status),
            payment_method=PaymentMethod(row.payment_method),
            items=items,
            payment_splits=splits,
            cash_received=(
                coerce_decimal(row.cash_received)
                if row.cash_received is not None
                else None
            ),
            change_amount=(
                coerce_decimal(row.change_amount)
                if row.change_amount is not None
                else None
            ),
        )

    @staticmethod
    def _closing_from_row(row) -> CashClosing:
        try:
            closing_date = parse_calendar_date(row.closing_date)
        except InvalidInputError as exc:
            raise ValueError(str(exc)) from exc
        totals = {
            PaymentMethod(method): coerce_decimal(amount)
            for method, amount in json.loads(row.totals_by_method).items()
        }
        return CashClosing(
            id=row.id,
            date=closing_date,
            branch=Branch.parse(row.branch),
            opening_balance=coerce_decimal(row.opening_balance),
            total_income=coerce_decimal(row.total_income),
            total_expense=coerce_decimal(row.total_expense),
            totals_by_method=totals,
            cash_sales=coerce_decimal(row.cash_sales),
            expected_in_drawer=coerce_decimal(row.expected_in_drawer),
            cash_in_drawer=coerce_decimal(row.cash_in_drawer),
            difference=coerce_decimal(row.difference),
            notes=row.notes or "",
            closed_by=row.closed_by or "",
        )

    @staticmethod
    def _optional_method(value: str | None) -> PaymentMethod | None:
        if not value:
            return None
        return PaymentMethod(value)

    @staticmethod
    def _date_text(value) -> str:
        if isinstance(value, date):
            return value.isoformat()
        return str(value)

    @staticmethod
    def _build_params(
        branch: Branch | None,
        start_date: date | None,
        end_date: date | None,
    ) -> dict[str, str]:
        params: dict[str, str] = {}
        if branch is not None:
            params["branch"] = branch.value
        if start_date:
            params["start_date"] = start_date.isoformat()
        if end_date:
            params["end_date"] = end_date.isoformat()
        return params

    @staticmethod
    def _build_filtered_query(
        base_sql: str,
        *,
        date_column: str,
        branch: Branch | None,
        start_date: date | None,
        end_date: date | None,
    ):
        if branch is not None:
            base_sql += " AND branch = :branch"
        if start_date:
            base_sql += f" AND {date_column} >= :start_date"
        if end_date:
            base_sql += f" AND {date_column} <= :end_date"
        base_sql += f" ORDER BY {date_column}, id"
        return text(base_sql)


__all__ = [
    "SqlAlchemyLedgerRepository",
    "CREATE_TABLES_SQL",
    "INSERT_ENTRY_SQL",
    "INSERT_CLOSING_SQL",
    "SELECT_PRODUCTS_SQL",
]
