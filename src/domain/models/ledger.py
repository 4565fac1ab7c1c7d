"""Domain models for ledger entries, sales and products."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum


class Branch(str, Enum):
    """Physical business location."""

    PRIMARY = "Matriz"
    SECONDARY = "Filial"

    @classmethod
    def parse(cls, value: "str | Branch") -> "Branch":
        """Return the branch matching a member name or value.

        Args:
            value: Branch instance, name (``PRIMARY``) or value (``Matriz``).

        Returns:
            Branch: Matching branch.

        Raises:
            ValueError: If no branch matches.
        """
        if isinstance(value, cls):
            return value
        cleaned = str(value).strip().lower()
        for branch in cls:
            if cleaned in (branch.name.lower(), branch.value.lower()):
                return branch
        raise ValueError(f"Unknown branch: {value!r}")


class EntryKind(str, Enum):
    INCOME = "Income"
    EXPENSE = "Expense"


class SaleStatus(str, Enum):
    COMPLETED = "Completed"
    PENDING = "Pending"
    CANCELLED = "Cancelled"


class PaymentMethod(str, Enum):
    PIX = "Pix"
    CREDIT = "Credit"
    DEBIT = "Debit"
    CASH = "Cash"
    SPLIT = "Split"


class RecordSource(str, Enum):
    """Origin of a unified ledger record."""

    ENTRY = "entry"
    SALE = "sale"


@dataclass(frozen=True)
class LedgerEntry:
    """Manually recorded financial movement.

    Attributes:
        id: Unique entry identifier.
        date: Calendar day as ``date`` or ``YYYY-MM-DD`` text.
        description: Free-form description.
        amount: Non-negative amount; direction is carried by ``kind``.
        kind: Income or expense.
        category: Free-form category label.
        branch: Branch the movement belongs to.
        payment_method: Optional payment method.
    """

    id: str
    date: date | str
    description: str
    amount: Decimal
    kind: EntryKind
    category: str
    branch: Branch
    payment_method: PaymentMethod | None = None


@dataclass(frozen=True)
class PaymentSplit:
    """Partial payment of a sale through one method."""

    method: PaymentMethod
    amount: Decimal


@dataclass(frozen=True)
class SaleItem:
    """Line item of a sale with the unit price charged at checkout."""

    product_id: str
    quantity: Decimal
    unit_price: Decimal
    product_name: str = ""


@dataclass(frozen=True)
class Sale:
    """Revenue event created at checkout.

    Only completed sales count toward revenue, cost of goods sold and cash
    reconciliation. Pending sales count toward receivables only.
    """

    id: str
    date: date | str
    customer_name: str
    total: Decimal
    branch: Branch
    status: SaleStatus
    payment_method: PaymentMethod
    items: tuple[SaleItem, ...] = ()
    payment_splits: tuple[PaymentSplit, ...] = ()
    cash_received: Decimal | None = None
    change_amount: Decimal | None = None

    @property
    def is_split(self) -> bool:
        return bool(self.payment_splits)

    def payment_portions(self) -> list[PaymentSplit]:
        """Return the amount paid through each method.

        Returns:
            list[PaymentSplit]: Splits when split-paid, otherwise a single
            portion covering the whole total.
        """
        if self.payment_splits:
            return list(self.payment_splits)
        return [PaymentSplit(method=self.payment_method, amount=self.total)]


@dataclass(frozen=True)
class Product:
    """Cost reference for a product."""

    id: str
    name: str
    cost: Decimal
    price_primary: Decimal = Decimal("0")
    price_secondary: Decimal = Decimal("0")

    def price_for(self, branch: Branch) -> Decimal:
        """Return the current retail price at a branch."""
        if branch is Branch.SECONDARY:
            return self.price_secondary
        return self.price_primary


@dataclass(frozen=True)
class UnifiedRecord:
    """One row of the unified ledger view."""

    id: str
    date: date
    description: str
    amount: Decimal
    kind: EntryKind
    category: str
    branch: Branch
    payment_method: PaymentMethod | None
    source: RecordSource
    source_id: str = field(default="")


__all__ = [
    "Branch",
    "EntryKind",
    "SaleStatus",
    "PaymentMethod",
    "RecordSource",
    "LedgerEntry",
    "PaymentSplit",
    "SaleItem",
    "Sale",
    "Product",
    "UnifiedRecord",
]
