"""Ports for reading and writing ledger data."""

from datetime import date
from typing import Protocol

from src.domain.models import (
    Branch,
    CashClosing,
    LedgerEntry,
    Product,
    Sale,
)


class LedgerReadPort(Protocol):
    """Port exposing read access to ledger entries, sales and closings.

    Date bounds are inclusive and optional; a ``None`` branch reads every
    branch. Implementations may return more rows than requested, the domain
    services apply the exact filters.
    """

    def fetch_entries(
        self,
        branch: Branch | None,
        start_date: date | None,
        end_date: date | None,
    ) -> list[LedgerEntry]:
        """Return ledger entries."""

    def fetch_sales(
        self,
        branch: Branch | None,
        start_date: date | None,
        end_date: date | None,
    ) -> list[Sale]:
        """Return sales of every status."""

    def fetch_products(self) -> list[Product]:
        """Return product cost references."""

    def fetch_closings(
        self,
        branch: Branch | None,
        before: date | None,
    ) -> list[CashClosing]:
        """Return cash closings dated strictly before ``before``."""


class LedgerWritePort(Protocol):
    """Port exposing write access for generated entries and closings."""

    def prepare_schema(self) -> None:
        """Ensure the ledger tables exist."""

    def save_entries(self, entries: list[LedgerEntry]) -> int:
        """Persist a batch of entries atomically and return the count."""

    def save_closing(self, closing: CashClosing) -> None:
        """Persist one cash closing."""


__all__ = ["LedgerReadPort", "LedgerWritePort"]
