"""Application ports package."""

from .database import DatabaseEnginePort
from .ledger_repository import LedgerReadPort, LedgerWritePort

__all__ = [
    "DatabaseEnginePort",
    "LedgerReadPort",
    "LedgerWritePort",
]
