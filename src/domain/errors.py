"""Domain errors raised by the ledger engine."""


class LedgerError(Exception):
    """Base class for ledger engine errors."""


class InvalidInputError(LedgerError, ValueError):
    """Raised when a call receives a malformed date, amount or count."""


__all__ = ["LedgerError", "InvalidInputError"]
