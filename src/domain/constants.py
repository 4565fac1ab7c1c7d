"""Domain constants for the ledger engine."""

# Income entries in this category predate sale-derived income and must never
# be counted next to the sales they duplicate.
SALES_CATEGORY = "Vendas"

DEFAULT_EXPENSE_CATEGORY = "Outros"

SALE_RECORD_PREFIX = "sale"

WEEKDAY_NAMES = (
    "Domingo",
    "Segunda",
    "Terça",
    "Quarta",
    "Quinta",
    "Sexta",
    "Sábado",
)


__all__ = [
    "SALES_CATEGORY",
    "DEFAULT_EXPENSE_CATEGORY",
    "SALE_RECORD_PREFIX",
    "WEEKDAY_NAMES",
]
