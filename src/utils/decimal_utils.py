"""Helpers for Decimal normalization."""

from decimal import Decimal, InvalidOperation

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL, JSON payloads or adapters.

    Returns:
        Decimal: Normalized numeric value.

    Raises:
        ValueError: If the value cannot be read as a finite number.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except InvalidOperation as exc:
            raise ValueError(f"Not a numeric value: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"Not a finite numeric value: {value!r}")
    return result


def sum_decimals(values) -> Decimal:
    """Sum values as Decimal, starting from zero."""
    return sum((coerce_decimal(value) for value in values), ZERO)


__all__ = ["ZERO", "HUNDRED", "coerce_decimal", "sum_decimals"]
