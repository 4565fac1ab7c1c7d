"""Calendar date helpers for the ledger engine."""

from datetime import date, datetime, timedelta
import re

from src.domain.errors import InvalidInputError


_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_calendar_date(value) -> date:
    """Parse a calendar date without any time-of-day component.

    Accepts ``date`` values and strict ``YYYY-MM-DD`` strings. A ``datetime``
    is reduced to its calendar day; callers normalize timezones beforehand.

    Args:
        value: Raw date value.

    Returns:
        date: Parsed calendar date.

    Raises:
        InvalidInputError: If the value is not a valid calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        cleaned = value.strip()
        if _ISO_DATE.match(cleaned):
            try:
                return date.fromisoformat(cleaned)
            except ValueError as exc:
                raise InvalidInputError(
                    f"Invalid calendar date: {value!r}"
                ) from exc
    raise InvalidInputError(
        f"Invalid calendar date {value!r}. Expected format YYYY-MM-DD."
    )


def add_months(start: date, months: int) -> date:
    """Add calendar months, letting a missing day overflow forward.

    The day of month is kept; when the target month is shorter the surplus
    days roll into the following month (Jan 31 + 1 month is Mar 2 or Mar 3).

    Args:
        start: Starting date.
        months: Number of months to add (may be negative).

    Returns:
        date: Resulting calendar date.
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    return date(year, month, 1) + timedelta(days=start.day - 1)


__all__ = ["parse_calendar_date", "add_months"]
