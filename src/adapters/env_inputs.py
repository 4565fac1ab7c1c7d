"""Helpers shared by the CLI adapters to read environment inputs."""

from datetime import date

from src.domain.errors import InvalidInputError
from src.domain.services.dates import parse_calendar_date


def parse_env_date(value: str | None, logger) -> date | None:
    """Parse a YYYY-MM-DD environment value into a date.

    Uses the same strict parsing as the domain, so compact ISO forms such
    as ``20240310`` are rejected.

    Args:
        value: Raw environment value.
        logger: Logger used for warnings.

    Returns:
        date | None: Parsed date, or None when missing or invalid.
    """
    if not value or not value.strip():
        return None
    try:
        return parse_calendar_date(value)
    except InvalidInputError:
        logger.warning(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        )
        return None


__all__ = ["parse_env_date"]
