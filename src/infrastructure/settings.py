"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
from datetime import date, datetime
import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import dotenv

from src.domain.constants import DEFAULT_EXPENSE_CATEGORY, SALES_CATEGORY
from src.infrastructure.logging.logger import get_app_logger


DEFAULT_TIMEZONE = "America/Bahia"


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for the ledger engine callers.

    Attributes:
        timezone: Reference timezone used to derive calendar dates.
        sales_category: Category reserved for sale-derived income.
        default_expense_category: Category used when none is given.
    """

    timezone: str = DEFAULT_TIMEZONE
    sales_category: str = SALES_CATEGORY
    default_expense_category: str = DEFAULT_EXPENSE_CATEGORY

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        timezone = os.getenv("LEDGER_TIMEZONE", DEFAULT_TIMEZONE).strip()
        sales_category = os.getenv(
            "LEDGER_SALES_CATEGORY", SALES_CATEGORY
        ).strip()
        default_category = os.getenv(
            "LEDGER_DEFAULT_EXPENSE_CATEGORY", DEFAULT_EXPENSE_CATEGORY
        ).strip()
        return cls(
            timezone=timezone or DEFAULT_TIMEZONE,
            sales_category=sales_category or SALES_CATEGORY,
            default_expense_category=(
                default_category or DEFAULT_EXPENSE_CATEGORY
            ),
        )

    def zone(self, logger=None) -> ZoneInfo:
        """Return the reference timezone, falling back to UTC.

        Args:
            logger: Optional logger used for warnings.

        Returns:
            ZoneInfo: Reference timezone.
        """
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            (logger or get_app_logger()).warning(
                f"Unknown timezone '{self.timezone}'. Falling back to UTC."
            )
            return ZoneInfo("UTC")

    def today(self, logger=None) -> date:
        """Return the current calendar date in the reference timezone."""
        return datetime.now(self.zone(logger)).date()


__all__ = ["LedgerSettings", "DEFAULT_TIMEZONE"]
