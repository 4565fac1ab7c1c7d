"""Tests for infrastructure settings."""

from unittest.mock import MagicMock
from zoneinfo import ZoneInfo

from src.infrastructure import settings as settings_module
from src.infrastructure.settings import LedgerSettings


def _no_dotenv(monkeypatch) -> None:
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)


def test_from_env_uses_defaults(monkeypatch) -> None:
    """Missing variables should fall back to the built-in defaults."""
    _no_dotenv(monkeypatch)
    for name in (
        "LEDGER_TIMEZONE",
        "LEDGER_SALES_CATEGORY",
        "LEDGER_DEFAULT_EXPENSE_CATEGORY",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = LedgerSettings.from_env()

    assert settings == LedgerSettings(
        timezone="America/Bahia",
        sales_category="Vendas",
        default_expense_category="Outros",
    )


def test_from_env_reads_overrides(monkeypatch) -> None:
    _no_dotenv(monkeypatch)
    monkeypatch.setenv("LEDGER_TIMEZONE", " UTC ")
    monkeypatch.setenv("LEDGER_SALES_CATEGORY", "Sales")
    monkeypatch.setenv("LEDGER_DEFAULT_EXPENSE_CATEGORY", "   ")

    settings = LedgerSettings.from_env()

    assert settings.timezone == "UTC"
    assert settings.sales_category == "Sales"
    assert settings.default_expense_category == "Outros"


def test_zone_falls_back_to_utc_for_unknown_timezone() -> None:
    logger = MagicMock()
    settings = LedgerSettings(timezone="Mars/Olympus_Mons")

    assert settings.zone(logger) == ZoneInfo("UTC")
    logger.warning.assert_called_once()


def test_today_returns_calendar_date() -> None:
    settings = LedgerSettings(timezone="UTC")

    assert settings.today(MagicMock()).year >= 2024
