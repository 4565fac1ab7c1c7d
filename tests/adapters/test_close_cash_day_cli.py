"""Tests for the close_cash_day_cli adapter."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from src.adapters import close_cash_day_cli
from src.domain.models import Branch, CashClosing
from src.infrastructure.settings import LedgerSettings
from tests.builders import make_entry, make_sale


class _Logger:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def warning(self, msg: str) -> None:
        self.messages.append(msg)

    def error(self, msg: str) -> None:
        self.messages.append(msg)

    def info(self, msg: str) -> None:
        self.messages.append(msg)


def _prior_closing() -> CashClosing:
    return CashClosing(
        id="c1",
        date=date(2024, 3, 1),
        branch=Branch.PRIMARY,
        opening_balance=Decimal("0"),
        total_income=Decimal("0"),
        total_expense=Decimal("0"),
        totals_by_method={},
        cash_sales=Decimal("0"),
        expected_in_drawer=Decimal("50"),
        cash_in_drawer=Decimal("50"),
        difference=Decimal("0"),
    )


def _install(monkeypatch, repository, logger) -> None:
    monkeypatch.setattr(close_cash_day_cli, "get_app_logger", lambda: logger)
    monkeypatch.setattr(
        close_cash_day_cli,
        "build_settings",
        lambda: LedgerSettings(timezone="UTC"),
    )
    monkeypatch.setattr(
        close_cash_day_cli,
        "build_ledger_repository",
        lambda: repository,
    )


def test_main_prints_verification_and_closing(monkeypatch, capsys) -> None:
    repository = MagicMock()
    repository.fetch_sales.return_value = [
        make_sale(
            "a",
            "2024-03-10",
            "100",
            cash_received=Decimal("120"),
            change_amount=Decimal("20"),
        )
    ]
    repository.fetch_entries.return_value = [make_entry("b", "2024-03-10", "10")]
    repository.fetch_closings.return_value = [_prior_closing()]
    logger = _Logger()
    _install(monkeypatch, repository, logger)
    audit_logger = MagicMock()
    monkeypatch.setattr(
        "src.application.use_cases.close_cash_day.get_audit_logger",
        lambda: audit_logger,
    )
    monkeypatch.setenv("CLOSING_DATE", "2024-03-10")
    monkeypatch.setenv("CLOSING_BRANCH", "matriz")
    monkeypatch.setenv("COUNTED_CASH", "135")
    monkeypatch.setenv("CLOSED_BY", "Ana")
    monkeypatch.delenv("CLOSING_NOTES", raising=False)

    close_cash_day_cli.main()

    out = capsys.readouterr().out
    assert "Cash verification for Matriz on 2024-03-10" in out
    assert "Received=120, change=20, net=100, expenses=10, sales=1" in out
    assert "  Cash: 100" in out
    assert "opening=50, expected=140, counted=135, difference=-5 (shortage)" in out
    saved = repository.save_closing.call_args[0][0]
    assert saved.closed_by == "Ana"
    assert saved.cash_in_drawer == Decimal("135")


def test_main_aborts_without_counted_cash(monkeypatch, capsys) -> None:
    repository = MagicMock()
    logger = _Logger()
    _install(monkeypatch, repository, logger)
    monkeypatch.setenv("CLOSING_DATE", "2024-03-10")
    monkeypatch.delenv("COUNTED_CASH", raising=False)

    close_cash_day_cli.main()

    assert capsys.readouterr().out == ""
    assert any("COUNTED_CASH" in msg for msg in logger.messages)
    repository.save_closing.assert_not_called()


def test_main_aborts_on_invalid_counted_cash_or_branch(monkeypatch) -> None:
    repository = MagicMock()
    logger = _Logger()
    _install(monkeypatch, repository, logger)
    monkeypatch.setenv("CLOSING_DATE", "2024-03-10")
    monkeypatch.delenv("CLOSING_BRANCH", raising=False)
    monkeypatch.setenv("COUNTED_CASH", "-10")

    close_cash_day_cli.main()

    monkeypatch.setenv("COUNTED_CASH", "10")
    monkeypatch.setenv("CLOSING_BRANCH", "Centro")

    close_cash_day_cli.main()

    assert any("Negative counted cash" in msg for msg in logger.messages)
    assert any("Unknown branch" in msg for msg in logger.messages)
    repository.fetch_sales.assert_not_called()
    repository.save_closing.assert_not_called()


def test_main_uses_today_for_compact_closing_date(monkeypatch, capsys) -> None:
    repository = MagicMock()
    repository.fetch_sales.return_value = []
    repository.fetch_entries.return_value = []
    repository.fetch_closings.return_value = []
    logger = _Logger()
    _install(monkeypatch, repository, logger)
    monkeypatch.setattr(
        "src.application.use_cases.close_cash_day.get_audit_logger",
        lambda: MagicMock(),
    )
    monkeypatch.setattr(
        LedgerSettings,
        "today",
        lambda self, logger=None: date(2024, 3, 20),
    )
    monkeypatch.setenv("CLOSING_DATE", "20240310")
    monkeypatch.delenv("CLOSING_BRANCH", raising=False)
    monkeypatch.setenv("COUNTED_CASH", "0")

    close_cash_day_cli.main()

    out = capsys.readouterr().out
    assert "Cash verification for Matriz on 2024-03-20" in out
    assert any("Invalid date '20240310'" in msg for msg in logger.messages)
    saved = repository.save_closing.call_args[0][0]
    assert saved.date == date(2024, 3, 20)
