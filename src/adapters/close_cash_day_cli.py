"""CLI adapter to verify and close the cash drawer of one day."""

import os

from src.adapters.env_inputs import parse_env_date
from src.application.use_cases.close_cash_day import (
    CloseCashDayUseCase,
    VerifyCashDayUseCase,
)
from src.domain.errors import InvalidInputError
from src.domain.models import Branch
from src.domain.services.validation import validate_amount
from src.infrastructure.container import (
    build_ledger_repository,
    build_settings,
)
from src.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Print the day's cash verification, then store the closing."""
    logger = get_app_logger()
    settings = build_settings()

    closing_date = parse_env_date(os.getenv("CLOSING_DATE"), logger)
    if closing_date is None:
        closing_date = settings.today(logger)
    try:
        branch = Branch.parse(
            os.getenv("CLOSING_BRANCH", Branch.PRIMARY.value)
        )
    except ValueError as exc:
        logger.error(str(exc))
        return
    raw_counted = os.getenv("COUNTED_CASH")
    if not raw_counted:
        logger.warning("COUNTED_CASH is required to close the cash drawer.")
        return
    try:
        counted_cash = validate_amount(raw_counted.strip(), "counted cash")
    except InvalidInputError as exc:
        logger.error(str(exc))
        return

    repository = build_ledger_repository()
    verification = VerifyCashDayUseCase(repository, logger=logger).execute(
        closing_date,
        branch,
    )
    print(f"Cash verification for {branch.value} on {closing_date}")
    print(
        f"Received={verification.cash_received}, "
        f"change={verification.change_given}, "
        f"net={verification.net_cash}, "
        f"expenses={verification.day_expenses}, "
        f"sales={verification.completed_sale_count}"
    )
    for method, amount in sorted(
        verification.totals_by_method.items(),
        key=lambda item: item[0].value,
    ):
        print(f"  {method.value}: {amount}")

    closing = CloseCashDayUseCase(
        repository,
        repository,
        logger=logger,
    ).execute(
        closing_date,
        branch,
        counted_cash,
        closed_by=os.getenv("CLOSED_BY", ""),
        notes=os.getenv("CLOSING_NOTES", ""),
    )
    print(
        f"Closing {closing.id}: opening={closing.opening_balance}, "
        f"expected={closing.expected_in_drawer}, "
        f"counted={closing.cash_in_drawer}, "
        f"difference={closing.difference} ({closing.status.value})"
    )


if __name__ == "__main__":  # pragma: no cover
    main()
