"""CLI adapter to record an expense, optionally repeated monthly."""

import os

from src.adapters.env_inputs import parse_env_date
from src.application.use_cases.add_recurring_expense import (
    AddRecurringExpenseUseCase,
)
from src.domain.errors import InvalidInputError
from src.domain.models import Branch
from src.infrastructure.container import (
    build_ledger_repository,
    build_settings,
)
from src.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Expand and store the expense described by environment variables."""
    logger = get_app_logger()
    settings = build_settings()

    description = os.getenv("EXPENSE_DESCRIPTION", "").strip()
    raw_amount = os.getenv("EXPENSE_AMOUNT", "").strip()
    if not description or not raw_amount:
        logger.warning(
            "EXPENSE_DESCRIPTION and EXPENSE_AMOUNT are required to record "
            "an expense."
        )
        return
    start_date = parse_env_date(os.getenv("EXPENSE_DATE"), logger)
    if start_date is None:
        start_date = settings.today(logger)
    raw_installments = os.getenv("EXPENSE_INSTALLMENTS", "1").strip()
    try:
        installments = int(raw_installments)
        branch = Branch.parse(
            os.getenv("EXPENSE_BRANCH", Branch.PRIMARY.value)
        )
    except ValueError as exc:
        logger.error(f"Invalid expense input: {exc}")
        return

    use_case = AddRecurringExpenseUseCase(
        build_ledger_repository(),
        logger=logger,
        default_category=settings.default_expense_category,
    )
    try:
        entries = use_case.execute(
            description,
            raw_amount,
            start_date,
            installments=installments,
            category=os.getenv("EXPENSE_CATEGORY"),
            branch=branch,
        )
    except InvalidInputError as exc:
        logger.error(str(exc))
        return

    print(f"Recorded {len(entries)} expense entries for {branch.value}:")
    for entry in entries:
        print(
            f"  {entry.date} {entry.description} "
            f"[{entry.category}] {entry.amount}"
        )


if __name__ == "__main__":  # pragma: no cover
    main()
