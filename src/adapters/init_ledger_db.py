"""Simple CLI to validate the ledger database and create its tables.

This adapter is meant for local operations: it instantiates the concrete
database adapter from the infrastructure layer, runs a basic health check
and prepares the ledger schema.
"""

from src.infrastructure.container import (
    build_database_adapter,
    build_ledger_repository,
)
from src.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Check the ledger connection and create missing tables."""
    adapter = build_database_adapter()
    logger = get_app_logger()

    engine = adapter.get_ledger_engine()
    logger.info(f"Ledger DB: {engine.url}")

    with engine.connect() as conn:
        conn.exec_driver_sql("SELECT 1")

    build_ledger_repository(adapter).prepare_schema()
    logger.info("Ledger connection is working and the schema is ready.")


if __name__ == "__main__":  # pragma: no cover
    main()
