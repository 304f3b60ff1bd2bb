"""
Logging configuration for the storefront backend.

Usage:
    from storefront.logging_config import setup_logging
    setup_logging()  # Call once at application startup

Environment variables:
    LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL (default: INFO)
    LOG_SQL: "true" to log SQL statements from SQLAlchemy (default: false)

Pricing breakdowns (per-order subtotal, tax, shipping, total) are logged at
DEBUG by storefront.pricing.engine; INFO carries one line per priced cart or
stored order and never customer contact details.
"""
import logging
import os
import sys
from typing import Optional

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Kept at WARNING unless the app itself runs at DEBUG
NOISY_LOGGERS = ("httpx", "uvicorn.access", "sqlalchemy.engine", "alembic.runtime.migration")


def resolve_level(level: Optional[str] = None) -> int:
    """Numeric level for a level name, falling back to LOG_LEVEL, then INFO."""
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    level = level.strip().upper()
    if level not in VALID_LEVELS:
        level = "INFO"
    return getattr(logging, level)


def setup_logging(level: str = None, log_sql: Optional[bool] = None) -> int:
    """
    Configure logging for the application.

    Args:
        level: Log level string. If not provided, reads LOG_LEVEL.
        log_sql: Log SQLAlchemy statements at INFO. If not provided, reads LOG_SQL.

    Returns:
        The numeric level applied to the "storefront" logger.
    """
    numeric_level = resolve_level(level)
    if log_sql is None:
        log_sql = os.getenv("LOG_SQL", "false").lower() == "true"

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
    logging.getLogger("storefront").setLevel(numeric_level)

    if numeric_level > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    if log_sql:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    logging.getLogger(__name__).debug(
        "Logging configured at %s level (sql=%s)", logging.getLevelName(numeric_level), log_sql
    )
    return numeric_level
