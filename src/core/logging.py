"""
Logging Configuration

Centralized logging setup for the API process and scripts.
"""

import logging
import sys

from src.core.config import settings

APP_LOGGER = "src"

# Third-party loggers that are too chatty at INFO.
NOISY_LOGGERS = ("httpx", "sqlalchemy.engine", "uvicorn.access")


def setup_logging(level: str | None = None) -> None:
    """
    Configure application logging.

    Sets up:
    - A stdout handler with timestamped records on the root logger
    - The application level (``LOG_LEVEL`` unless ``level`` is given) on the
      ``src`` package logger, so chunk drop diagnostics can be enabled
      without turning on DEBUG for every library
    - WARNING for NOISY_LOGGERS

    Args:
        level: Level name overriding settings.LOG_LEVEL.
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger(APP_LOGGER).setLevel(log_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
