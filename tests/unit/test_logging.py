"""
Unit tests for logging setup.
"""

import logging

from src.core.logging import APP_LOGGER, NOISY_LOGGERS, setup_logging


def test_setup_logging_sets_app_level() -> None:
    """The application logger follows the requested level."""
    setup_logging("DEBUG")
    assert logging.getLogger(APP_LOGGER).level == logging.DEBUG

    setup_logging("warning")
    assert logging.getLogger(APP_LOGGER).level == logging.WARNING


def test_setup_logging_unknown_level_falls_back_to_info() -> None:
    """An unrecognized level name means INFO."""
    setup_logging("verbose")
    assert logging.getLogger(APP_LOGGER).level == logging.INFO


def test_setup_logging_quiets_libraries() -> None:
    """Chatty third-party loggers are raised to WARNING."""
    setup_logging()
    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING
