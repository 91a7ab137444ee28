"""
Logging configuration.

Every module logs through ``logging.getLogger(__name__)``, so all
records end up under the ``account_service`` logger configured here.
"""

import logging

from account_service.config import get_settings

LOGGER_NAME = "account_service"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> logging.Logger:
    """
    Configure the application logger.

    Safe to call more than once: existing handlers are replaced
    rather than stacked, so records are never emitted twice.
    """
    logger = logging.getLogger(LOGGER_NAME)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    logger.setLevel(getattr(logging, level or get_settings().LOG_LEVEL, logging.INFO))

    return logger
