"""Logging setup shared by the API and the maintenance scripts."""
import logging
from logging.handlers import RotatingFileHandler

import config

APP_LOGGER = "blog_api"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level: str = config.LOG_LEVEL,
                  log_file: str | None = config.LOG_FILE,
                  force: bool = False) -> logging.Logger:
    """Attach console and rotating file handlers to the application logger.

    Calling it again is a no-op unless ``force`` is set, in which case the
    existing handlers are closed and replaced.
    """
    logger = logging.getLogger(APP_LOGGER)
    if logger.handlers and not force:
        return logger

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = RotatingFileHandler(log_file, maxBytes=2000000, backupCount=3, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the application logger, configuring it on first use"""
    setup_logging()
    return logging.getLogger(f"{APP_LOGGER}.{name}")
