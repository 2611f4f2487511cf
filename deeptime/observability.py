"""Logging setup for deeptime.

Library modules only call get_logger(); handlers are installed by the
embedding application, or by configure_logging() in scripts and tests.
"""
import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ROOT_LOGGER = "deeptime"


def configure_logging(level: int = logging.INFO, stream=None) -> logging.Logger:
    """Configure the deeptime logger hierarchy. Safe to call repeatedly."""
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger(ROOT_LOGGER)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get logger for module"""
    return logging.getLogger(name)
