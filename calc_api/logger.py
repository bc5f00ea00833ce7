# calc_api/logger.py
import logging
import sys

from .config import settings

PACKAGE_LOGGER = "calc_api"

def configure_logging(level: str = settings.LOG_LEVEL) -> logging.Logger:
    """
    Sends the package's log records to stdout. Safe to call more than once;
    only the level is updated on later calls.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(handler)
    return logger
