# burnnote/utils/logger.py

import logging

from burnnote.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def setup_logger(level: str = LOG_LEVEL) -> logging.Logger:
    """Attach a stream handler to the package logger (once)."""
    logger = logging.getLogger("burnnote")
    logger.setLevel(level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
