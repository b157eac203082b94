import logging
import time
from functools import lru_cache

from lazystream.util.constants import (
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    LOG_LEVEL,
    LOGGER_NAME,
)


def _utc_stream_handler() -> logging.Handler:
    formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)
    formatter.converter = time.gmtime
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    return handler


@lru_cache(maxsize=None)
def get_logger() -> logging.Logger:
    """
    Returns the `lazystream` logger, set up on first call: it does not propagate to the root logger
    and writes UTC timestamped records to stderr, at `LOG_LEVEL` unless a handler was already attached.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.propagate = False
    if not logger.handlers:
        logger.addHandler(_utc_stream_handler())
        logger.setLevel(LOG_LEVEL)
    return logger
