import logging
from typing import Iterator, List

import pytest

from lazystream.util.loggertools import get_logger


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def logs() -> Iterator[List[logging.LogRecord]]:
    """Records logged on the `lazystream` logger during the test, DEBUG included."""
    logger = get_logger()
    handler = _ListHandler()
    level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield handler.records
    finally:
        logger.removeHandler(handler)
        logger.setLevel(level)
