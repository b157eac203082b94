import logging
from typing import Any

LOGGER_NAME = "lazystream"
LOG_LEVEL = logging.INFO
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

CHUNK_SIZE_LIMIT = 512
DEFAULT_CHUNK_SIZE = CHUNK_SIZE_LIMIT

DEFAULT_IDENTITY = 0


class _NoDefault:
    __slots__ = ()

    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Any = _NoDefault()
