from lazystream.collectors import (
    ArrayCollector,
    Collector,
    JsonCollector,
    ReduceCollector,
    StreamCollector,
)
from lazystream.forward_list import ForwardList, Node
from lazystream.pipeline import FilterStage, MapStage, Operator, StreamInput
from lazystream.stream import BaseStream, Stream, StreamStream
from lazystream.util.comparetools import CompareValue, ValueResolver
from lazystream.util.errors import (
    ChunkSizeExceededError,
    InvalidRangeError,
    StreamError,
    UnsafeStreamError,
    ValueNotFoundError,
)

__all__ = [
    "Stream",
    "StreamStream",
    "BaseStream",
    "StreamInput",
    "Operator",
    "MapStage",
    "FilterStage",
    "Collector",
    "ArrayCollector",
    "ReduceCollector",
    "JsonCollector",
    "StreamCollector",
    "ForwardList",
    "Node",
    "CompareValue",
    "ValueResolver",
    "StreamError",
    "UnsafeStreamError",
    "InvalidRangeError",
    "ValueNotFoundError",
    "ChunkSizeExceededError",
]

__version__ = "0.1.0"
