from .encoders import Encoder, FunctionEncoder, JSONEncoder, StringEncoder
from .errors import (
    EventStreamError,
    InvalidRetryValue,
    SinkClosedError,
    SinkError,
    StreamStateError,
)
from .framing import FramingPolicy, frame
from .sink import MemorySink, QueueSink, Sink
from .stream import CONTENT_TYPE, EventStream, parse_retry

__all__ = [
    "CONTENT_TYPE",
    "Encoder",
    "EventStream",
    "EventStreamError",
    "FramingPolicy",
    "FunctionEncoder",
    "InvalidRetryValue",
    "JSONEncoder",
    "MemorySink",
    "QueueSink",
    "Sink",
    "SinkClosedError",
    "SinkError",
    "StreamStateError",
    "StringEncoder",
    "frame",
    "parse_retry",
]
