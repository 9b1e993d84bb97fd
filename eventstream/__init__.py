"""
EventStream - Server-Sent Events framing for Python web responses
"""

__version__ = "1.0.0"
__author__ = "EventStream Team"

from .sse.stream import EventStream
from .sse.framing import FramingPolicy
from .sse.encoders import JSONEncoder, StringEncoder
from .sse.sink import MemorySink, QueueSink

__all__ = [
    "EventStream",
    "FramingPolicy",
    "JSONEncoder",
    "StringEncoder",
    "MemorySink",
    "QueueSink"
]
