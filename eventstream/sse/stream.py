"""Server-Sent Events stream bound to one client connection."""

from __future__ import annotations

import logging
import math
import re
import threading
from typing import Any, Callable, Mapping

from .encoders import STRING, Encoder, StringEncoder, as_encoder
from .errors import InvalidRetryValue, StreamStateError
from .framing import COMMENT_FIELD, DATA_FIELD, FramingPolicy, frame
from .sink import Sink

logger = logging.getLogger(__name__)

CONTENT_TYPE = "text/event-stream; charset=utf-8"
LAST_EVENT_ID_HEADER = "last-event-id"
KEEP_ALIVE_COMMENT = "Keep-Alive"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_retry(value: Any) -> int:
    """Parse a retry interval the lenient way browsers' parseInt does.

    Accepts ints, finite floats (truncated) and strings with a leading
    integer ("3000", " 42ms"). Anything else raises InvalidRetryValue.
    """
    if isinstance(value, bool):
        raise InvalidRetryValue(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidRetryValue(value)
        return int(value)
    if isinstance(value, (str, bytes)):
        text = value.decode() if isinstance(value, bytes) else value
        match = _LEADING_INT.match(text)
        if match:
            return int(match.group(1))
    raise InvalidRetryValue(value)


def _header(headers: Mapping[str, str] | None, name: str) -> str | None:
    if not headers:
        return None
    value = headers.get(name)
    if value is None:
        for key, candidate in headers.items():
            if key.lower() == name:
                value = candidate
                break
    return value


class EventStream:
    """Frames SSE messages onto a sink and tracks connection state.

    Usage::

        stream = EventStream(request.headers, sink)
        stream.init()
        stream.send_message("hello", event="update", id=1)
        stream.close()

    Callers must check ``is_open()`` before sending; writes after the
    connection closed are left to the sink to reject.
    """

    def __init__(
        self,
        headers: Mapping[str, str] | None,
        sink: Sink,
        encoder: Encoder | Callable[[Any], str] | None = None,
        policy: FramingPolicy | str = FramingPolicy.LINE_REFRAMING,
    ) -> None:
        self._headers = headers
        self._sink = sink
        self.encoder: Encoder = as_encoder(encoder) or StringEncoder()
        self.policy = FramingPolicy.from_name(policy)
        self._last_event_id: str | None = None
        self._initialized = False
        self._open = True
        self._state_lock = threading.Lock()
        sink.on_close(self._mark_closed)

    def __repr__(self) -> str:
        state = "open" if self._open else "closed"
        return f"<EventStream {state} policy={self.policy.value} last_event_id={self._last_event_id!r}>"

    def __enter__(self) -> "EventStream":
        self.init()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -- lifecycle -------------------------------------------------------

    @property
    def last_event_id(self) -> str | None:
        return self._last_event_id

    @property
    def initialized(self) -> bool:
        return self._initialized

    def init(self) -> None:
        """Capture Last-Event-ID and send the event-stream response headers."""
        if self._initialized:
            raise StreamStateError("stream already initialized")
        self._last_event_id = _header(self._headers, LAST_EVENT_ID_HEADER) or None
        self._sink.write_headers(200, {"Content-Type": CONTENT_TYPE})
        self._initialized = True
        logger.debug(f"SSE stream initialized (last_event_id={self._last_event_id!r})")

    def is_open(self) -> bool:
        return self._open

    def close(self) -> None:
        """Mark the stream closed and end the response body."""
        self._mark_closed()
        self._sink.end()

    def _mark_closed(self) -> None:
        with self._state_lock:
            if not self._open:
                return
            self._open = False
        logger.debug("SSE stream closed")

    # -- sending ---------------------------------------------------------

    def send(self, field: str | None = DATA_FIELD, value: Any = None, encoder=None) -> None:
        """Encode value and write it as one message for the given field."""
        if field is None:
            field = DATA_FIELD
        active = as_encoder(encoder) or self.encoder
        text = active.encode(value)
        if field == DATA_FIELD and self.policy is FramingPolicy.EMBEDDED_CONTINUATION:
            text += "\n"
        for chunk in frame(field, text, self.policy):
            self._sink.write(chunk)

    def send_comment(self, text: Any) -> None:
        self.send(COMMENT_FIELD, text, STRING)

    def send_event(self, name: Any) -> None:
        self.send("event", name, STRING)

    def send_data(self, payload: Any) -> None:
        """Send a data message using the stream's encoder.

        Under EMBEDDED_CONTINUATION the encoded payload gets one extra
        trailing newline, so every data write carries a continuation line.
        """
        self.send(DATA_FIELD, payload)

    def send_id(self, event_id: Any) -> None:
        self.send("id", event_id, STRING)
        self._last_event_id = STRING.encode(event_id)

    def send_retry(self, millis: Any) -> None:
        """Tell the client how long to wait before reconnecting."""
        self.send("retry", parse_retry(millis), STRING)

    def send_message(
        self,
        data: Any = None,
        *,
        event: Any = None,
        id: Any = None,
        retry: Any = None,
    ) -> None:
        """Send event, id and retry (when set) followed by data.

        Data always goes last since it terminates the message. Pass a dict
        of options as ``stream.send_message(**opts)``.
        """
        if event:
            self.send_event(event)
        if id:
            self.send_id(id)
        if retry:
            self.send_retry(retry)
        self.send_data(data)

    def keep_alive(self) -> None:
        self.send_comment(KEEP_ALIVE_COMMENT)
