"""Response sinks: the byte channel an EventStream writes into."""

from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, Iterator, Protocol

from .errors import SinkClosedError, SinkError

logger = logging.getLogger(__name__)

CloseCallback = Callable[[], None]


class Sink(Protocol):
    """Minimal response contract consumed by EventStream."""

    def write_headers(self, status: int, headers: dict[str, str]) -> None: ...

    def write(self, chunk: str) -> None: ...

    def end(self) -> None: ...

    def on_close(self, callback: CloseCallback) -> None: ...


class _CallbackSink:
    """Shared header, end and close-notification bookkeeping."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._callbacks: list[CloseCallback] = []
        self._closed = False
        self.status: int | None = None
        self.headers: dict[str, str] = {}
        self.ended = False

    def write_headers(self, status: int, headers: dict[str, str]) -> None:
        if self.status is not None:
            raise SinkError("response headers already sent")
        self.status = status
        self.headers = dict(headers)

    @property
    def headers_sent(self) -> bool:
        return self.status is not None

    def on_close(self, callback: CloseCallback) -> None:
        with self._lock:
            self._callbacks.append(callback)

    def _fire_close(self) -> None:
        """Run close callbacks once; later calls are no-ops."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            callbacks = list(self._callbacks)
        for callback in callbacks:
            callback()

    def _check_writable(self) -> None:
        if self.ended:
            raise SinkClosedError("response body already ended")


class MemorySink(_CallbackSink):
    """Collects chunks in memory. Handy for tests and offline framing."""

    def __init__(self) -> None:
        super().__init__()
        self.chunks: list[str] = []

    def write(self, chunk: str) -> None:
        self._check_writable()
        self.chunks.append(chunk)

    def end(self) -> None:
        if self.ended:
            return
        self.ended = True
        self._fire_close()

    def simulate_disconnect(self) -> None:
        """Behave as if the peer dropped the connection."""
        self._fire_close()

    @property
    def output(self) -> str:
        return "".join(self.chunks)


_END = object()


class QueueSink(_CallbackSink):
    """Thread-safe sink feeding a streaming HTTP response.

    A producer writes chunks from any thread; ``iter_chunks()`` is the
    generator handed to the web framework. When that generator finishes
    or is closed by the server (client went away), the close callbacks run.
    """

    def __init__(self, maxsize: int = 256, write_timeout: float | None = 5.0, poll_interval: float = 0.5) -> None:
        super().__init__()
        self._queue: queue.Queue = queue.Queue(maxsize=maxsize)
        self.write_timeout = write_timeout
        self.poll_interval = poll_interval

    def write(self, chunk: str) -> None:
        self._check_writable()
        if self._closed:
            raise SinkClosedError("client disconnected")
        try:
            self._queue.put(chunk, timeout=self.write_timeout)
        except queue.Full:
            raise SinkError(f"sink queue full ({self._queue.maxsize} chunks pending)") from None

    def end(self) -> None:
        with self._lock:
            if self.ended:
                return
            self.ended = True
        try:
            self._queue.put_nowait(_END)
        except queue.Full:
            # iter_chunks stops on the ended flag once the queue drains
            pass

    def iter_chunks(self) -> Iterator[str]:
        try:
            while True:
                try:
                    chunk = self._queue.get(timeout=self.poll_interval)
                except queue.Empty:
                    if self.ended:
                        break
                    continue
                if chunk is _END:
                    break
                yield chunk
        finally:
            logger.debug("SSE response generator finished")
            self._fire_close()

    @property
    def pending(self) -> int:
        return self._queue.qsize()
