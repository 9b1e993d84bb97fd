"""SSE blueprint: demo event feed over a queue-backed sink."""

import logging
import threading
import time
from datetime import datetime, timezone

from flask import Blueprint, Response, request

from ..config import config
from ..sse.encoders import JSONEncoder
from ..sse.errors import SinkError
from ..sse.sink import QueueSink
from ..sse.stream import EventStream
from .helpers import validate_query
from .validators import StreamParams

logger = logging.getLogger(__name__)

sse_bp = Blueprint("sse", __name__)


def resume_after(last_event_id):
    """First sequence number to send given the client's Last-Event-ID."""
    if last_event_id and last_event_id.isascii() and last_event_id.isdigit():
        return int(last_event_id) + 1
    return 1


def _wait(stream, seconds):
    """Sleep between events, pinging the client every keep-alive period."""
    remaining = seconds
    while remaining > 0 and stream.is_open():
        step = min(remaining, config.KEEPALIVE_INTERVAL)
        time.sleep(step)
        remaining -= step
        if remaining > 0 and stream.is_open():
            stream.keep_alive()


def produce_ticks(stream, params, start, interval):
    """Write params.count events to the stream, then close it."""
    try:
        for seq in range(start, start + params.count):
            if not stream.is_open():
                logger.debug(f"SSE client went away before event {seq}")
                return
            stream.send_message(
                {"seq": seq, "time": datetime.now(timezone.utc).isoformat()},
                event=params.event,
                id=seq,
                retry=params.retry if seq == start else None,
            )
            if seq < start + params.count - 1:
                _wait(stream, interval)
    except SinkError as e:
        logger.debug(f"SSE producer stopped: {e}")
    finally:
        if stream.is_open():
            stream.close()


@sse_bp.route("/api/events")
def api_events() -> Response:
    """SSE stream endpoint. Resumes numbering after Last-Event-ID."""
    params, error = validate_query(StreamParams)
    if error:
        return error

    interval = params.interval if params.interval is not None else config.DEFAULT_INTERVAL
    sink = QueueSink(maxsize=config.SINK_QUEUE_SIZE, write_timeout=config.SINK_WRITE_TIMEOUT)
    stream = EventStream(request.headers, sink, encoder=JSONEncoder(), policy=config.framing_policy())
    stream.init()

    start = resume_after(stream.last_event_id)
    logger.debug(f"SSE feed starting at {start} ({params.count} events)")
    threading.Thread(
        target=produce_ticks,
        args=(stream, params, start, interval),
        name=f"sse-feed-{start}",
        daemon=True,
    ).start()

    return Response(
        sink.iter_chunks(),
        status=sink.status,
        headers={
            **sink.headers,
            "Cache-Control": "no-cache",
            "X-Accel-Buffering": "no",
        },
    )
