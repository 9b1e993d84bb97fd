"""Exceptions raised by the event stream and its bundled sinks."""


class EventStreamError(Exception):
    """Base class for all event stream errors."""


class InvalidRetryValue(EventStreamError, ValueError):
    """A retry interval that does not parse to an integer."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"retry value must be an integer number of milliseconds, got {value!r}")


class StreamStateError(EventStreamError):
    """Stream used out of order (e.g. init() called twice)."""


class SinkError(EventStreamError):
    """Transport failure at the sink boundary."""


class SinkClosedError(SinkError):
    """Write attempted on a sink whose response body has ended."""
