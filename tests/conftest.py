"""
Shared pytest fixtures for EventStream tests.
"""

import pytest

from eventstream.config import config
from eventstream.sse.framing import FramingPolicy
from eventstream.sse.sink import MemorySink
from eventstream.sse.stream import EventStream


@pytest.fixture
def sink():
    """Fresh in-memory sink."""
    return MemorySink()


@pytest.fixture
def make_stream(sink):
    """Factory for initialized streams bound to the shared sink."""

    def _make(headers=None, policy=FramingPolicy.LINE_REFRAMING, encoder=None, init=True):
        stream = EventStream(headers or {}, sink, encoder=encoder, policy=policy)
        if init:
            stream.init()
        return stream

    return _make


@pytest.fixture(params=list(FramingPolicy), ids=lambda p: p.value)
def policy(request):
    """Run a test once per framing policy."""
    return request.param


@pytest.fixture
def app(monkeypatch):
    """Flask app configured for testing with fast, line-framed streams."""
    import app as app_module

    monkeypatch.setattr(config, "FRAMING_POLICY", "line")
    monkeypatch.setattr(config, "DEFAULT_INTERVAL", 0.0)
    app_module.app.config["TESTING"] = True
    yield app_module.app


@pytest.fixture
def client(app):
    """Flask test client."""
    with app.test_client() as c:
        yield c
