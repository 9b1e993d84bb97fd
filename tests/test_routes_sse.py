"""Tests for the SSE blueprint and app-level routes."""

import json

from eventstream.config import config


def _parse(body):
    """Split an SSE body into a list of {field: value} dicts, one per message."""
    messages, current = [], {}
    for line in body.split("\n"):
        if line == "":
            if current:
                messages.append(current)
                current = {}
            continue
        field, _, value = line.partition(": ")
        current[field] = value
    return messages


def test_events_stream_headers(client):
    """GET /api/events responds with an event-stream."""
    resp = client.get("/api/events?count=1&interval=0")
    assert resp.status_code == 200
    assert resp.headers["Content-Type"] == "text/event-stream; charset=utf-8"
    assert resp.headers["Cache-Control"] == "no-cache"
    assert resp.headers["X-Accel-Buffering"] == "no"


def test_events_sends_count_messages(client):
    """Each message carries event, id and JSON data in order."""
    resp = client.get("/api/events?count=3&interval=0&event=update")
    messages = _parse(resp.get_data(as_text=True))
    assert [m["id"] for m in messages] == ["1", "2", "3"]
    assert all(m["event"] == "update" for m in messages)
    assert [json.loads(m["data"])["seq"] for m in messages] == [1, 2, 3]


def test_events_wire_order(client):
    """Event, id, then data terminated by a blank line."""
    body = client.get("/api/events?count=1&interval=0").get_data(as_text=True)
    assert body.startswith("event: tick\nid: 1\ndata: {")
    assert body.endswith("}\n\n")


def test_events_resume_after_last_event_id(client):
    """Numbering continues after a numeric Last-Event-ID."""
    resp = client.get("/api/events?count=2&interval=0", headers={"Last-Event-ID": "41"})
    messages = _parse(resp.get_data(as_text=True))
    assert [m["id"] for m in messages] == ["42", "43"]


def test_events_non_numeric_last_event_id_restarts(client):
    resp = client.get("/api/events?count=1&interval=0", headers={"Last-Event-ID": "abc"})
    assert _parse(resp.get_data(as_text=True))[0]["id"] == "1"


def test_events_non_ascii_digit_last_event_id_restarts(client):
    """Unicode digits such as superscripts are not treated as a resumable id."""
    resp = client.get("/api/events?count=1&interval=0", headers={"Last-Event-ID": "\u00b2"})
    assert resp.status_code == 200
    assert _parse(resp.get_data(as_text=True))[0]["id"] == "1"


def test_events_retry_sent_once(client):
    """retry hint goes out with the first message only."""
    body = client.get("/api/events?count=3&interval=0&retry=2500").get_data(as_text=True)
    assert body.count("retry: 2500\n") == 1
    assert _parse(body)[0]["retry"] == "2500"


def test_events_keep_alive_between_slow_events(client, monkeypatch):
    """Intervals longer than the keep-alive period produce comment pings."""
    monkeypatch.setattr(config, "KEEPALIVE_INTERVAL", 0.01)
    body = client.get("/api/events?count=2&interval=0.05").get_data(as_text=True)
    assert ": Keep-Alive\n" in body
    assert [m["id"] for m in _parse(body) if "id" in m] == ["1", "2"]


def test_events_continuation_policy(client, monkeypatch):
    """Configured continuation framing adds the extra data line."""
    monkeypatch.setattr(config, "FRAMING_POLICY", "continuation")
    body = client.get("/api/events?count=1&interval=0").get_data(as_text=True)
    assert "}\ndata: \n" in body
    assert "\n\n" not in body


def test_events_invalid_count(client):
    """count outside 1..1000 is rejected with JSON details."""
    resp = client.get("/api/events?count=0")
    assert resp.status_code == 400
    data = resp.get_json()
    assert data["error"] == "Validation failed"
    assert data["details"][0]["field"] == "count"


def test_events_invalid_retry(client):
    """Non-numeric retry is rejected before the stream starts."""
    resp = client.get("/api/events?retry=soon")
    assert resp.status_code == 400
    data = resp.get_json()
    assert data["details"][0]["field"] == "retry"


def test_events_event_name_with_newline_rejected(client):
    resp = client.get("/api/events?event=a%0Ab")
    assert resp.status_code == 400


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["status"] == "ok"
    assert data["framing_policy"] == "line"


def test_unknown_route_returns_json_404(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Not found", "status": 404}


def test_wrong_method_returns_json_405(client):
    resp = client.post("/api/events")
    assert resp.status_code == 405
    assert resp.get_json()["status"] == 405
