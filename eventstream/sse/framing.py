"""SSE message framing.

Two framing policies are supported. Both produce ``field: value`` records;
they differ in how multi-line values are cut into writes:

* ``LINE_REFRAMING`` splits the value on ``\\n`` and emits one record per
  line, each as its own write. A ``data`` message is closed by a blank line,
  which is what makes the client dispatch the event.
* ``EMBEDDED_CONTINUATION`` normalises line endings and re-prefixes every
  newline with the field name inside a single write. The stream appends an
  extra ``\\n`` to data payloads under this policy (see EventStream.send_data).
"""

from enum import Enum

DATA_FIELD = "data"
COMMENT_FIELD = ""


class FramingPolicy(str, Enum):
    LINE_REFRAMING = "line"
    EMBEDDED_CONTINUATION = "continuation"

    @classmethod
    def from_name(cls, name) -> "FramingPolicy":
        """Resolve 'line' / 'continuation' (or an enum member) to a policy."""
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            allowed = ", ".join(p.value for p in cls)
            raise ValueError(f"unknown framing policy {name!r} (expected one of: {allowed})") from None


def frame_lines(field: str, text: str) -> list[str]:
    """Frame text as one record per line, plus a blank line for data."""
    chunks = [f"{field}: {line}\n" for line in text.split("\n")]
    if field == DATA_FIELD:
        chunks.append("\n")
    return chunks


def frame_continuation(field: str, text: str) -> list[str]:
    """Frame text as a single write with inline continuation prefixes."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    body = text.replace("\n", f"\n{field}: ")
    return [f"{field}: {body}\n"]


_FRAMERS = {
    FramingPolicy.LINE_REFRAMING: frame_lines,
    FramingPolicy.EMBEDDED_CONTINUATION: frame_continuation,
}


def frame(field: str, text: str, policy: FramingPolicy = FramingPolicy.LINE_REFRAMING) -> list[str]:
    """Return the chunks to write for one message, in order."""
    return _FRAMERS[policy](field, text)
