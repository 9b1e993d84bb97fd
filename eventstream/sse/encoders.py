"""Value encoders used to turn payloads into wire text before framing."""

from __future__ import annotations

import json
from typing import Any, Callable, Protocol, runtime_checkable

from pydantic import BaseModel


@runtime_checkable
class Encoder(Protocol):
    def encode(self, value: Any) -> str: ...


class StringEncoder:
    """Default encoder: plain string coercion, None becomes ''."""

    def encode(self, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    def __repr__(self) -> str:
        return "StringEncoder()"


class JSONEncoder:
    """Serialize structured payloads to compact JSON.

    Pydantic models are dumped through their own JSON serializer so that
    field aliases and custom types are honoured.
    """

    def __init__(self, ensure_ascii: bool = False, separators: tuple[str, str] = (",", ":"), default=None) -> None:
        self.ensure_ascii = ensure_ascii
        self.separators = separators
        self.default = default

    def encode(self, value: Any) -> str:
        if isinstance(value, BaseModel):
            return value.model_dump_json()
        return json.dumps(
            value,
            ensure_ascii=self.ensure_ascii,
            separators=self.separators,
            default=self.default,
        )

    def __repr__(self) -> str:
        return f"JSONEncoder(ensure_ascii={self.ensure_ascii})"


class FunctionEncoder:
    """Adapts a plain callable such as ``str`` or ``json.dumps``."""

    def __init__(self, func: Callable[[Any], str]) -> None:
        self.func = func

    def encode(self, value: Any) -> str:
        return self.func(value)

    def __repr__(self) -> str:
        name = getattr(self.func, "__name__", repr(self.func))
        return f"FunctionEncoder({name})"


def as_encoder(obj: Encoder | Callable[[Any], str] | None) -> Encoder | None:
    """Normalise an encoder argument. Returns None when obj is None."""
    if obj is None:
        return None
    if isinstance(obj, type):
        # str, bytes and friends carry an unrelated encode attribute
        if issubclass(obj, (str, bytes)) or not callable(getattr(obj, "encode", None)):
            return FunctionEncoder(obj)
        return obj()
    if isinstance(obj, Encoder) and not isinstance(obj, (str, bytes)):
        return obj
    if callable(obj):
        return FunctionEncoder(obj)
    raise TypeError(f"encoder must provide encode() or be callable, got {type(obj).__name__}")


STRING = StringEncoder()
