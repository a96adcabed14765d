"""Domain models: connection state and tool-call outcomes. Pure data, no I/O."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Union

RAW_RESPONSE_KEY = "raw_response"


class ConnectionState(Enum):
    """Lifecycle of the one connection a client owns. No reconnecting state."""
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


@dataclass(frozen=True)
class Decoded:
    """Tool text that parsed as a JSON object."""
    value: Dict[str, Any]

    def as_dict(self) -> Dict[str, Any]:
        return self.value


@dataclass(frozen=True)
class RawFallback:
    """Tool text that did not parse as a JSON object, kept verbatim."""
    text: str

    def as_dict(self) -> Dict[str, Any]:
        return {RAW_RESPONSE_KEY: self.text}


ToolOutcome = Union[Decoded, RawFallback]


def collect_text(content: Iterable[Any]) -> str:
    """Concatenate the text of every ``type == "text"`` chunk, in order.

    Image, audio and resource chunks are skipped.
    """
    return "".join(
        getattr(chunk, "text", "") or ""
        for chunk in content
        if getattr(chunk, "type", None) == "text"
    )


def decode_tool_text(text: str) -> ToolOutcome:
    """Decode tool output as a JSON object, falling back to the raw text.

    Malformed JSON, empty output and JSON that is not an object (list, string,
    number) all produce ``RawFallback``; this function never raises on bad
    input because an undecodable answer is still an answer.
    """
    try:
        value = json.loads(text)
    except ValueError:
        return RawFallback(text)
    if not isinstance(value, dict):
        return RawFallback(text)
    return Decoded(value)
