"""Domain layer: connection state, tool outcomes and errors. No I/O."""

from .models import (
    RAW_RESPONSE_KEY,
    ConnectionState,
    Decoded,
    RawFallback,
    ToolOutcome,
    collect_text,
    decode_tool_text,
)
from .errors import (
    ConfigurationError,
    McpConnectionError,
    PaymentLinkCreationError,
    StripeMcpError,
)

__all__ = [
    "RAW_RESPONSE_KEY",
    "ConnectionState",
    "Decoded",
    "RawFallback",
    "ToolOutcome",
    "collect_text",
    "decode_tool_text",
    "ConfigurationError",
    "McpConnectionError",
    "PaymentLinkCreationError",
    "StripeMcpError",
]
