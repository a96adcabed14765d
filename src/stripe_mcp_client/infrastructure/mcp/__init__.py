"""MCP client side: launching the Stripe MCP server and talking to it.

Exports:
    StripeMcpClient: manages one Stripe MCP server connection
"""

from stripe_mcp_client.infrastructure.mcp.session import StripeMcpClient
from stripe_mcp_client.infrastructure.mcp.launch import (
    build_server_args,
    build_server_parameters,
    redact_args,
)

__all__ = ["StripeMcpClient", "build_server_args", "build_server_parameters", "redact_args"]
