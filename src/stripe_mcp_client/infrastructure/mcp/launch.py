"""Launch command for the ``@stripe/mcp`` server subprocess."""

from __future__ import annotations

from typing import List

from mcp.client.stdio import StdioServerParameters

from stripe_mcp_client.config.constants import (
    API_KEY_FLAG,
    SERVER_COMMAND,
    SERVER_PACKAGE,
    STRIPE_ACCOUNT_FLAG,
    TOOLS_FLAG,
)
from stripe_mcp_client.config.schema import ClientConfig

_REDACTED = "***"


def build_server_args(config: ClientConfig) -> List[str]:
    """Return the npx argument list, one token per flag.

    Tokens are passed to the process as separate argv entries (no shell), so
    keys and account ids never need quoting.
    """
    args = [
        "-y",
        SERVER_PACKAGE,
        f"{TOOLS_FLAG}{config.tools}",
        f"{API_KEY_FLAG}{config.api_key.get_secret_value()}",
    ]
    if config.stripe_account:
        args.append(f"{STRIPE_ACCOUNT_FLAG}{config.stripe_account}")
    return args


def build_server_parameters(config: ClientConfig) -> StdioServerParameters:
    """Wrap the launch command in the parameters ``stdio_client`` expects."""
    return StdioServerParameters(command=SERVER_COMMAND, args=build_server_args(config))


def redact_args(args: List[str]) -> List[str]:
    """Copy of ``args`` with the API key value masked, for logging."""
    return [
        f"{API_KEY_FLAG}{_REDACTED}" if arg.startswith(API_KEY_FLAG) else arg
        for arg in args
    ]
