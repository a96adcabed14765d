from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("stripe-mcp-client")
except PackageNotFoundError:
    # Package not installed (e.g. running from source without pip install)
    __version__ = "0.0.0.dev0"

import logging

# Library package: logging calls inside stripe_mcp_client are discarded unless
# the application (CLI, hosting server, test harness) configures handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())

from stripe_mcp_client.config import ClientConfig, resolve_config  # noqa: E402
from stripe_mcp_client.domain import (  # noqa: E402
    ConfigurationError,
    ConnectionState,
    McpConnectionError,
    PaymentLinkCreationError,
    StripeMcpError,
)
from stripe_mcp_client.infrastructure.mcp import StripeMcpClient  # noqa: E402

__all__ = [
    "__version__",
    "ClientConfig",
    "ConfigurationError",
    "ConnectionState",
    "McpConnectionError",
    "PaymentLinkCreationError",
    "StripeMcpClient",
    "StripeMcpError",
    "resolve_config",
]
