"""Wire constants shared by the launcher, the session and the interfaces.

The flag prefixes are a contract with the ``@stripe/mcp`` executable and must
be reproduced literally.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Remote server launch
# ---------------------------------------------------------------------------

# The server is an npm package run through npx; ``-y`` skips the install prompt
# so a first run on a clean machine does not block on stdin.
SERVER_COMMAND: str = "npx"
SERVER_PACKAGE: str = "@stripe/mcp"

TOOLS_FLAG: str = "--tools="
API_KEY_FLAG: str = "--api-key="
STRIPE_ACCOUNT_FLAG: str = "--stripe-account="

# ---------------------------------------------------------------------------
# Tool invocation
# ---------------------------------------------------------------------------

# The only tool this client ever calls.
PAYMENT_LINKS_TOOL: str = "paymentLinks.create"

# Tools selector passed to the server when none is configured: expose exactly
# the tool we call.
DEFAULT_TOOLS: str = PAYMENT_LINKS_TOOL

# ---------------------------------------------------------------------------
# Client identity sent during the MCP handshake
# ---------------------------------------------------------------------------

CLIENT_NAME: str = "stripe-mcp-client"
CLIENT_VERSION: str = "1.0.0"
