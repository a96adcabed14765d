"""Client errors. Every failure a caller can see is a StripeMcpError."""


class StripeMcpError(Exception):
    """Base for stripe-mcp-client errors."""
    pass


class ConfigurationError(StripeMcpError):
    """No usable configuration (e.g. no API key in options or environment)."""
    pass


class McpConnectionError(StripeMcpError):
    """Spawning the Stripe MCP server or the MCP handshake failed."""
    pass


class PaymentLinkCreationError(StripeMcpError):
    """The paymentLinks.create tool call failed or the server reported an error."""
    pass
