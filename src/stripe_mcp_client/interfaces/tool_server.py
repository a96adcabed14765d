"""Hosting MCP server that exposes checkout-link creation as one of its own tools.

Each tool call runs a short-lived ``StripeMcpClient``: connect, create the
link, close. Failures come back to the calling agent as a structured result
with ``success: False`` instead of an unhandled error.

Run it with ``stripe-mcp-client serve`` (stdio transport).
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Callable, Dict, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from stripe_mcp_client.application import create_checkout_link
from stripe_mcp_client.domain import StripeMcpError
from stripe_mcp_client.infrastructure.mcp import StripeMcpClient

logger = logging.getLogger(__name__)

SERVER_NAME = "Payment Server"
TOOL_NAME = "create_checkout_link"
TOOL_DESCRIPTION = "Create a Stripe payment link for a product"

ClientFactory = Callable[[], StripeMcpClient]


async def handle_create_checkout_link(
    client_factory: ClientFactory,
    product_name: str,
    price_amount: int,
    currency: str = "usd",
    description: Optional[str] = None,
) -> Dict[str, Any]:
    """Run one checkout-link request end to end; never raises StripeMcpError."""
    try:
        client = client_factory()
    except StripeMcpError as exc:
        logger.error("create_checkout_link: client configuration failed: %s", exc)
        return {"success": False, "error": f"Error creating payment link: {exc}"}

    try:
        await client.connect()
        summary = await create_checkout_link(
            client,
            product_name=product_name,
            price_amount=price_amount,
            currency=currency,
            description=description,
        )
    except StripeMcpError as exc:
        logger.error("create_checkout_link: %s", exc)
        return {"success": False, "error": f"Error creating payment link: {exc}"}
    finally:
        await client.close()

    return {"success": True, **summary}


def build_server(client_factory: ClientFactory = StripeMcpClient) -> FastMCP:
    """Return a FastMCP server with the ``create_checkout_link`` tool registered.

    ``client_factory`` is called once per tool call; the default resolves the
    API key from ``STRIPE_API_KEY``.
    """
    server = FastMCP(SERVER_NAME)

    @server.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION)
    async def create_checkout_link_tool(
        product_name: Annotated[str, Field(description="Name of the product")],
        price_amount: Annotated[int, Field(description="Price amount in cents")],
        currency: Annotated[str, Field(description="Currency code")] = "usd",
        description: Annotated[Optional[str], Field(description="Product description")] = None,
    ) -> Dict[str, Any]:
        return await handle_create_checkout_link(
            client_factory,
            product_name=product_name,
            price_amount=price_amount,
            currency=currency,
            description=description,
        )

    return server
