"""Ports used by the application layer.

The use cases depend on the *shape* of the payment link client, not on the
MCP-backed implementation, so they can be driven by a fake in tests.
"""

from __future__ import annotations

from typing import Any, Dict, Protocol


class PaymentLinkClient(Protocol):
    """Anything that can create a Stripe payment link from raw API options.

    ``StripeMcpClient`` is the production implementation.
    """

    async def create_payment_link(self, options: Dict[str, Any]) -> Dict[str, Any]: ...
