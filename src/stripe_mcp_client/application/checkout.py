"""Checkout links: one-product payment links with inline price data."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from stripe_mcp_client.application.ports import PaymentLinkClient
from stripe_mcp_client.domain import RAW_RESPONSE_KEY, PaymentLinkCreationError


def build_checkout_payload(
    product_name: str,
    price_amount: int,
    currency: str = "usd",
    description: Optional[str] = None,
) -> Dict[str, Any]:
    """Return ``paymentLinks.create`` options for a single product.

    ``price_amount`` is in the currency's smallest unit (cents for USD). The
    product description is omitted entirely when empty; Stripe rejects an
    empty string there.
    """
    product_data: Dict[str, Any] = {"name": product_name}
    if description:
        product_data["description"] = description
    return {
        "line_items": [
            {
                "price_data": {
                    "currency": currency,
                    "product_data": product_data,
                    "unit_amount": price_amount,
                },
                "quantity": 1,
            }
        ],
    }


def _created_iso(created: Any) -> Optional[str]:
    if isinstance(created, bool) or not isinstance(created, (int, float)):
        return None
    try:
        return datetime.fromtimestamp(created, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    except (OverflowError, OSError, ValueError):
        return None


def summarize_payment_link(link: Dict[str, Any]) -> Dict[str, Any]:
    """Reduce a payment link object to its URL, id and creation time.

    ``created`` (unix seconds) becomes an ISO-8601 UTC string, or ``None``
    when the server did not send it or sent something that is not a
    representable timestamp.

    Raises:
        PaymentLinkCreationError: ``link`` is a raw-text fallback, so there is
            no URL to report.
    """
    if RAW_RESPONSE_KEY in link and "url" not in link:
        raise PaymentLinkCreationError(
            f"Stripe MCP server returned an unexpected response: {link[RAW_RESPONSE_KEY]}"
        )
    return {
        "payment_link_url": link.get("url"),
        "payment_link_id": link.get("id"),
        "created": _created_iso(link.get("created")),
    }


async def create_checkout_link(
    client: PaymentLinkClient,
    product_name: str,
    price_amount: int,
    currency: str = "usd",
    description: Optional[str] = None,
) -> Dict[str, Any]:
    """Create a one-product payment link and return its summary."""
    link = await client.create_payment_link(
        build_checkout_payload(product_name, price_amount, currency, description)
    )
    return summarize_payment_link(link)
