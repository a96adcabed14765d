"""Application layer: use cases built on top of the payment link client."""

from .checkout import build_checkout_payload, create_checkout_link, summarize_payment_link
from .ports import PaymentLinkClient

__all__ = [
    "PaymentLinkClient",
    "build_checkout_payload",
    "create_checkout_link",
    "summarize_payment_link",
]
