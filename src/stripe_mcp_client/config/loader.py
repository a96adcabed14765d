"""Resolve a ClientConfig from explicit options and the environment."""

from __future__ import annotations

from typing import Optional

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from stripe_mcp_client.domain.errors import ConfigurationError

from .constants import DEFAULT_TOOLS
from .schema import ClientConfig

MISSING_API_KEY_MESSAGE = (
    "Stripe API key is required. Pass it as an option or set STRIPE_API_KEY environment variable."
)


class _Env(BaseSettings):
    """STRIPE_API_KEY and STRIPE_ACCOUNT from the process environment."""

    model_config = SettingsConfigDict(env_prefix="STRIPE_", extra="ignore")
    api_key: Optional[str] = None
    account: Optional[str] = None


def resolve_config(
    api_key: Optional[str] = None,
    tools: Optional[str] = None,
    stripe_account: Optional[str] = None,
    debug: bool = False,
) -> ClientConfig:
    """Build the immutable config for one client.

    Explicit values win; empty or missing ones fall back to ``STRIPE_API_KEY``
    and ``STRIPE_ACCOUNT``. The environment is read here and nowhere else, so
    a client never sees environment changes made after it was constructed.

    Raises:
        ConfigurationError: no API key could be resolved, or the resolved
            values fail validation.
    """
    env = _Env()
    resolved_key = api_key or env.api_key
    if not resolved_key or not resolved_key.strip():
        raise ConfigurationError(MISSING_API_KEY_MESSAGE)
    try:
        return ClientConfig(
            api_key=resolved_key,
            tools=tools or DEFAULT_TOOLS,
            stripe_account=stripe_account or env.account or None,
            debug=debug,
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid Stripe MCP client configuration: {exc}") from exc
