"""Configuration schema: the immutable settings one client session runs with."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from .constants import DEFAULT_TOOLS


class ClientConfig(BaseModel):
    """Resolved settings for one ``StripeMcpClient``.

    Built once (usually by ``resolve_config``) and never mutated. The API key
    is held as a ``SecretStr`` so it does not leak through ``repr()`` or logs.
    """

    model_config = ConfigDict(frozen=True)

    api_key: SecretStr = Field(..., description="Stripe secret key, passed to the server as --api-key.")
    tools: str = Field(
        DEFAULT_TOOLS,
        description="Tools selector passed to the server as --tools (which tools it exposes).",
    )
    stripe_account: Optional[str] = Field(
        None,
        description="Connected account id, passed through unchanged as --stripe-account when set.",
    )
    debug: bool = Field(False, description="Log connection progress and advertised tools at INFO.")

    @field_validator("api_key")
    @classmethod
    def _api_key_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("api_key must not be empty")
        return value

    @field_validator("tools")
    @classmethod
    def _tools_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("tools must not be empty")
        return value
