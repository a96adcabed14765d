"""Tests for config resolution (options + environment)."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from stripe_mcp_client.config import ClientConfig, resolve_config
from stripe_mcp_client.config.constants import DEFAULT_TOOLS
from stripe_mcp_client.domain import ConfigurationError
from stripe_mcp_client.infrastructure.mcp import StripeMcpClient


@pytest.mark.parametrize(
    "kwargs",
    [
        {},
        {"tools": "paymentLinks.create,products.create"},
        {"stripe_account": "acct_123"},
        {"debug": True},
        {"api_key": ""},
        {"api_key": None, "tools": "all", "stripe_account": "acct_9", "debug": True},
    ],
)
def test_missing_api_key_raises_configuration_error(kwargs):
    with pytest.raises(ConfigurationError, match="Stripe API key is required"):
        resolve_config(**kwargs)


def test_client_constructor_fails_fast_without_api_key():
    with pytest.raises(ConfigurationError, match="STRIPE_API_KEY"):
        StripeMcpClient()


def test_api_key_from_environment(monkeypatch):
    monkeypatch.setenv("STRIPE_API_KEY", "sk_test_env")
    cfg = resolve_config()
    assert cfg.api_key.get_secret_value() == "sk_test_env"
    assert cfg.tools == DEFAULT_TOOLS
    assert cfg.stripe_account is None
    assert cfg.debug is False


def test_explicit_options_win_over_environment(monkeypatch):
    monkeypatch.setenv("STRIPE_API_KEY", "sk_test_env")
    monkeypatch.setenv("STRIPE_ACCOUNT", "acct_env")
    cfg = resolve_config(api_key="sk_test_explicit", stripe_account="acct_explicit")
    assert cfg.api_key.get_secret_value() == "sk_test_explicit"
    assert cfg.stripe_account == "acct_explicit"


def test_stripe_account_from_environment(monkeypatch):
    monkeypatch.setenv("STRIPE_ACCOUNT", "acct_env")
    cfg = resolve_config(api_key="sk_test_abc")
    assert cfg.stripe_account == "acct_env"


def test_empty_tools_falls_back_to_default():
    assert resolve_config(api_key="sk_test_abc", tools="").tools == DEFAULT_TOOLS


def test_environment_not_reread_after_construction(monkeypatch):
    monkeypatch.setenv("STRIPE_API_KEY", "sk_test_first")
    client = StripeMcpClient()
    monkeypatch.setenv("STRIPE_API_KEY", "sk_test_second")
    monkeypatch.setenv("STRIPE_ACCOUNT", "acct_late")
    assert client.config.api_key.get_secret_value() == "sk_test_first"
    assert client.config.stripe_account is None


def test_config_is_immutable():
    cfg = resolve_config(api_key="sk_test_abc")
    with pytest.raises(ValidationError):
        cfg.debug = True


def test_api_key_hidden_from_repr():
    cfg = resolve_config(api_key="sk_test_supersecret")
    assert "sk_test_supersecret" not in repr(cfg)


def test_blank_api_key_rejected_by_schema():
    with pytest.raises(ValidationError):
        ClientConfig(api_key="   ")


def test_whitespace_api_key_is_configuration_error():
    with pytest.raises(ConfigurationError):
        resolve_config(api_key="   ")


def test_blank_tools_selector_is_configuration_error():
    with pytest.raises(ConfigurationError, match="Invalid Stripe MCP client configuration"):
        resolve_config(api_key="sk_test_abc", tools="   ")


def test_client_accepts_ready_config():
    cfg = ClientConfig(api_key="sk_test_abc", stripe_account="acct_1")
    client = StripeMcpClient(config=cfg)
    assert client.config is cfg
