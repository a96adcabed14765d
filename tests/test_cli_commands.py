"""Tests for CLI commands using CliRunner (no Stripe MCP server required)."""
from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import typer
from typer.testing import CliRunner

from stripe_mcp_client.domain import McpConnectionError
from stripe_mcp_client.interfaces.cli import _build_options, app

runner = CliRunner()

CLI_MODULE = "stripe_mcp_client.interfaces.cli"

LINK = {
    "id": "plink_1234",
    "object": "payment_link",
    "url": "https://checkout.stripe.com/pay/cs_test_123456789",
    "created": 1612312000,
}


# ---------------------------------------------------------------------------
# _build_options
# ---------------------------------------------------------------------------

def test_build_options_from_price():
    assert _build_options("price_123", 2, None, None) == {
        "line_items": [{"price": "price_123", "quantity": 2}],
    }


def test_build_options_with_redirect():
    options = _build_options("price_123", 1, "https://example.com/thank-you", None)
    assert options["after_completion"] == {
        "type": "redirect",
        "redirect": {"url": "https://example.com/thank-you"},
    }


def test_build_options_payload_wins():
    payload = json.dumps({"line_items": [{"price": "price_9", "quantity": 3}]})
    assert _build_options("price_123", 1, None, payload) == json.loads(payload)


def test_build_options_requires_price_or_payload():
    with pytest.raises(typer.BadParameter):
        _build_options(None, 1, None, None)


# ---------------------------------------------------------------------------
# create-link
# ---------------------------------------------------------------------------

def test_create_link_prints_url():
    create = AsyncMock(return_value=LINK)
    with patch(f"{CLI_MODULE}._create_link", create):
        result = runner.invoke(app, ["create-link", "--price", "price_123", "--api-key", "sk_test_abc"])

    assert result.exit_code == 0, result.output
    assert "https://checkout.stripe.com/pay/cs_test_123456789" in result.output
    client, options = create.await_args.args
    assert client.config.api_key.get_secret_value() == "sk_test_abc"
    assert options == {"line_items": [{"price": "price_123", "quantity": 1}]}


def test_create_link_uses_env_api_key(monkeypatch):
    monkeypatch.setenv("STRIPE_API_KEY", "sk_test_env")
    create = AsyncMock(return_value=LINK)
    with patch(f"{CLI_MODULE}._create_link", create):
        result = runner.invoke(app, ["create-link", "--price", "price_123"])

    assert result.exit_code == 0, result.output
    client, _ = create.await_args.args
    assert client.config.api_key.get_secret_value() == "sk_test_env"


def test_create_link_raw_response_printed():
    with patch(f"{CLI_MODULE}._create_link", AsyncMock(return_value={"raw_response": "not json"})):
        result = runner.invoke(app, ["create-link", "--price", "price_123", "--api-key", "sk_test_abc"])

    assert result.exit_code == 0, result.output
    assert "not JSON" in result.output
    assert "not json" in result.output


def test_create_link_without_api_key_exits_1():
    result = runner.invoke(app, ["create-link", "--price", "price_123"])
    assert result.exit_code == 1
    assert "Stripe API key is required" in result.output


def test_create_link_connection_error_exits_1():
    error = McpConnectionError("Failed to connect to Stripe MCP server: npx not found")
    with patch(f"{CLI_MODULE}._create_link", AsyncMock(side_effect=error)):
        result = runner.invoke(app, ["create-link", "--price", "price_123", "--api-key", "sk_test_abc"])

    assert result.exit_code == 1
    assert "npx not found" in result.output


def test_create_link_bad_payload_is_usage_error():
    result = runner.invoke(app, ["create-link", "--payload", "[1, 2]", "--api-key", "sk_test_abc"])
    assert result.exit_code == 2


# ---------------------------------------------------------------------------
# tools / serve
# ---------------------------------------------------------------------------

def test_tools_lists_names():
    with patch(f"{CLI_MODULE}._list_tools", AsyncMock(return_value=["paymentLinks.create", "products.create"])):
        result = runner.invoke(app, ["tools", "--api-key", "sk_test_abc", "--tools", "all"])

    assert result.exit_code == 0, result.output
    assert "paymentLinks.create" in result.output
    assert "products.create" in result.output


def test_serve_runs_tool_server():
    server = MagicMock()
    with patch("stripe_mcp_client.interfaces.tool_server.build_server", return_value=server):
        result = runner.invoke(app, ["serve"])

    assert result.exit_code == 0, result.output
    server.run.assert_called_once_with()
