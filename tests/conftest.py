"""Pytest fixtures for stripe-mcp-client tests."""
from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _clean_stripe_env(monkeypatch):
    """Every test starts without STRIPE_API_KEY / STRIPE_ACCOUNT in the environment.

    Config resolution reads both, so a developer's shell must not leak into
    the fail-fast and fallback tests.
    """
    monkeypatch.delenv("STRIPE_API_KEY", raising=False)
    monkeypatch.delenv("STRIPE_ACCOUNT", raising=False)
