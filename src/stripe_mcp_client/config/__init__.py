"""Configuration: schema, constants and resolution from options/env."""

from .schema import ClientConfig
from .loader import resolve_config

__all__ = ["ClientConfig", "resolve_config"]
