"""Exceptions raised by imgswap."""

from __future__ import annotations


class ConfigError(ValueError):
    """Raised when the replacer configuration cannot be loaded."""
