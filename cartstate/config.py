"""
Configuration - environment-driven settings for cartstate.

Usage:
    from cartstate import config
    if config.CART_VALIDATE_STATE:
        ...
"""

import os
from decimal import Decimal, InvalidOperation

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment; unknown values fall back to default."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


def env_decimal(name: str, default: str) -> Decimal:
    """Read a non-negative Decimal from the environment."""
    raw = os.environ.get(name, default)
    try:
        value = Decimal(raw.strip())
    except (InvalidOperation, AttributeError):
        return Decimal(default)
    if not value.is_finite() or value < 0:
        return Decimal(default)
    return value


# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_FORMAT_STYLE = os.environ.get("LOG_FORMAT_STYLE", "detailed").lower()

# Cart state
CART_VALIDATE_STATE = env_flag("CART_VALIDATE_STATE", True)
CART_AMOUNT_TOLERANCE = env_decimal("CART_AMOUNT_TOLERANCE", "0.000001")


__all__ = [
    "LOG_LEVEL",
    "LOG_FORMAT_STYLE",
    "CART_VALIDATE_STATE",
    "CART_AMOUNT_TOLERANCE",
    "env_flag",
    "env_decimal",
]
