"""
Money Utilities - Safe Decimal operations for cart amounts.

Prices and totals are kept as Decimal so the cart aggregates stay exact.
"""
from decimal import Decimal, InvalidOperation
from typing import Union

Numeric = Union[str, int, float, Decimal]

ZERO = Decimal("0")


def to_decimal(value: Union[Numeric, None]) -> Decimal:
    """
    Convert any value to Decimal safely.
    
    Args:
        value: Value to convert (str, int, float, Decimal, or None)
        
    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return ZERO
    
    if isinstance(value, Decimal):
        return value
    
    try:
        # Floats go through str() to avoid binary precision artefacts
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return ZERO


def add(a: Numeric, b: Numeric) -> Decimal:
    """Safe addition of monetary values."""
    return to_decimal(a) + to_decimal(b)


def subtract(a: Numeric, b: Numeric) -> Decimal:
    """Safe subtraction of monetary values."""
    return to_decimal(a) - to_decimal(b)


def multiply(value: Numeric, factor: Numeric) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def amounts_equal(a: Numeric, b: Numeric, tolerance: Numeric = ZERO) -> bool:
    """Compare two amounts, allowing an absolute difference of ``tolerance``."""
    return abs(subtract(a, b)) <= to_decimal(tolerance)
