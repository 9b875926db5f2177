"""
Numeric Utilities - Centralized handling of provider numbers.

Alpha Vantage returns every numeric value as a string, and uses markers such
as "None" or "-" when a figure is unavailable. Values are parsed once here
into Optional[float]; raw strings never reach arithmetic.
"""

import math
from typing import Any, Optional

from config.constants import NOT_AVAILABLE

# Provider markers for "no value"
_MISSING_MARKERS = {"", "none", "null", "-", "n/a", "nan"}


def parse_provider_number(value: Any) -> Optional[float]:
    """
    Parse a provider value into a finite float.

    Examples:
        >>> parse_provider_number("28.5")
        28.5
        >>> parse_provider_number("None")
        None
        >>> parse_provider_number(None)
        None
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        text = value.strip()
        if text.lower() in _MISSING_MARKERS:
            return None
        value = text

    try:
        number = float(value)
    except (ValueError, TypeError):
        return None

    if math.isnan(number) or math.isinf(number):
        return None
    return number


def format_decimal(value: Optional[float], default: str = NOT_AVAILABLE) -> str:
    """Format with 2 decimal places, or return `default` when unavailable."""
    if value is None:
        return default
    return f"{value:.2f}"


def format_percent(value: Optional[float], default: str = NOT_AVAILABLE) -> str:
    """
    Format a value already expressed in percent (10.0 -> '10.00%').
    Unlike a ratio formatter this does not multiply by 100.
    """
    if value is None:
        return default
    return f"{value:.2f}%"


def safe_divide(numerator: Optional[float], denominator: Optional[float]) -> Optional[float]:
    """Division that yields None for missing operands or a zero denominator."""
    if numerator is None or denominator is None or denominator == 0:
        return None
    return numerator / denominator
