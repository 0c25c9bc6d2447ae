"""Finite-number coercion and guarded arithmetic shared by every rating stage."""

from typing import Any, Optional
import math


def num(value: Any) -> float:
    """Coerce to a finite float; missing, non-numeric and non-finite values become 0."""
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def optional_number(value: Any) -> Optional[float]:
    """Like num() but keeps the distinction between zero and unknown."""
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def safe_div(numerator: Any, denominator: Any, fallback: float = 0.0) -> float:
    den = num(denominator)
    if den > 0:
        return num(numerator) / den
    return fallback


def clamp01(value: Any) -> float:
    number = num(value)
    if number < 0:
        return 0.0
    if number > 1:
        return 1.0
    return number


def squared(value: Any) -> float:
    number = num(value)
    return number * number
