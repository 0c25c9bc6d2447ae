"""Utility modules for hackstat."""

from hackstat.utils.numeric import (
    num,
    optional_number,
    safe_div,
    clamp01,
    squared,
)

__all__ = [
    "num",
    "optional_number",
    "safe_div",
    "clamp01",
    "squared",
]
