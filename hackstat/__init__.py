"""Individual offensive, defensive and net ratings from box-score aggregates."""

__all__ = [
    "config",
    "constants",
    "exceptions",
    "normalization",
    "ratings",
    "ingestion",
    "ops",
    "storage",
    "utils",
]

__version__ = "0.1.0"
