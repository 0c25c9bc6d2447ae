"""
Custom exceptions for hackstat.

Rating math never raises on bad numbers; these cover the on-court
collaborator, whose failures the blender turns into a base-rating fallback.

Usage:
    from hackstat.exceptions import OnCourtFetchError

    try:
        players = await source.fetch_players("E2024")
    except OnCourtFetchError as e:
        logger.warning("On-court data unavailable: %s", e)
"""

from typing import Optional

from hackstat.normalization.schema import SchemaValidationError


class HackStatError(Exception):
    """Base exception for all hackstat errors."""
    pass


class OnCourtFetchError(HackStatError):
    """
    Error fetching the team-on-court dataset.

    Raised when:
    - No source URL is configured
    - The request fails (network error, timeout)
    - The endpoint answers with an error status
    """

    def __init__(
        self,
        source: str,
        message: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.source = source
        self.original_error = original_error
        msg = f"Error fetching from {source}"
        if message:
            msg += f": {message}"
        if original_error:
            msg += f" (caused by: {type(original_error).__name__}: {original_error})"
        super().__init__(msg)


__all__ = ["HackStatError", "OnCourtFetchError", "SchemaValidationError"]
