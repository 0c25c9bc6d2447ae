"""Logging setup."""

import logging
import os
from typing import Optional


def _resolve_level(name: Optional[str]) -> int:
    level = getattr(logging, (name or "INFO").upper(), None)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(run_id: Optional[str] = None, level: Optional[str] = None) -> None:
    """
    Configure root logging for an application embedding hackstat.

    ``level`` overrides HACKSTAT_LOG_LEVEL. aiohttp's loggers are held at
    WARNING or above so retries do not flood debug output.
    """
    resolved = _resolve_level(level or os.environ.get("HACKSTAT_LOG_LEVEL"))
    parts = ["%(asctime)s", "%(levelname)s"]
    if run_id:
        parts.append(f"[run_id={run_id}]")
    parts.append("%(name)s: %(message)s")
    logging.basicConfig(level=resolved, format=" ".join(parts), force=True)
    logging.getLogger("aiohttp").setLevel(max(resolved, logging.WARNING))
