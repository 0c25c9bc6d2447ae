"""Configuration for rating blends and the on-court collaborator."""

from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional
import json
import logging
import os

logger = logging.getLogger(__name__)

ENV_PREFIX = "HACKSTAT_"

# Blend weights (tuning constants, not part of the individual rating method)
_DEFAULT_OFF_BASE_WEIGHT = 0.14   # share of the base IND ORtg kept in the blend
_DEFAULT_DEF_DELTA_WEIGHT = 0.65  # share of the team-on DRtg delta added to base

# On-court dataset source
_DEFAULT_ON_COURT_URL = ""
_DEFAULT_ON_COURT_COMPETITION = "euroleague"
_DEFAULT_MIN_COMPETITION_YEAR = 2000

# Cache TTLs (seconds)
_DEFAULT_ON_COURT_TTL = 60
_DEFAULT_ON_COURT_STALE_TTL = 600

# Fetch policy
_DEFAULT_FETCH_TIMEOUT = 10.0
_DEFAULT_FETCH_ATTEMPTS = 3

# Field name -> environment key suffix, where they differ
_ENV_KEYS = {
    "on_court_competition_prefix": "ON_COURT_COMPETITION",
}


def _env_key(field_name: str) -> str:
    return ENV_PREFIX + _ENV_KEYS.get(field_name, field_name.upper())


def _coerce(value: Any, default: Any, cast: Callable[[Any], Any]) -> Any:
    if value is None or value == "":
        return default
    try:
        return cast(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid config value %r; using %r", value, default)
        return default


def _weight(value: Any) -> float:
    weight = float(value)
    if not 0.0 <= weight <= 1.0:
        raise ValueError(f"blend weight out of range: {weight}")
    return weight


def _positive_int(value: Any) -> int:
    number = int(value)
    if number < 1:
        raise ValueError(f"must be at least 1: {number}")
    return number


def _read_env_file(path: Path) -> Dict[str, str]:
    """KEY=value lines; blank lines, comments and ``export`` prefixes are tolerated."""
    data: Dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = (part.strip() for part in line.split("=", 1))
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        data[key] = value
    return data


def _read_config_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    if path.suffix.lower() != ".json":
        return _read_env_file(path)
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"Config file must hold a JSON object: {path}")
    return {str(key): value for key, value in payload.items() if value is not None}


# Parsers per field; blend weights must stay within [0, 1]
_CASTS: Dict[str, Callable[[Any], Any]] = {
    "off_base_weight": _weight,
    "def_delta_weight": _weight,
    "on_court_url": str,
    "on_court_competition_prefix": str,
    "min_competition_year": int,
    "on_court_ttl": int,
    "on_court_stale_ttl": int,
    "fetch_timeout": float,
    "fetch_attempts": _positive_int,
}


@dataclass
class Config:
    # Blend weights
    off_base_weight: float = _DEFAULT_OFF_BASE_WEIGHT
    def_delta_weight: float = _DEFAULT_DEF_DELTA_WEIGHT

    # On-court source
    on_court_url: str = _DEFAULT_ON_COURT_URL
    on_court_competition_prefix: str = _DEFAULT_ON_COURT_COMPETITION
    min_competition_year: int = _DEFAULT_MIN_COMPETITION_YEAR

    # Cache TTLs
    on_court_ttl: int = _DEFAULT_ON_COURT_TTL
    on_court_stale_ttl: int = _DEFAULT_ON_COURT_STALE_TTL

    # Fetch policy
    fetch_timeout: float = _DEFAULT_FETCH_TIMEOUT
    fetch_attempts: int = _DEFAULT_FETCH_ATTEMPTS

    @property
    def on_court_weight(self) -> float:
        """Weight of the on-court offensive rating in the blend."""
        return 1 - self.off_base_weight

    @classmethod
    def _from_mapping(cls, data: Mapping[str, Any], base: "Config") -> "Config":
        values = {}
        for item in fields(cls):
            current = getattr(base, item.name)
            values[item.name] = _coerce(data.get(_env_key(item.name)), current, _CASTS[item.name])
        return cls(**values)

    @classmethod
    def from_env(cls) -> "Config":
        return cls._from_mapping(os.environ, cls())

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "Config":
        """Environment settings, overridden by a .env-style or JSON file when given."""
        env_config = cls.from_env()
        if not config_path:
            return env_config
        return cls._from_mapping(_read_config_file(Path(config_path)), env_config)

    def to_dict(self) -> Dict[str, str]:
        return {k: str(v) for k, v in asdict(self).items()}
