"""Team-on-court dataset sources.

The blender only depends on ``OnCourtSource.fetch_players``. The HTTP
source talks to a best-players style endpoint with aiohttp; the cached
wrapper adds TTL caching with a stale-on-error window on top of any
source.

Usage:
    from hackstat.config import Config
    from hackstat.ingestion.on_court import CachedOnCourtSource, HttpOnCourtSource
    from hackstat.storage import MemoryCache

    config = Config.from_env()
    source = CachedOnCourtSource.from_config(
        HttpOnCourtSource.from_config(config), MemoryCache(), config
    )
    players = await source.fetch_players("E2024")
"""

from datetime import date
from typing import Any, Callable, Dict, List, Mapping, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit
import asyncio
import logging
import re
import time

import aiohttp

from hackstat.config import Config
from hackstat.exceptions import OnCourtFetchError
from hackstat.normalization.schema import SchemaValidationError, validate_table
from hackstat.ops.metrics import MetricsRecorder, get_metrics_recorder
from hackstat.storage.cache import CacheStore

logger = logging.getLogger(__name__)

SOURCE_NAME = "on_court"

_SEASON_PARAMS = {"seasoncode", "season", "SeasonCode"}
_YEAR_PATTERN = re.compile(r"(20\d{2})")


def season_year(season_code: Any) -> Optional[int]:
    """Competition year of a season code such as "E2024", a date or an int."""
    if season_code is None or isinstance(season_code, bool):
        return None
    if isinstance(season_code, date):
        return season_code.year
    if isinstance(season_code, int):
        return season_code
    match = _YEAR_PATTERN.search(str(season_code).strip())
    return int(match.group(1)) if match else None


def on_court_cache_key(season_code: Any) -> str:
    year = season_year(season_code)
    return f"{SOURCE_NAME}:{year if year is not None else '__current__'}"


def parse_on_court_payload(payload: Any) -> List[Dict]:
    """Extract the ``players`` table, rejecting payloads that drifted in shape."""
    if not isinstance(payload, Mapping):
        raise SchemaValidationError("on-court payload must be an object")
    players = payload.get("players")
    validate_table("on_court_players", players)
    return [dict(row) for row in players]


class OnCourtSource:
    async def fetch_players(self, season_code: Any) -> List[Dict]:
        raise NotImplementedError


class HttpOnCourtSource(OnCourtSource):
    """
    Fetch the on-court dataset over HTTP.

    Network errors, 429 and 5xx responses are retried with exponential
    backoff; other 4xx responses fail immediately.
    """

    USER_AGENT = "hackstat/on-court"

    def __init__(
        self,
        url: str,
        competition_prefix: str = "euroleague",
        min_year: int = 2000,
        timeout: float = 10.0,
        attempts: int = 3,
        backoff_base: float = 0.4,
        session: Optional[aiohttp.ClientSession] = None,
        metrics: Optional[MetricsRecorder] = None,
    ) -> None:
        self.url = url
        self.competition_prefix = competition_prefix
        self.min_year = min_year
        self.timeout = timeout
        self.attempts = max(1, attempts)
        self.backoff_base = backoff_base
        self._session = session
        self._metrics = metrics or get_metrics_recorder()

    @classmethod
    def from_config(
        cls,
        config: Config,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> "HttpOnCourtSource":
        return cls(
            url=config.on_court_url,
            competition_prefix=config.on_court_competition_prefix,
            min_year=config.min_competition_year,
            timeout=config.fetch_timeout,
            attempts=config.fetch_attempts,
            session=session,
        )

    def build_url(self, season_code: Any) -> str:
        parts = urlsplit(self.url)
        query = [
            (key, value)
            for key, value in parse_qsl(parts.query, keep_blank_values=True)
            if key not in _SEASON_PARAMS
        ]
        year = season_year(season_code)
        if year is not None:
            query = [(key, value) for key, value in query if key != "competitionId"]
            query.append(("competitionId", f"{self.competition_prefix}-{max(self.min_year, year)}"))
        return urlunsplit(parts._replace(query=urlencode(query)))

    async def fetch_players(self, season_code: Any) -> List[Dict]:
        if not self.url:
            raise OnCourtFetchError(SOURCE_NAME, "no on-court URL configured")
        url = self.build_url(season_code)
        started = time.monotonic()
        try:
            if self._session is not None:
                payload = await self._fetch_json(self._session, url)
            else:
                async with aiohttp.ClientSession() as session:
                    payload = await self._fetch_json(session, url)
        finally:
            self._metrics.timing("on_court.fetch_ms", (time.monotonic() - started) * 1000)
        players = parse_on_court_payload(payload)
        logger.info("Fetched on-court data for %d players.", len(players))
        return players

    async def _fetch_json(self, session, url: str) -> Any:
        headers = {"accept": "application/json", "user-agent": self.USER_AGENT}
        last_error: Optional[Exception] = None

        for attempt in range(self.attempts):
            try:
                async with session.get(
                    url,
                    headers=headers,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    if response.status < 400:
                        try:
                            return await response.json(content_type=None)
                        except ValueError as exc:
                            raise SchemaValidationError(f"invalid JSON from {url}") from exc
                    error = OnCourtFetchError(SOURCE_NAME, f"HTTP {response.status} for {url}")
                    if response.status < 500 and response.status != 429:
                        raise error
                    last_error = error
            except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
                last_error = exc
                logger.warning("On-court fetch attempt %d failed: %s", attempt + 1, exc)

            if attempt < self.attempts - 1:
                await asyncio.sleep(self.backoff_base * (2 ** attempt))

        raise OnCourtFetchError(
            SOURCE_NAME,
            f"giving up after {self.attempts} attempts",
            original_error=last_error,
        )


class CachedOnCourtSource(OnCourtSource):
    """
    TTL cache in front of another source.

    Entries younger than ``ttl`` are served without fetching. When a refresh
    fails, an entry younger than ``stale_ttl`` is served instead of the error.
    """

    def __init__(
        self,
        source: OnCourtSource,
        cache: CacheStore,
        ttl: int = 60,
        stale_ttl: int = 600,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._source = source
        self._cache = cache
        self._ttl = ttl
        self._stale_ttl = max(ttl, stale_ttl)
        self._clock = clock

    @classmethod
    def from_config(
        cls,
        source: OnCourtSource,
        cache: CacheStore,
        config: Config,
        clock: Callable[[], float] = time.time,
    ) -> "CachedOnCourtSource":
        return cls(
            source,
            cache,
            ttl=config.on_court_ttl,
            stale_ttl=config.on_court_stale_ttl,
            clock=clock,
        )

    async def fetch_players(self, season_code: Any) -> List[Dict]:
        key = on_court_cache_key(season_code)
        entry = self._cache.get_entry(key)
        now = self._clock()
        if entry is not None and entry.age(now) < self._ttl:
            return entry.value

        try:
            players = await self._source.fetch_players(season_code)
        except Exception as exc:
            if entry is not None and entry.age(now) < self._stale_ttl:
                logger.warning("Using stale on-court cache for %s (%s)", key, exc)
                return entry.value
            raise

        self._cache.set(key, players, self._stale_ttl)
        return players
