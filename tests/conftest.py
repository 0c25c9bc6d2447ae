"""
Pytest configuration and shared fixtures for rating engine tests.
"""

import pytest

from hackstat.ingestion.on_court import OnCourtSource
from hackstat.ops.metrics import InMemoryMetricsRecorder


class FakeOnCourtSource(OnCourtSource):
    """On-court source returning fixture players or raising a preset error."""

    def __init__(self, players=None, error=None):
        self.players = players if players is not None else []
        self.error = error
        self.calls = []

    async def fetch_players(self, season_code):
        self.calls.append(season_code)
        if self.error is not None:
            raise self.error
        return self.players


class FakeResponse:
    def __init__(self, status=200, payload=None):
        self.status = status
        self._payload = payload

    async def json(self, content_type=None):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Stands in for aiohttp.ClientSession; items are responses or exceptions to raise."""

    def __init__(self, items):
        self._items = list(items)
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        item = self._items.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def raw_team():
    """One-game team bag: 79 points on 75 possessions, 73 allowed on 75."""
    return {
        "games": 1,
        "secondsPlayed": 2400,
        "madeTwo": 20,
        "attemptedTwo": 40,
        "madeThree": 8,
        "attemptedThree": 24,
        "madeFt": 15,
        "attemptedFt": 20,
        "offRebounds": 10,
        "defRebounds": 25,
        "assists": 16,
        "steals": 7,
        "blocks": 3,
        "turnovers": 13,
        "fouls": 20,
        "offPossessions": 75,
        "defPossessions": 75,
        "offPlays": 90,
        "oppMadeTwo": 19,
        "oppAttemptedTwo": 40,
        "oppMadeThree": 7,
        "oppAttemptedThree": 22,
        "oppMadeFt": 14,
        "oppAttemptedFt": 19,
        "oppOffRebounds": 9,
        "oppDefRebounds": 24,
        "oppTurnovers": 12,
    }


@pytest.fixture
def raw_player():
    return {
        "player": {"name": "DOE, JANE"},
        "gamesPlayed": 1,
        "minutesPlayed": 30,
        "pointsScored": 20,
        "twoPointersMade": 5,
        "twoPointersAttempted": 10,
        "threePointersMade": 2,
        "threePointersAttempted": 5,
        "freeThrowsMade": 4,
        "freeThrowsAttempted": 5,
        "assists": 3,
        "turnovers": 2,
    }


@pytest.fixture
def raw_defender():
    return {
        "player": {"name": "SMITH, ALEX", "code": "P007"},
        "gamesPlayed": 1,
        "minutesPlayed": 30,
        "pointsScored": 6,
        "twoPointersMade": 3,
        "twoPointersAttempted": 6,
        "assists": 1,
        "offensiveRebounds": 2,
        "defensiveRebounds": 5,
        "turnovers": 1,
        "steals": 2,
        "blocks": 1,
        "foulsCommited": 3,
    }


@pytest.fixture
def on_court_entries():
    return [
        {
            "id": "P001",
            "firstname": "Jane",
            "surname": "Doe",
            "gamesPlayed": 2,
            "teamPoints": 110,
            "oppPoints": 95,
            "teamPossessionsNet": 200,
            "oppPossessionsNet": 190,
        },
        {
            "id": "P002",
            "firstname": "Chris",
            "surname": "Park",
            "gamesPlayed": 0,
            "teamPoints": 80,
            "oppPoints": 82,
            "teamPossessionsNet": 0,
            "oppPossessionsNet": 0,
        },
    ]


@pytest.fixture
def make_source():
    return FakeOnCourtSource


@pytest.fixture
def make_session():
    return FakeSession


@pytest.fixture
def make_response():
    return FakeResponse


@pytest.fixture
def metrics():
    return InMemoryMetricsRecorder()
