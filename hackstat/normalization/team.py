"""Normalize a raw clubs-stats team entry into a canonical per-game record."""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Mapping, Optional

from hackstat.constants import (
    DEFAULT_GAME_MINUTES,
    MIN_TEAM_MINUTES,
    PER_100,
    PLAYERS_ON_COURT,
)
from hackstat.utils.numeric import clamp01, num, safe_div


@dataclass(frozen=True)
class OpponentStats:
    """Opponent per-game shooting, rebounding and turnover context."""
    made_two: float = 0.0
    attempted_two: float = 0.0
    made_three: float = 0.0
    attempted_three: float = 0.0
    made_ft: float = 0.0
    attempted_ft: float = 0.0
    off_rebounds: float = 0.0
    def_rebounds: float = 0.0
    turnovers: float = 0.0

    @property
    def fgm(self) -> float:
        return self.made_two + self.made_three

    @property
    def fga(self) -> float:
        return self.attempted_two + self.attempted_three

    @property
    def points(self) -> float:
        return 2 * self.made_two + 3 * self.made_three + self.made_ft


@dataclass(frozen=True)
class TeamPerGame:
    """
    Team per-game aggregate.

    All counting fields are per-game rates. Downstream stages rebuild season
    totals by multiplying with ``games``. ``minutes`` is team minutes per game
    (five players on the floor), never below MIN_TEAM_MINUTES.
    """
    games: float = 1.0
    minutes: float = MIN_TEAM_MINUTES
    made_two: float = 0.0
    attempted_two: float = 0.0
    made_three: float = 0.0
    attempted_three: float = 0.0
    made_ft: float = 0.0
    attempted_ft: float = 0.0
    off_rebounds: float = 0.0
    def_rebounds: float = 0.0
    assists: float = 0.0
    steals: float = 0.0
    blocks: float = 0.0
    turnovers: float = 0.0
    fouls: float = 0.0
    off_possessions: float = 0.0
    def_possessions: float = 0.0
    off_plays: float = 0.0
    opp: OpponentStats = field(default_factory=OpponentStats)

    @property
    def fgm(self) -> float:
        return self.made_two + self.made_three

    @property
    def fga(self) -> float:
        return self.attempted_two + self.attempted_three

    @property
    def points(self) -> float:
        return 2 * self.made_two + 3 * self.made_three + self.made_ft

    @property
    def or_pct(self) -> float:
        """Offensive rebound share of available rebounds, within [0, 1]."""
        return clamp01(safe_div(self.off_rebounds, self.off_rebounds + self.opp.def_rebounds))

    @property
    def off_rating(self) -> float:
        return safe_div(self.points, self.off_possessions) * PER_100

    @property
    def def_rating(self) -> float:
        """Provisional team defensive rating from per-game values."""
        return safe_div(self.opp.points, self.def_possessions) * PER_100

    @property
    def net_rating(self) -> float:
        return self.off_rating - self.def_rating

    @property
    def pace(self) -> float:
        """Possessions per game, averaged over both ends."""
        return (self.off_possessions + self.def_possessions) / 2

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["opp"]["fgm"] = self.opp.fgm
        payload["opp"]["fga"] = self.opp.fga
        payload["opp"]["points"] = self.opp.points
        payload.update({
            "fgm": self.fgm,
            "fga": self.fga,
            "points": self.points,
            "or_pct": self.or_pct,
            "off_rating": self.off_rating,
            "def_rating": self.def_rating,
            "net_rating": self.net_rating,
            "pace": self.pace,
        })
        return payload


def team_minutes_per_game(seconds_played: Any, games: float) -> float:
    """Estimate team minutes per game, preferring recorded seconds played."""
    seconds = num(seconds_played)
    if seconds > 0:
        minutes_per_game = seconds / 60 / max(1.0, games)
    else:
        minutes_per_game = DEFAULT_GAME_MINUTES
    return max(MIN_TEAM_MINUTES, minutes_per_game * PLAYERS_ON_COURT)


def _opponent_from(raw: Mapping, prefixed: bool) -> OpponentStats:
    def pick(key: str) -> float:
        if prefixed:
            key = "opp" + key[0].upper() + key[1:]
        return num(raw.get(key))

    return OpponentStats(
        made_two=pick("madeTwo"),
        attempted_two=pick("attemptedTwo"),
        made_three=pick("madeThree"),
        attempted_three=pick("attemptedThree"),
        made_ft=pick("madeFt"),
        attempted_ft=pick("attemptedFt"),
        off_rebounds=pick("offRebounds"),
        def_rebounds=pick("defRebounds"),
        turnovers=pick("turnovers"),
    )


def normalize_team(raw: Any, opponent: Optional[Mapping] = None) -> TeamPerGame:
    """
    Build a TeamPerGame from a clubs-stats team entry.

    Opponent fields come from ``opponent`` when given (same unprefixed keys),
    otherwise from the ``opp``-prefixed keys of ``raw``. Missing or
    non-numeric fields become 0.
    """
    if isinstance(raw, TeamPerGame):
        return raw
    raw = raw if isinstance(raw, Mapping) else {}

    games = max(1.0, num(raw.get("games")))
    if isinstance(opponent, Mapping):
        opp = _opponent_from(opponent, prefixed=False)
    else:
        opp = _opponent_from(raw, prefixed=True)

    return TeamPerGame(
        games=games,
        minutes=team_minutes_per_game(raw.get("secondsPlayed"), games),
        made_two=num(raw.get("madeTwo")),
        attempted_two=num(raw.get("attemptedTwo")),
        made_three=num(raw.get("madeThree")),
        attempted_three=num(raw.get("attemptedThree")),
        made_ft=num(raw.get("madeFt")),
        attempted_ft=num(raw.get("attemptedFt")),
        off_rebounds=num(raw.get("offRebounds")),
        def_rebounds=num(raw.get("defRebounds")),
        assists=num(raw.get("assists")),
        steals=num(raw.get("steals")),
        blocks=num(raw.get("blocks")),
        turnovers=num(raw.get("turnovers")),
        fouls=num(raw.get("fouls")),
        off_possessions=num(raw.get("offPossessions")),
        def_possessions=num(raw.get("defPossessions")),
        off_plays=num(raw.get("offPlays")),
        opp=opp,
    )
