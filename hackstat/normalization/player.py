"""Normalize a raw player stats row into a canonical per-game record."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping

from hackstat.utils.numeric import num


@dataclass(frozen=True)
class PlayerRow:
    """Player per-game aggregate plus the identity used for on-court matching."""
    games_played: float = 1.0
    minutes: float = 0.0
    points: float = 0.0
    two_made: float = 0.0
    two_attempted: float = 0.0
    three_made: float = 0.0
    three_attempted: float = 0.0
    ft_made: float = 0.0
    ft_attempted: float = 0.0
    assists: float = 0.0
    off_rebounds: float = 0.0
    def_rebounds: float = 0.0
    turnovers: float = 0.0
    steals: float = 0.0
    blocks: float = 0.0
    fouls: float = 0.0
    name: str = ""
    first_name: str = ""
    last_name: str = ""
    code: str = ""
    slug: str = ""

    @property
    def fgm(self) -> float:
        return self.two_made + self.three_made

    @property
    def fga(self) -> float:
        return self.two_attempted + self.three_attempted

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _text(*values: Any) -> str:
    for value in values:
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return ""


def normalize_player(raw: Any) -> PlayerRow:
    """
    Build a PlayerRow from a competition player-stats row.

    Stat fields are read from the top level; identity comes from a nested
    ``player`` mapping with flat ``playerName``/``playerCode``/``playerSlug``
    fallbacks. ``gamesPlayed`` is floored at 1.
    """
    if isinstance(raw, PlayerRow):
        return raw
    raw = raw if isinstance(raw, Mapping) else {}
    person = raw.get("player")
    person = person if isinstance(person, Mapping) else {}

    return PlayerRow(
        games_played=max(1.0, num(raw.get("gamesPlayed"))),
        minutes=num(raw.get("minutesPlayed")),
        points=num(raw.get("pointsScored")),
        two_made=num(raw.get("twoPointersMade")),
        two_attempted=num(raw.get("twoPointersAttempted")),
        three_made=num(raw.get("threePointersMade")),
        three_attempted=num(raw.get("threePointersAttempted")),
        ft_made=num(raw.get("freeThrowsMade")),
        ft_attempted=num(raw.get("freeThrowsAttempted")),
        assists=num(raw.get("assists")),
        off_rebounds=num(raw.get("offensiveRebounds")),
        def_rebounds=num(raw.get("defensiveRebounds")),
        turnovers=num(raw.get("turnovers")),
        steals=num(raw.get("steals")),
        blocks=num(raw.get("blocks")),
        fouls=num(raw.get("foulsCommited")),
        name=_text(person.get("name"), raw.get("playerName")),
        first_name=_text(person.get("firstName"), person.get("first_name")),
        last_name=_text(person.get("lastName"), person.get("last_name")),
        code=_text(person.get("code"), raw.get("playerCode")),
        slug=_text(person.get("slug"), raw.get("playerSlug")),
    )
