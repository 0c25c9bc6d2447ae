"""Team offensive factors used to apportion possession credit to players."""

from dataclasses import asdict, dataclass
from typing import Dict

from hackstat.constants import FT_TRIP_WEIGHT, FTA_POSSESSION_WEIGHT
from hackstat.normalization.team import TeamPerGame
from hackstat.utils.numeric import clamp01, safe_div, squared


@dataclass(frozen=True)
class TeamFactors:
    ft_pct: float
    scoring_poss: float
    total_poss: float
    play_pct: float
    or_pct: float
    or_weight: float
    offense_scale: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def team_scoring_possessions(fgm: float, ftm: float, fta: float) -> float:
    """Made field goals plus free-throw trips that produced at least one point."""
    ft_pct = safe_div(ftm, fta)
    return fgm + (1 - squared(1 - ft_pct)) * fta * FT_TRIP_WEIGHT


def compute_team_factors(team: TeamPerGame) -> TeamFactors:
    """
    Season-total team factors.

    ``offense_scale`` is the share of scoring credit left after offensive
    rebounds take theirs; it is 1 when the team has no scoring possessions.
    """
    games = max(1.0, team.games)
    ftm = team.made_ft * games
    fta = team.attempted_ft * games
    fgm = team.fgm * games
    fga = team.fga * games
    tov = team.turnovers * games
    orb = team.off_rebounds * games

    ft_pct = safe_div(ftm, fta)
    scoring_poss = team_scoring_possessions(fgm, ftm, fta)
    total_poss = fga + FTA_POSSESSION_WEIGHT * fta + tov
    play_pct = safe_div(scoring_poss, total_poss)
    or_pct = clamp01(team.or_pct)

    weight_num = (1 - or_pct) * play_pct
    weight_den = weight_num + (1 - play_pct) * or_pct
    or_weight = safe_div(weight_num, weight_den)

    return TeamFactors(
        ft_pct=ft_pct,
        scoring_poss=scoring_poss,
        total_poss=total_poss,
        play_pct=play_pct,
        or_pct=or_pct,
        or_weight=or_weight,
        offense_scale=1 - safe_div(orb, scoring_poss) * or_weight * play_pct,
    )
