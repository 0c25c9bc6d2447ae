"""Engine entry point: offense and defense combined into net rating."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from hackstat.normalization.player import PlayerRow, normalize_player
from hackstat.normalization.team import TeamPerGame, normalize_team
from hackstat.ratings.defense import DefenseResult, compute_individual_defense
from hackstat.ratings.factors import compute_team_factors
from hackstat.ratings.offense import OffenseResult, compute_individual_offense


@dataclass(frozen=True)
class RatingResult:
    off_rating: Optional[float]
    def_rating: Optional[float]
    net_rating: Optional[float]
    offense: OffenseResult
    defense: DefenseResult
    team: TeamPerGame

    @property
    def intermediates(self) -> Dict[str, float]:
        merged = dict(self.offense.intermediates)
        merged.update(self.defense.intermediates)
        merged.update({
            "pts_gen": self.offense.pts_gen,
            "poss_tot": self.offense.poss_tot,
            "stops": self.defense.stops,
            "stop_pct": self.defense.stop_pct,
            "team_def_rating": self.defense.team_def_rating,
        })
        return merged

    def to_dict(self) -> Dict[str, Any]:
        return {
            "off_rating": self.off_rating,
            "def_rating": self.def_rating,
            "net_rating": self.net_rating,
            "intermediates": self.intermediates,
            "team": self.team.to_dict(),
        }


def net_rating(off_rating: Optional[float], def_rating: Optional[float]) -> Optional[float]:
    if off_rating is None or def_rating is None:
        return None
    return off_rating - def_rating


def compute_individual_ratings(player_row: Any, team: Any) -> RatingResult:
    """
    Individual offensive, defensive and net rating per 100 possessions.

    ``player_row`` and ``team`` may be raw stats mappings or already
    normalized records. Pure: identical inputs give identical results.
    """
    player = normalize_player(player_row)
    team_pg = normalize_team(team)
    factors = compute_team_factors(team_pg)

    offense = compute_individual_offense(player, team_pg, factors)
    defense = compute_individual_defense(player, team_pg)

    return RatingResult(
        off_rating=offense.off_rating,
        def_rating=defense.def_rating,
        net_rating=net_rating(offense.off_rating, defense.def_rating),
        offense=offense,
        defense=defense,
        team=team_pg,
    )
