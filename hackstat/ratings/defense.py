"""Individual defensive rating from stops relative to the team baseline."""

from dataclasses import dataclass, field
from typing import Dict, Optional

from hackstat.constants import (
    DEF_RATING_INDIVIDUAL_WEIGHT,
    EPS,
    FT_TRIP_WEIGHT,
    FTA_POSSESSION_WEIGHT,
    OREB_RECOVERY_FACTOR,
    PER_100,
)
from hackstat.normalization.player import PlayerRow
from hackstat.normalization.team import TeamPerGame
from hackstat.utils.numeric import clamp01, safe_div, squared


@dataclass(frozen=True)
class DefenseResult:
    def_rating: Optional[float]
    stops: float
    stop_pct: float
    team_def_rating: float
    intermediates: Dict[str, float] = field(default_factory=dict)


def compute_individual_defense(
    player: PlayerRow,
    team: TeamPerGame,
) -> DefenseResult:
    """
    Stops and defensive rating.

    The rating is the team baseline moved by DEF_RATING_INDIVIDUAL_WEIGHT of
    the gap to the player's stop-based estimate. It is None when the player
    has no share of opponent possessions to be credited with.
    """
    games_played = max(1.0, player.games_played)
    team_games = max(1.0, team.games)

    mp = max(EPS, player.minutes * games_played)
    drb = player.def_rebounds * games_played
    stl = player.steals * games_played
    blk = player.blocks * games_played
    pf = player.fouls * games_played

    opp_fgm = team.opp.fgm * team_games
    opp_fga = team.opp.fga * team_games
    opp_ftm = team.opp.made_ft * team_games
    opp_fta = team.opp.attempted_ft * team_games
    opp_orb = team.opp.off_rebounds * team_games
    opp_tov = team.opp.turnovers * team_games
    opp_pts = team.opp.points * team_games

    team_drb = team.def_rebounds * team_games
    team_blk = team.blocks * team_games
    team_stl = team.steals * team_games
    team_pf = team.fouls * team_games
    team_mp = max(EPS, team.minutes * team_games)

    opp_fg_pct = safe_div(opp_fgm, opp_fga)
    opp_ft_pct = safe_div(opp_ftm, opp_fta)
    opp_or_pct = clamp01(safe_div(opp_orb, opp_orb + team_drb))

    # Forced-miss weight: how much of a defensive stop the miss is worth vs the rebound
    fm_weight = safe_div(
        opp_fg_pct * (1 - opp_or_pct),
        opp_fg_pct * (1 - opp_or_pct) + opp_or_pct * (1 - opp_fg_pct),
    )
    unrecovered = 1 - OREB_RECOVERY_FACTOR * opp_or_pct

    stop1 = stl + blk * fm_weight * unrecovered + drb * (1 - fm_weight)
    stop2_fg = safe_div(opp_fga - opp_fgm - team_blk, team_mp) * fm_weight * unrecovered * mp
    stop2_to = safe_div(opp_tov - team_stl, team_mp) * mp
    stop2_ft = safe_div(pf, team_pf) * FT_TRIP_WEIGHT * opp_fta * squared(1 - opp_ft_pct)
    stops = stop1 + stop2_fg + stop2_to + stop2_ft

    opp_poss = opp_fga + FTA_POSSESSION_WEIGHT * opp_fta + opp_tov
    # Opponents play the same game length as the team
    possessions_faced = opp_poss * safe_div(mp, team_mp)
    stop_pct = safe_div(stops, possessions_faced)

    opp_scoring_poss = opp_fgm + (1 - squared(1 - opp_ft_pct)) * FT_TRIP_WEIGHT * opp_fta

    team_def_poss = team.def_possessions * team_games
    if team_def_poss > EPS:
        team_def_rating = safe_div(opp_pts, team_def_poss) * PER_100
    else:
        team_def_rating = team.def_rating

    if possessions_faced > EPS:
        individual = PER_100 * safe_div(opp_pts, opp_scoring_poss) * (1 - stop_pct)
        def_rating = team_def_rating + DEF_RATING_INDIVIDUAL_WEIGHT * (individual - team_def_rating)
    else:
        def_rating = None

    return DefenseResult(
        def_rating=def_rating,
        stops=stops,
        stop_pct=stop_pct,
        team_def_rating=team_def_rating,
        intermediates={
            "opp_fg_pct": opp_fg_pct,
            "opp_ft_pct": opp_ft_pct,
            "opp_or_pct": opp_or_pct,
            "fm_weight": fm_weight,
            "stop1": stop1,
            "stop2_fg": stop2_fg,
            "stop2_to": stop2_to,
            "stop2_ft": stop2_ft,
            "opp_poss": opp_poss,
            "opp_scoring_poss": opp_scoring_poss,
        },
    )
