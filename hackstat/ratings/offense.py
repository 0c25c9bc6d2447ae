"""Individual offensive rating: points produced per 100 individual possessions."""

from dataclasses import dataclass, field
from typing import Dict, Optional

from hackstat.constants import (
    ASSIST_CREDIT_SHARE,
    EPS,
    FT_TRIP_WEIGHT,
    OREB_RECOVERY_FACTOR,
    PER_100,
    PLAYERS_ON_COURT,
    QAST_MINUTES_SCALE,
)
from hackstat.normalization.player import PlayerRow
from hackstat.normalization.team import TeamPerGame
from hackstat.ratings.factors import TeamFactors, compute_team_factors, team_scoring_possessions
from hackstat.utils.numeric import safe_div, squared


@dataclass(frozen=True)
class OffenseResult:
    off_rating: Optional[float]
    pts_gen: float
    poss_tot: float
    intermediates: Dict[str, float] = field(default_factory=dict)


def assist_quality(
    share_minutes: float,
    minutes: float,
    assists: float,
    fgm: float,
    team_assists: float,
    team_fgm: float,
    team_minutes: float,
) -> float:
    """
    qAst: estimated share of the player's made shots that were assisted.

    Blends a minutes-share estimate with a teammate-rate estimate, weighted
    by ``share_minutes``; each ratio falls back to 0 on an empty denominator.
    """
    by_share = QAST_MINUTES_SCALE * safe_div(team_assists - assists, team_fgm)
    on_court = minutes * PLAYERS_ON_COURT
    by_rate = safe_div(
        safe_div(team_assists, team_minutes) * on_court - assists,
        safe_div(team_fgm, team_minutes) * on_court - fgm,
    )
    return share_minutes * by_share + (1 - share_minutes) * by_rate


def compute_individual_offense(
    player: PlayerRow,
    team: TeamPerGame,
    factors: Optional[TeamFactors] = None,
) -> OffenseResult:
    """Points generated and possessions used, both as season totals."""
    if factors is None:
        factors = compute_team_factors(team)

    games_played = max(1.0, player.games_played)
    team_games = max(1.0, team.games)

    mp = player.minutes * games_played
    pts = player.points * games_played
    fgm = player.fgm * games_played
    fga = player.fga * games_played
    fg3m = player.three_made * games_played
    ftm = player.ft_made * games_played
    fta = player.ft_attempted * games_played
    ast = player.assists * games_played
    orb = player.off_rebounds * games_played
    tov = player.turnovers * games_played

    team_ast = team.assists * team_games
    team_fgm = team.fgm * team_games
    team_3pm = team.made_three * team_games
    team_pts = team.points * team_games
    team_ftm = team.made_ft * team_games
    team_fta = team.attempted_ft * team_games
    team_mp = max(EPS, team.minutes * team_games)

    share_minutes = safe_div(PLAYERS_ON_COURT * mp, team_mp)
    q_ast = assist_quality(share_minutes, mp, ast, fgm, team_ast, team_fgm, team_mp)

    # Share of the player's own baskets credited to the shooter rather than a passer
    own_fg_share = 1 - 0.5 * safe_div(pts - ftm, 2 * fga) * q_ast

    pts_gen_fg = 2 * (fgm + 0.5 * fg3m) * own_fg_share

    # Teammate baskets assisted by the player, 3s weighted by their extra point
    assist_fg_weight = safe_div(
        (team_fgm - fgm) + 0.5 * (team_3pm - fg3m),
        team_fgm - fgm,
        1.0,
    )
    assist_pts_factor = safe_div(
        (team_pts - team_ftm) - (pts - ftm),
        2 * (team_fgm - fgm),
    )
    pts_gen_ast = 2 * assist_fg_weight * ASSIST_CREDIT_SHARE * assist_pts_factor * ast

    scoring_poss_fg = fgm * own_fg_share
    scoring_poss_ast = ASSIST_CREDIT_SHARE * assist_pts_factor * ast

    ft_pct = safe_div(ftm, fta)
    scoring_poss_ft = (1 - squared(1 - ft_pct)) * FT_TRIP_WEIGHT * fta
    scoring_poss_or = orb * factors.or_weight * factors.play_pct

    fgx_poss = (fga - fgm) * (1 - OREB_RECOVERY_FACTOR * factors.or_pct)
    ftx_poss = squared(1 - ft_pct) * FT_TRIP_WEIGHT * fta

    team_pts_per_scoring_poss = safe_div(
        team_pts,
        team_scoring_possessions(team_fgm, team_ftm, team_fta),
    )
    pts_gen_or = orb * factors.or_weight * factors.play_pct * team_pts_per_scoring_poss

    a = factors.offense_scale
    pts_gen = (pts_gen_fg + pts_gen_ast + ftm) * a + pts_gen_or
    poss_tot = (
        (scoring_poss_fg + scoring_poss_ast + scoring_poss_ft) * a
        + scoring_poss_or
        + fgx_poss
        + ftx_poss
        + tov
    )

    off_rating = (pts_gen / poss_tot) * PER_100 if poss_tot > EPS else None

    return OffenseResult(
        off_rating=off_rating,
        pts_gen=pts_gen,
        poss_tot=poss_tot,
        intermediates={
            "share_minutes": share_minutes,
            "q_ast": q_ast,
            "pts_gen_fg": pts_gen_fg,
            "pts_gen_ast": pts_gen_ast,
            "pts_gen_or": pts_gen_or,
            "scoring_poss_fg": scoring_poss_fg,
            "scoring_poss_ast": scoring_poss_ast,
            "scoring_poss_ft": scoring_poss_ft,
            "scoring_poss_or": scoring_poss_or,
            "fgx_poss": fgx_poss,
            "ftx_poss": ftx_poss,
            "offense_scale": a,
            "team_scoring_poss": factors.scoring_poss,
            "team_play_pct": factors.play_pct,
            "team_or_pct": factors.or_pct,
            "team_or_weight": factors.or_weight,
        },
    )
