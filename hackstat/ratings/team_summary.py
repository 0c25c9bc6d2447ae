"""Team-level efficiency summary from a normalized per-game record."""

from typing import Any, Dict

from hackstat.normalization.team import normalize_team
from hackstat.utils.numeric import safe_div


def team_efficiency_summary(team: Any) -> Dict[str, float]:
    """Ratings, pace, shooting splits, shot mix and rebounding shares; ratios default to 0."""
    t = normalize_team(team)
    return {
        "points": t.points,
        "opp_points": t.opp.points,
        "off_rating": t.off_rating,
        "def_rating": t.def_rating,
        "net_rating": t.net_rating,
        "pace": t.pace,
        "fg_pct": safe_div(t.fgm, t.fga),
        "two_pt_pct": safe_div(t.made_two, t.attempted_two),
        "three_pt_pct": safe_div(t.made_three, t.attempted_three),
        "ft_pct": safe_div(t.made_ft, t.attempted_ft),
        "opp_fg_pct": safe_div(t.opp.fgm, t.opp.fga),
        "three_pa_rate": safe_div(t.attempted_three, t.fga),
        "ft_rate": safe_div(t.attempted_ft, t.fga),
        "tov_rate": safe_div(t.turnovers, t.off_plays or t.off_possessions),
        "ast_per_fgm": safe_div(t.assists, t.fgm),
        "oreb_pct": safe_div(t.off_rebounds, t.off_rebounds + t.opp.def_rebounds),
        "dreb_pct": safe_div(t.def_rebounds, t.def_rebounds + t.opp.off_rebounds),
    }
