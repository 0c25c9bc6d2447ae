"""Roster-level ratings tables."""

from typing import Any, Dict, Iterable, List, Optional
import logging

import pandas as pd

from hackstat.config import Config
from hackstat.ingestion.on_court import OnCourtSource
from hackstat.normalization.player import normalize_player
from hackstat.normalization.team import normalize_team
from hackstat.ops.metrics import MetricsRecorder, blend_outcome_counts, get_metrics_recorder
from hackstat.ratings.blend import blend_with_dataset, load_on_court_entries
from hackstat.ratings.composer import compute_individual_ratings

logger = logging.getLogger(__name__)

ROSTER_COLUMNS = [
    "player",
    "games",
    "minutes",
    "off_rating",
    "def_rating",
    "net_rating",
    "pts_gen",
    "poss_tot",
    "stops",
    "stop_pct",
]

BLENDED_COLUMNS = [
    "player",
    "base_off_rating",
    "base_def_rating",
    "base_net_rating",
    "team_on_off_rating",
    "team_on_def_rating",
    "final_off_rating",
    "final_def_rating",
    "final_net_rating",
    "match_strategy",
]


def _frame(rows: List[Dict], columns: List[str], sort_by: str) -> pd.DataFrame:
    df = pd.DataFrame(rows, columns=columns)
    numeric = [col for col in columns if col not in ("player", "match_strategy")]
    df = df.astype({col: float for col in numeric})
    return df.sort_values(sort_by, ascending=False, na_position="last", kind="mergesort").reset_index(drop=True)


def rate_roster(players: Iterable[Any], team: Any) -> pd.DataFrame:
    """Individual ratings for every player of one team, best net rating first."""
    team_pg = normalize_team(team)
    rows = []
    for raw in players:
        player = normalize_player(raw)
        result = compute_individual_ratings(player, team_pg)
        rows.append({
            "player": player.display_name,
            "games": player.games_played,
            "minutes": player.minutes,
            "off_rating": result.off_rating,
            "def_rating": result.def_rating,
            "net_rating": result.net_rating,
            "pts_gen": result.offense.pts_gen,
            "poss_tot": result.offense.poss_tot,
            "stops": result.defense.stops,
            "stop_pct": result.defense.stop_pct,
        })
    logger.info("Rated %d players.", len(rows))
    return _frame(rows, ROSTER_COLUMNS, "net_rating")


async def rate_roster_blended(
    players: Iterable[Any],
    team: Any,
    season_code: Any,
    source: Optional[OnCourtSource],
    config: Optional[Config] = None,
    metrics: Optional[MetricsRecorder] = None,
) -> pd.DataFrame:
    """Blended ratings for a roster; the on-court dataset is loaded once."""
    team_pg = normalize_team(team)
    metrics = metrics or get_metrics_recorder()
    before = blend_outcome_counts(metrics)
    entries = await load_on_court_entries(source, season_code)

    rows = []
    for raw in players:
        player = normalize_player(raw)
        base = compute_individual_ratings(player, team_pg)
        blended = blend_with_dataset(base, player, entries, config, metrics)
        team_on = blended.team_on
        rows.append({
            "player": player.display_name,
            "base_off_rating": base.off_rating,
            "base_def_rating": base.def_rating,
            "base_net_rating": base.net_rating,
            "team_on_off_rating": team_on.off_rating if team_on else None,
            "team_on_def_rating": team_on.def_rating if team_on else None,
            "final_off_rating": blended.final.off_rating,
            "final_def_rating": blended.final.def_rating,
            "final_net_rating": blended.final.net_rating,
            "match_strategy": blended.match_strategy,
        })

    after = blend_outcome_counts(metrics)
    outcomes = {key: after[key] - before[key] for key in after if after[key] != before[key]}
    logger.info("Blended %d players: %s", len(rows), outcomes)
    return _frame(rows, BLENDED_COLUMNS, "final_net_rating")
