"""Blend individual ratings with team efficiency while the player is on court."""

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, List, Optional
import asyncio
import logging

import aiohttp

from hackstat.config import Config
from hackstat.constants import PER_100
from hackstat.exceptions import OnCourtFetchError, SchemaValidationError
from hackstat.ingestion.on_court import OnCourtSource
from hackstat.normalization.name_utils import find_on_court_entry
from hackstat.normalization.player import PlayerRow, normalize_player
from hackstat.normalization.team import TeamPerGame
from hackstat.ops.metrics import MetricsRecorder, get_metrics_recorder
from hackstat.ratings.composer import RatingResult, compute_individual_ratings, net_rating
from hackstat.utils.numeric import optional_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TeamOnRatings:
    """Team efficiency accumulated while one player was on the court."""
    off_rating: float
    def_rating: float
    net_rating: float
    games: Optional[float] = None
    team_points: Optional[float] = None
    opp_points: Optional[float] = None
    team_possessions: Optional[float] = None
    opp_possessions: Optional[float] = None


@dataclass(frozen=True)
class BlendedRatingResult:
    base: RatingResult
    final: RatingResult
    team_on: Optional[TeamOnRatings] = None
    match_strategy: Optional[str] = None

    @property
    def blended(self) -> bool:
        return self.final is not self.base

    def to_dict(self) -> Dict[str, Any]:
        return {
            "base": self.base.to_dict(),
            "final": {
                "off_rating": self.final.off_rating,
                "def_rating": self.final.def_rating,
                "net_rating": self.final.net_rating,
            },
            "team_on": None if self.team_on is None else asdict(self.team_on),
            "match_strategy": self.match_strategy,
        }


def possessions_per_game(total_possessions: Any, games: Any) -> Optional[float]:
    poss = optional_number(total_possessions)
    g = optional_number(games)
    if poss is None or g is None or g <= 0:
        return None
    return poss / g


def team_rating(points_per_game: Any, possessions_per_game: Any) -> Optional[float]:
    pts = optional_number(points_per_game)
    poss = optional_number(possessions_per_game)
    if pts is None or poss is None or poss <= 0:
        return None
    return pts / poss * PER_100


def build_team_on_ratings(entry: Optional[Dict]) -> Optional[TeamOnRatings]:
    if not entry:
        return None
    games = optional_number(entry.get("gamesPlayed"))
    team_points = optional_number(entry.get("teamPoints"))
    opp_points = optional_number(entry.get("oppPoints"))
    team_poss = possessions_per_game(entry.get("teamPossessionsNet"), games)
    opp_poss = possessions_per_game(entry.get("oppPossessionsNet"), games)

    off = team_rating(team_points, team_poss)
    defense = team_rating(opp_points, opp_poss)
    if off is None or defense is None:
        return None
    return TeamOnRatings(
        off_rating=off,
        def_rating=defense,
        net_rating=off - defense,
        games=games,
        team_points=team_points,
        opp_points=opp_points,
        team_possessions=team_poss,
        opp_possessions=opp_poss,
    )


def base_team_def_rating(team: Optional[TeamPerGame]) -> Optional[float]:
    """Team DRtg for the blend baseline; None (not 0) without defensive possessions."""
    if team is None:
        return None
    return team_rating(team.opp.points, team.def_possessions)


def blend_offense(
    base_off: Optional[float],
    team_on_off: Optional[float],
    off_base_weight: float,
) -> Optional[float]:
    if base_off is None or team_on_off is None:
        return base_off
    return base_off * off_base_weight + team_on_off * (1 - off_base_weight)


def blend_defense(
    base_def: Optional[float],
    team_on_def: Optional[float],
    base_team_def: Optional[float],
    def_delta_weight: float,
) -> Optional[float]:
    if base_def is None or team_on_def is None or base_team_def is None:
        return base_def
    return base_def + def_delta_weight * (team_on_def - base_team_def)


def blend_ratings(
    base: RatingResult,
    team_on: TeamOnRatings,
    config: Optional[Config] = None,
) -> RatingResult:
    config = config or Config()
    off = blend_offense(base.off_rating, team_on.off_rating, config.off_base_weight)
    defense = blend_defense(
        base.def_rating,
        team_on.def_rating,
        base_team_def_rating(base.team),
        config.def_delta_weight,
    )
    net = net_rating(off, defense)
    return replace(
        base,
        off_rating=off,
        def_rating=defense,
        net_rating=net if net is not None else base.net_rating,
    )


def blend_with_dataset(
    base: RatingResult,
    player: PlayerRow,
    entries: Optional[List[Dict]],
    config: Optional[Config] = None,
    metrics: Optional[MetricsRecorder] = None,
) -> BlendedRatingResult:
    """
    Blend ``base`` with the player's entry in an already-loaded dataset.

    ``entries`` of None means the dataset could not be loaded. Every
    failure path returns ``final`` as the very same ``base`` object.
    """
    metrics = metrics or get_metrics_recorder()
    name = player.display_name or "<unnamed>"

    if entries is None:
        metrics.increment("blend.fetch_failed")
        return BlendedRatingResult(base=base, final=base)

    try:
        match = find_on_court_entry(entries, player)
        if match is None:
            metrics.increment("blend.no_match")
            logger.warning("No on-court entry for %s; using base ratings.", name)
            return BlendedRatingResult(base=base, final=base)

        team_on = build_team_on_ratings(match.entry)
        if team_on is None:
            metrics.increment("blend.no_ratings")
            logger.warning("On-court entry for %s has no usable ratings; using base ratings.", name)
            return BlendedRatingResult(base=base, final=base, match_strategy=match.strategy)

        final = blend_ratings(base, team_on, config)
    except Exception as exc:
        metrics.increment("blend.no_ratings")
        logger.warning("On-court blend failed for %s: %s", name, exc)
        return BlendedRatingResult(base=base, final=base)

    metrics.increment("blend.applied")
    logger.debug("Blended %s via %s match.", name, match.strategy)
    return BlendedRatingResult(base=base, final=final, team_on=team_on, match_strategy=match.strategy)


async def load_on_court_entries(source: Optional[OnCourtSource], season_code: Any) -> Optional[List[Dict]]:
    """Fetch the on-court dataset, or None when it is unavailable for any reason."""
    if source is None:
        logger.warning("No on-court source configured; using base ratings.")
        return None
    try:
        return await source.fetch_players(season_code)
    except (OnCourtFetchError, aiohttp.ClientError, asyncio.TimeoutError) as exc:
        logger.warning("On-court data unavailable for %s: %s", season_code, exc)
    except SchemaValidationError as exc:
        logger.warning("Malformed on-court payload for %s: %s", season_code, exc)
    except Exception as exc:
        logger.warning("Unexpected error loading on-court data for %s: %s", season_code, exc)
    return None


async def compute_blended_ratings(
    player_row: Any,
    team: Any,
    season_code: Any,
    source: Optional[OnCourtSource],
    config: Optional[Config] = None,
    metrics: Optional[MetricsRecorder] = None,
) -> BlendedRatingResult:
    """Base ratings overlaid with team-on-court efficiency; never raises on fetch problems."""
    player = normalize_player(player_row)
    base = compute_individual_ratings(player, team)
    entries = await load_on_court_entries(source, season_code)
    return blend_with_dataset(base, player, entries, config, metrics)
