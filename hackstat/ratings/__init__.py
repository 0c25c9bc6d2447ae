"""Individual rating pipeline: factors -> offense/defense -> composer -> blender."""

from hackstat.ratings.factors import TeamFactors, compute_team_factors
from hackstat.ratings.offense import OffenseResult, compute_individual_offense
from hackstat.ratings.defense import DefenseResult, compute_individual_defense
from hackstat.ratings.composer import RatingResult, compute_individual_ratings
from hackstat.ratings.blend import (
    BlendedRatingResult,
    TeamOnRatings,
    blend_offense,
    blend_defense,
    blend_ratings,
    blend_with_dataset,
    build_team_on_ratings,
    compute_blended_ratings,
)
from hackstat.ratings.roster import rate_roster, rate_roster_blended
from hackstat.ratings.team_summary import team_efficiency_summary

__all__ = [
    "TeamFactors",
    "compute_team_factors",
    "OffenseResult",
    "compute_individual_offense",
    "DefenseResult",
    "compute_individual_defense",
    "RatingResult",
    "compute_individual_ratings",
    "BlendedRatingResult",
    "TeamOnRatings",
    "blend_offense",
    "blend_defense",
    "blend_ratings",
    "blend_with_dataset",
    "build_team_on_ratings",
    "compute_blended_ratings",
    "rate_roster",
    "rate_roster_blended",
    "team_efficiency_summary",
]
