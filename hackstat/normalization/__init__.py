"""Input adapters producing canonical, zero-defaulted records."""

from hackstat.normalization.team import OpponentStats, TeamPerGame, normalize_team
from hackstat.normalization.player import PlayerRow, normalize_player
from hackstat.normalization.name_utils import (
    OnCourtMatch,
    find_on_court_entry,
    normalize_name_for_matching,
)

__all__ = [
    "OpponentStats",
    "TeamPerGame",
    "normalize_team",
    "PlayerRow",
    "normalize_player",
    "OnCourtMatch",
    "find_on_court_entry",
    "normalize_name_for_matching",
]
