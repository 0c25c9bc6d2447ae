"""Unit tests for team and player normalization."""

import math

import pytest

from hackstat.normalization import (
    OpponentStats,
    PlayerRow,
    TeamPerGame,
    normalize_player,
    normalize_team,
)
from hackstat.normalization.team import team_minutes_per_game


class TestNormalizeTeam:
    """Tests for normalize_team."""

    def test_points_and_ratings(self, raw_team):
        """Test derived points and per-100 ratings from the fixture team."""
        team = normalize_team(raw_team)

        assert team.points == 79
        assert team.opp.points == 73
        assert team.off_rating == pytest.approx(79 / 75 * 100)
        assert team.def_rating == pytest.approx(73 / 75 * 100)
        assert team.net_rating == pytest.approx(6 / 75 * 100)
        assert team.pace == pytest.approx(75.0)

    def test_or_pct(self, raw_team):
        """Test offensive rebound share uses opponent defensive rebounds."""
        team = normalize_team(raw_team)
        assert team.or_pct == pytest.approx(10 / 34)

    def test_zero_possessions_rating_is_zero(self, raw_team):
        """Test off_rating falls back to 0 without possessions."""
        raw_team["offPossessions"] = 0
        raw_team["defPossessions"] = 0
        team = normalize_team(raw_team)

        assert team.off_rating == 0.0
        assert team.def_rating == 0.0

    def test_missing_and_bad_values_become_zero(self):
        """Test that non-numeric, None and non-finite values coerce to 0."""
        team = normalize_team({
            "madeTwo": "abc",
            "madeThree": None,
            "madeFt": float("nan"),
            "assists": "4",
            "turnovers": float("inf"),
        })

        assert team.made_two == 0.0
        assert team.made_three == 0.0
        assert team.made_ft == 0.0
        assert team.assists == 4.0
        assert team.turnovers == 0.0
        assert team.games == 1.0

    def test_non_mapping_input(self):
        """Test that garbage input yields an all-zero record."""
        team = normalize_team(None)
        assert team == TeamPerGame()
        assert team.minutes == 200.0

    def test_separate_opponent_mapping(self, raw_team):
        """Test opponent values from a separate unprefixed mapping."""
        opponent = {
            key[3].lower() + key[4:]: value
            for key, value in raw_team.items()
            if key.startswith("opp")
        }
        own = {key: value for key, value in raw_team.items() if not key.startswith("opp")}

        assert normalize_team(own, opponent=opponent) == normalize_team(raw_team)

    def test_normalized_record_passes_through(self, raw_team):
        """Test that a TeamPerGame is returned unchanged."""
        team = normalize_team(raw_team)
        assert normalize_team(team) is team

    def test_to_dict_includes_derived(self, raw_team):
        """Test serialization carries derived values."""
        payload = normalize_team(raw_team).to_dict()

        assert payload["points"] == 79
        assert payload["opp"]["points"] == 73
        assert payload["opp"]["fga"] == 62
        assert "pace" in payload


class TestTeamMinutes:
    """Tests for team minutes per game."""

    def test_missing_seconds_uses_default_game(self):
        assert team_minutes_per_game(None, 1) == 200.0

    def test_longer_games(self):
        """Test overtime-heavy seasons raise team minutes above the floor."""
        assert team_minutes_per_game(2 * 45 * 60, 2) == pytest.approx(225.0)

    def test_short_games_floored(self):
        assert team_minutes_per_game(30 * 60, 1) == 200.0

    def test_normalize_team_sets_minutes(self):
        team = normalize_team({"games": 2, "secondsPlayed": 2 * 45 * 60})
        assert team.minutes == pytest.approx(225.0)


class TestOpponentStats:
    """Tests for OpponentStats."""

    def test_totals(self):
        opp = OpponentStats(made_two=10, attempted_two=20, made_three=3, attempted_three=9, made_ft=5)

        assert opp.fgm == 13
        assert opp.fga == 29
        assert opp.points == 34


class TestNormalizePlayer:
    """Tests for normalize_player."""

    def test_stat_fields(self, raw_player):
        player = normalize_player(raw_player)

        assert player.minutes == 30
        assert player.points == 20
        assert player.fgm == 7
        assert player.fga == 15
        assert player.ft_made == 4
        assert player.ft_attempted == 5
        assert player.assists == 3
        assert player.turnovers == 2
        assert player.steals == 0

    def test_identity_from_nested_player(self, raw_defender):
        player = normalize_player(raw_defender)

        assert player.name == "SMITH, ALEX"
        assert player.code == "P007"
        assert player.display_name == "SMITH, ALEX"
        assert player.fouls == 3

    def test_identity_fallbacks(self):
        """Test flat identity keys when no nested player mapping exists."""
        player = normalize_player({"playerName": "Jane Doe", "playerCode": "P1", "playerSlug": "jane-doe"})

        assert player.name == "Jane Doe"
        assert player.code == "P1"
        assert player.slug == "jane-doe"

    def test_first_last_display_name(self):
        player = normalize_player({"player": {"firstName": "Jane", "lastName": "Doe"}})
        assert player.display_name == "Jane Doe"

    def test_games_played_floor(self):
        player = normalize_player({"gamesPlayed": 0})
        assert player.games_played == 1.0

    def test_bad_values(self):
        player = normalize_player({"pointsScored": "n/a", "assists": float("nan")})

        assert player.points == 0.0
        assert player.assists == 0.0
        assert not math.isnan(player.assists)

    def test_non_mapping_input(self):
        assert normalize_player("oops") == PlayerRow()

    def test_player_row_passes_through(self, raw_player):
        player = normalize_player(raw_player)
        assert normalize_player(player) is player

    def test_to_dict(self, raw_defender):
        payload = normalize_player(raw_defender).to_dict()

        assert payload["steals"] == 2
        assert payload["code"] == "P007"
