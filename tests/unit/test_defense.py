"""Unit tests for individual defensive rating."""

import math

import pytest

from hackstat.normalization import normalize_player, normalize_team
from hackstat.ratings import compute_individual_defense


class TestIndividualDefense:
    """Tests for compute_individual_defense."""

    def test_fixture_player(self, raw_player, raw_team):
        result = compute_individual_defense(normalize_player(raw_player), normalize_team(raw_team))

        assert result.stops == pytest.approx(3.1178, abs=1e-3)
        assert result.stop_pct == pytest.approx(0.25237, abs=1e-3)
        assert result.team_def_rating == pytest.approx(73 / 75 * 100)
        assert result.def_rating == pytest.approx(110.87, abs=0.05)

    def test_intermediates(self, raw_player, raw_team):
        inter = compute_individual_defense(
            normalize_player(raw_player), normalize_team(raw_team)
        ).intermediates

        assert inter["opp_fg_pct"] == pytest.approx(26 / 62)
        assert inter["opp_or_pct"] == pytest.approx(9 / 34)
        assert inter["fm_weight"] == pytest.approx(0.66735, abs=1e-4)
        assert inter["stop1"] == 0.0
        assert inter["stop2_to"] == pytest.approx(0.75)
        assert inter["stop2_fg"] == pytest.approx(2.3678, abs=1e-3)
        assert inter["stop2_ft"] == 0.0
        assert inter["opp_poss"] == pytest.approx(82.36)
        assert inter["opp_scoring_poss"] == pytest.approx(33.0737, abs=1e-3)

    def test_defender_stops(self, raw_defender, raw_team):
        """Test steals, blocks, defensive rebounds and fouls feed stops."""
        inter = compute_individual_defense(
            normalize_player(raw_defender), normalize_team(raw_team)
        ).intermediates
        fm_weight = inter["fm_weight"]
        expected_stop1 = 2 + 1 * fm_weight * (1 - 1.07 * 9 / 34) + 5 * (1 - fm_weight)

        assert inter["stop1"] == pytest.approx(expected_stop1)
        assert inter["stop2_ft"] == pytest.approx(3 / 20 * 0.4 * 19 * (5 / 19) ** 2)

    def test_more_stops_means_better_rating(self, raw_player, raw_defender, raw_team):
        team = normalize_team(raw_team)
        scorer = compute_individual_defense(normalize_player(raw_player), team)
        defender = compute_individual_defense(normalize_player(raw_defender), team)

        assert defender.stops > scorer.stops
        assert defender.def_rating < scorer.def_rating

    def test_zero_minutes_has_no_rating(self, raw_team):
        result = compute_individual_defense(normalize_player({"minutesPlayed": 0}), normalize_team(raw_team))

        assert result.def_rating is None
        assert math.isfinite(result.stops)

    def test_missing_defensive_possessions(self, raw_player, raw_team):
        """Test the baseline falls back to the per-game team rating."""
        raw_team["defPossessions"] = 0
        result = compute_individual_defense(normalize_player(raw_player), normalize_team(raw_team))

        assert result.team_def_rating == 0.0
        assert result.def_rating is not None
        assert math.isfinite(result.def_rating)

    def test_empty_team(self, raw_player):
        """Test no opponent possessions gives no rating."""
        result = compute_individual_defense(normalize_player(raw_player), normalize_team({}))

        assert result.def_rating is None
        assert result.stop_pct == 0.0
