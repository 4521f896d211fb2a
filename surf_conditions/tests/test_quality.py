"""Tests for surf quality scoring."""

import pytest

from surf_conditions.models import ScoreBreakdown, SpotConfiguration, SurfConditions
from surf_conditions.quality import (
    RATING_LADDER,
    WEIGHTS,
    angular_difference,
    calculate_overall_score,
    describe,
    score_swell_direction,
    score_wave_height,
    score_wave_period,
    score_wind,
    weighted_score,
    wind_label,
)

RATINGS = [label for _, label, _ in RATING_LADDER]


class TestWaveHeight:
    """Test wave height scoring against the optimal range."""

    def test_inside_range(self):
        assert score_wave_height(1.8, (1.0, 2.5)) == 1.0
        assert score_wave_height(1.0, (1.0, 2.5)) == 1.0
        assert score_wave_height(2.5, (1.0, 2.5)) == 1.0

    def test_too_small(self):
        assert score_wave_height(0.4, (1.0, 2.5)) == 0.1
        assert score_wave_height(0.8, (1.0, 2.5)) == pytest.approx(0.48)

    def test_too_big(self):
        assert score_wave_height(3.0, (1.0, 2.5)) == pytest.approx(0.88)
        assert score_wave_height(4.0, (1.0, 2.5)) == 0.2

    def test_range_and_monotonicity(self):
        """Scores stay in [0.1, 1] and fall away from the optimal range."""
        optimal = (1.0, 2.5)
        heights = [i * 0.05 for i in range(200)]
        scores = [score_wave_height(h, optimal) for h in heights]

        assert all(0.1 <= s <= 1.0 for s in scores)

        below = [s for h, s in zip(heights, scores) if h <= optimal[0]]
        above = [s for h, s in zip(heights, scores) if h >= optimal[1]]
        assert below == sorted(below)
        assert above == sorted(above, reverse=True)


class TestWavePeriod:
    """Test swell period bands."""

    def test_bands(self):
        assert score_wave_period(5) == 0.1
        assert score_wave_period(6) == 0.3
        assert score_wave_period(8) == 0.5
        assert score_wave_period(10) == 0.7
        assert score_wave_period(12) == 0.9
        assert score_wave_period(16) == 1.0

    def test_non_decreasing(self):
        scores = [score_wave_period(p / 2) for p in range(1, 50)]
        assert scores == sorted(scores)


class TestWind:
    """Test wind scoring relative to the shore aspect."""

    def test_offshore(self):
        # Aspect 225 means offshore wind blows toward 45
        assert score_wind(2, 45, 230, 225) == 1.0
        assert score_wind(4, 45, 230, 225) == 0.9
        assert score_wind(7, 45, 230, 225) == 0.7
        assert score_wind(15, 45, 230, 225) == 0.4

    def test_cross_shore(self):
        assert score_wind(3, 135, 230, 225) == 0.7
        assert score_wind(5, 135, 230, 225) == 0.5
        assert score_wind(10, 135, 230, 225) == 0.3

    def test_onshore(self):
        assert score_wind(2, 225, 230, 225) == 0.6
        assert score_wind(4, 225, 230, 225) == 0.4
        assert score_wind(10, 225, 230, 225) == 0.2

    def test_directions_wrap(self):
        """0° and 360° are the same wind direction."""
        for aspect in range(0, 360, 15):
            for speed in (1, 4, 7, 12):
                assert score_wind(speed, 0, 200, aspect) == score_wind(speed, 360, 200, aspect)

    def test_swell_direction_ignored(self):
        assert score_wind(4, 45, 0, 225) == score_wind(4, 45, 180, 225)

    def test_labels(self):
        assert wind_label(1.0) == "Favorable"
        assert wind_label(0.7) == "Marginal"
        assert wind_label(0.5) == "Marginal"
        assert wind_label(0.4) == "Poor"


class TestSwellDirection:
    """Test swell direction scoring, including ranges through north."""

    def test_plain_range(self):
        assert score_swell_direction(230, (200, 280)) == 1.0
        assert score_swell_direction(170, (200, 280)) == 0.8
        assert score_swell_direction(140, (200, 280)) == 0.5
        assert score_swell_direction(110, (200, 280)) == 0.3
        assert score_swell_direction(20, (200, 280)) == 0.1

    def test_wrapping_range(self):
        assert score_swell_direction(10, (350, 30)) == 1.0
        assert score_swell_direction(0, (350, 30)) == 1.0
        assert score_swell_direction(360, (350, 30)) == 1.0
        assert score_swell_direction(340, (350, 30)) == 0.8
        assert score_swell_direction(180, (350, 30)) == 0.1

    def test_angular_difference(self):
        assert angular_difference(350, 10) == 20
        assert angular_difference(0, 360) == 0
        assert angular_difference(90, 270) == 180


class TestOverallScore:
    """Test the weighted combination and rating."""

    def test_weights_sum_to_one(self):
        assert sum(WEIGHTS.values()) == pytest.approx(1.0)

    def test_clean_offshore_day(self, scenario_a, malibu):
        """Every factor but period is ideal: 0.925 weighted."""
        quality = calculate_overall_score(scenario_a, malibu)

        assert quality.breakdown == ScoreBreakdown(
            wave_height=1.0, wave_period=0.7, wind=1.0, swell_direction=1.0
        )
        assert quality.overall_score == 9
        assert quality.rating == "Epic"
        assert quality.description == (
            "World-class conditions! Everything is firing. great size and clean conditions."
        )

    def test_strong_offshore_wind_drops_rating(self, scenario_a, malibu):
        windy = scenario_a.model_copy(update={"wind_speed": 15})
        calm = calculate_overall_score(scenario_a, malibu)
        quality = calculate_overall_score(windy, malibu)

        assert quality.breakdown.wind == 0.4
        assert quality.overall_score == 7
        assert quality.rating == "Very Good"
        assert "wind is problematic" in quality.description
        assert RATINGS.index(quality.rating) - RATINGS.index(calm.rating) >= 2

    def test_wrapping_spot(self):
        """A north-facing reef with swell from due north scores full direction."""
        spot = SpotConfiguration(
            name="North Reef",
            type="reef_break",
            aspect=0,
            optimal_wave_height=(1.5, 3.0),
            optimal_swell_direction=(350, 30),
        )
        conditions = SurfConditions(
            wave_height=2.0, wave_period=14, swell_direction=0, wind_speed=3, wind_direction=180,
            location="North Reef",
        )

        quality = calculate_overall_score(conditions, spot)

        assert quality.breakdown.swell_direction == 1.0
        assert quality.breakdown.wind == 0.9
        assert quality.overall_score == 9

    def test_clamped_to_bounds(self):
        assert weighted_score(ScoreBreakdown(wave_height=0, wave_period=0, wind=0, swell_direction=0)) == 1
        assert weighted_score(ScoreBreakdown(wave_height=1, wave_period=1, wind=1, swell_direction=1)) == 10

    def test_worst_conditions(self, malibu):
        conditions = SurfConditions(
            wave_height=0.2, wave_period=4, swell_direction=45, wind_speed=12, wind_direction=225,
            location="Malibu",
        )
        quality = calculate_overall_score(conditions, malibu)

        assert quality.overall_score == 1
        assert quality.rating == "Flat/Blown Out"
        assert "waves are too small" in quality.description

    def test_deterministic(self, scenario_a, malibu):
        assert calculate_overall_score(scenario_a, malibu) == calculate_overall_score(scenario_a, malibu)

    def test_describe_without_details(self):
        breakdown = ScoreBreakdown(wave_height=0.6, wave_period=0.5, wind=0.7, swell_direction=1.0)
        assert describe(6, breakdown) == ("Good", "Solid surf with fun waves.")
