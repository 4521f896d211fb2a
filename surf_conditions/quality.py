"""
Surf quality scoring.

Pure functions turning normalized conditions and a spot configuration into
a 1-10 score. Each factor is scored in [0, 1] and combined with fixed
weights; directions are compared on the circle, so ranges may wrap past
north (e.g. 350-30°).
"""

import math

from surf_conditions.models import (
    ScoreBreakdown,
    SpotConfiguration,
    SurfConditions,
    SurfQuality,
)

WEIGHTS = {
    "wave_height": 0.30,
    "wave_period": 0.25,
    "wind": 0.35,
    "swell_direction": 0.10,
}

MIN_SCORE = 1
MAX_SCORE = 10

# (minimum score, rating, base sentence), best first
RATING_LADDER = [
    (9, "Epic", "World-class conditions! Everything is firing."),
    (8, "Excellent", "Outstanding surf with great waves and conditions."),
    (7, "Very Good", "Really good surf worth making the effort for."),
    (6, "Good", "Solid surf with fun waves."),
    (5, "Fair", "Decent waves, some fun to be had."),
    (4, "Poor-Fair", "Marginal conditions, better than nothing."),
    (3, "Poor", "Poor conditions, not really worth it."),
    (2, "Very Poor", "Very poor surf, maybe for beginners only."),
    (0, "Flat/Blown Out", "No surf or completely blown out conditions."),
]


def angular_difference(a: float, b: float) -> float:
    """Smallest angle between two compass directions, in [0, 180]."""
    diff = abs(a % 360 - b % 360)
    return min(diff, 360 - diff)


def score_wave_height(height: float, optimal: tuple[float, float]) -> float:
    """Score wave height against the spot's optimal [min, max] range."""
    low, high = optimal

    if height < low * 0.5:
        return 0.1  # way too small
    if height < low:
        return (height / low) * 0.6  # too small
    if height <= high:
        return 1.0
    if height <= high * 1.5:
        return max(0.4, 1 - ((height - high) / high) * 0.6)  # getting big
    return 0.2  # too big


def score_wave_period(period: float) -> float:
    if period < 6:
        return 0.1  # wind chop
    if period < 8:
        return 0.3
    if period < 10:
        return 0.5
    if period < 12:
        return 0.7
    if period < 16:
        return 0.9
    return 1.0  # groundswell


def score_wind(
    wind_speed: float,
    wind_direction: float,
    swell_direction: float,
    shore_aspect: float,
) -> float:
    """
    Score wind by its angle to the offshore direction and its speed.

    swell_direction is accepted for interface compatibility and not used.
    """
    offshore_direction = (shore_aspect + 180) % 360
    diff = angular_difference(wind_direction, offshore_direction)

    if diff <= 45:
        # Offshore: best, unless too strong
        if wind_speed <= 2:
            return 1.0
        if wind_speed <= 5:
            return 0.9
        if wind_speed <= 8:
            return 0.7
        return 0.4
    if diff <= 135:
        # Cross-shore
        if wind_speed <= 3:
            return 0.7
        if wind_speed <= 6:
            return 0.5
        return 0.3
    # Onshore
    if wind_speed <= 2:
        return 0.6
    if wind_speed <= 5:
        return 0.4
    return 0.2


def in_direction_range(direction: float, optimal: tuple[float, float]) -> bool:
    """Inclusive range test; a range with min > max wraps through north."""
    direction = direction % 360
    low, high = optimal[0] % 360, optimal[1] % 360
    if low <= high:
        return low <= direction <= high
    return direction >= low or direction <= high


def score_swell_direction(swell_direction: float, optimal: tuple[float, float]) -> float:
    if in_direction_range(swell_direction, optimal):
        return 1.0

    distance = min(
        angular_difference(swell_direction, optimal[0]),
        angular_difference(swell_direction, optimal[1]),
    )
    if distance <= 30:
        return 0.8
    if distance <= 60:
        return 0.5
    if distance <= 90:
        return 0.3
    return 0.1


def score_breakdown(conditions: SurfConditions, spot: SpotConfiguration) -> ScoreBreakdown:
    return ScoreBreakdown(
        wave_height=score_wave_height(conditions.wave_height, spot.optimal_wave_height),
        wave_period=score_wave_period(conditions.wave_period),
        wind=score_wind(
            conditions.wind_speed,
            conditions.wind_direction,
            conditions.swell_direction,
            spot.aspect,
        ),
        swell_direction=score_swell_direction(
            conditions.swell_direction, spot.optimal_swell_direction
        ),
    )


def weighted_score(breakdown: ScoreBreakdown) -> int:
    """Weighted sum scaled to 1-10, rounding halves up."""
    total = sum(getattr(breakdown, factor) * weight for factor, weight in WEIGHTS.items())
    score = math.floor(total * 10 + 0.5)
    return max(MIN_SCORE, min(MAX_SCORE, score))


def describe(score: int, breakdown: ScoreBreakdown) -> tuple[str, str]:
    """
    Rating label and description for a score.

    Returns:
        Tuple of (rating, description)
    """
    rating, sentence = next(
        (label, text) for minimum, label, text in RATING_LADDER if score >= minimum
    )

    details = []
    if breakdown.wind < 0.5:
        details.append("wind is problematic")
    if breakdown.wave_height < 0.4:
        details.append("waves are too small")
    if breakdown.wave_height > 0.9 and breakdown.wind > 0.7:
        details.append("great size and clean conditions")
    if breakdown.wave_period > 0.8:
        details.append("excellent wave energy")

    if details:
        return rating, f"{sentence} {', '.join(details)}."
    return rating, sentence


def calculate_overall_score(
    conditions: SurfConditions, spot: SpotConfiguration
) -> SurfQuality:
    """
    Score conditions at a spot.

    Args:
        conditions: Normalized conditions
        spot: Spot configuration

    Returns:
        SurfQuality with score in [1, 10], breakdown, rating and description
    """
    breakdown = score_breakdown(conditions, spot)
    score = weighted_score(breakdown)
    rating, description = describe(score, breakdown)

    return SurfQuality(
        overall_score=score,
        rating=rating,
        breakdown=breakdown,
        description=description,
    )


def wind_label(wind_score: float) -> str:
    if wind_score > 0.7:
        return "Favorable"
    if wind_score > 0.4:
        return "Marginal"
    return "Poor"
