"""Shared fixtures for surf conditions tests."""

import pytest

from surf_conditions.models import (
    BreakType,
    Coordinates,
    Difficulty,
    SpotConfiguration,
    SurfConditions,
)


@pytest.fixture
def malibu() -> SpotConfiguration:
    return SpotConfiguration(
        name="Malibu",
        type=BreakType.POINT_BREAK,
        aspect=225,
        optimal_wave_height=(1.0, 2.5),
        optimal_swell_direction=(200, 280),
        difficulty=Difficulty.INTERMEDIATE,
    )


@pytest.fixture
def scenario_a() -> SurfConditions:
    """Clean, well-sized swell with light offshore wind at Malibu."""
    return SurfConditions(
        wave_height=1.8,
        wave_period=10,
        swell_direction=230,
        wind_speed=2,
        wind_direction=45,
        location="Malibu",
    )


@pytest.fixture
def malibu_coordinates() -> Coordinates:
    return Coordinates(name="Malibu", lat=34.0259, lon=-118.7798, country_code="US")
