"""Rule-based summaries used when no narrative can be generated."""

import logging
from typing import Optional

from surf_conditions.adapters.base import COMPASS_POINTS
from surf_conditions.models import (
    DataSource,
    MarineConditions,
    SpotConfiguration,
    SurfQuality,
)
from surf_conditions.quality import wind_label

logger = logging.getLogger(__name__)

SOURCE_NAMES = {
    DataSource.NWS: "NOAA National Weather Service",
    DataSource.STORMGLASS: "Stormglass",
    DataSource.WORLD_WEATHER: "World Weather Online",
    DataSource.OPENWEATHER: "OpenWeather (waves estimated from wind)",
    DataSource.UNAVAILABLE: "default values",
}


def compass_label(degrees: float) -> str:
    """16-point compass label for a direction."""
    return COMPASS_POINTS[int((degrees % 360) / 22.5 + 0.5) % 16]


def wind_conditions(marine: MarineConditions, quality: Optional[SurfQuality] = None) -> str:
    """Wind line, e.g. '3.2 m/s from 45° (Favorable)'."""
    text = f"{marine.wind.speed:.1f} m/s from {marine.wind.direction:g}°"
    if quality is not None:
        text += f" ({wind_label(quality.breakdown.wind)})"
    return text


def weather_summary(marine: MarineConditions) -> str:
    weather = marine.weather
    return f"{weather.description}, {weather.temperature:.0f}°C"


def generate_summary(
    location: str,
    marine: MarineConditions,
    spot: SpotConfiguration,
    quality: SurfQuality,
) -> str:
    """
    Generate a templated conditions narrative from the numeric findings.

    Args:
        location: Requested location
        marine: Conditions the score was computed from
        spot: Spot configuration used for scoring
        quality: Calculator result

    Returns:
        Human-readable paragraph
    """
    waves = marine.waves
    parts = []

    if marine.data_source == DataSource.UNAVAILABLE:
        parts.append(
            f"Live marine data is unavailable for {location}; "
            f"this outlook uses conservative default conditions."
        )

    parts.append(f"{location}: {quality.rating} ({quality.overall_score}/10).")

    parts.append(
        f"Waves around {waves.significant_height:.1f}m with "
        f"{waves.primary_swell_height:.1f}m of swell at {waves.primary_swell_period:.0f}s "
        f"from the {compass_label(waves.primary_swell_direction)} "
        f"({waves.primary_swell_direction:.0f}°)."
    )

    parts.append(
        f"Wind {marine.wind.speed:.1f} m/s from the {compass_label(marine.wind.direction)}, "
        f"{wind_label(quality.breakdown.wind).lower()} for this "
        f"{spot.type.value.replace('_', ' ')}."
    )

    if marine.tides is not None:
        parts.append(f"Tide at {marine.tides.current_height:.1f}m.")

    parts.append(f"Forecast: {weather_summary(marine)}.")
    parts.append(quality.description)
    parts.append(f"Data: {SOURCE_NAMES[marine.data_source]}.")

    return " ".join(parts)
